"""minipas: tree-walking interpreter for a tiny Pascal-like language.

A program is one BEGIN ... END block (blocks may nest) terminated by a period, holding semicolon-separated assignments
of integer arithmetic expressions. Basic program flow:
    1. Lexer: classifies source characters into tokens, one token at a time (see core/lexical.py)
    2. Parser: recursive descent over the token stream, produces an abstract syntax tree (see core/syntax.py)
    3. Evaluator: walks the tree, assigning into a single global variable store (see core/evaluator.py)

Acquiring source text and presenting results are left to lang/session.py, lang/shell.py and main.py.
"""

import logging

from minipas.core.evaluator import evaluate
from minipas.core.syntax import Parser

logging.getLogger(__name__).addHandler(logging.NullHandler())


def interpret(source):
    """Parses and evaluates source, returning the final variable store. Raises a MinipasError on failure."""
    return evaluate(Parser(source).parse())
