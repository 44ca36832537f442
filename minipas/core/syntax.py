"""Recursive-descent parser for minipas. Each grammar rule below is implemented by the Parser method of the same name,
with one token of lookahead:

```
<program>              ::= <compound_statement> "."
<compound_statement>   ::= "BEGIN" <statement_list> "END"
<statement_list>       ::= <statement> (";" <statement>)*
<statement>            ::= <compound_statement> | <assignment_statement> | <empty>
<assignment_statement> ::= <variable> ":=" <expr>
<variable>             ::= <id>
<expr>                 ::= <term> (("+" | "-") <term>)*      ; left-associative
<term>                 ::= <factor> (("*" | "/") <factor>)*  ; left-associative
<factor>               ::= ("+" | "-") <factor>              ; unary, nests to the right: --x = -(-(x))
                         | <integer> | "(" <expr> ")" | <variable>
<empty>                ::=                                   ; no-op
```

BEGIN/END only group statements: every assignment writes to the one global store.
"""

import logging

from minipas.core.lexical import Lexer, Token, TokenKind
from minipas.core.tree import Node
from minipas.lang.error import ParseError

logger = logging.getLogger(__name__)


class Parser:
    """Pulls tokens lazily from a Lexer while descending the grammar and builds the tree."""

    def __init__(self, text):
        self.lexer = Lexer(text)
        self.current_token = self.lexer.next_token()

    def error(self, msg, exprs=None):
        token = self.current_token
        return ParseError(msg, exprs, pos=token.pos, length=self._width(token))

    def eat(self, kind):
        """Consumes the current token if it is of the given kind, otherwise raises a ParseError."""
        if not self.current_token.matches(kind):
            raise self.error("expected {} but found {}", (kind.value, self.current_token))
        self.current_token = self.lexer.next_token()

    def parse(self):
        """Parses a whole program and returns its root node. Nothing may follow the terminating '.'."""
        try:
            node = self.program()
        except RecursionError:
            raise self.error("program nested too deeply near {}", self.current_token)

        if not self.current_token.matches(TokenKind.EOF):
            raise self.error("unexpected {} after end of program", self.current_token)

        logger.debug("parsed program of %d characters", len(self.lexer.text))
        return node

    def program(self):
        node = self.compound_statement()
        self.eat(TokenKind.DOT)
        return Node.group([node])

    def compound_statement(self):
        self.eat(TokenKind.BEGIN)
        nodes = self.statement_list()
        self.eat(TokenKind.END)
        return Node.group(nodes)

    def statement_list(self):
        nodes = [self.statement()]
        while self.current_token.matches(TokenKind.SEMI):
            self.eat(TokenKind.SEMI)
            nodes.append(self.statement())

        if self.current_token.matches(TokenKind.ID):
            raise self.error("expected SEMI before {}", self.current_token)

        return nodes

    def statement(self):
        if self.current_token.matches(TokenKind.BEGIN):
            return self.compound_statement()
        elif self.current_token.matches(TokenKind.ID):
            return self.assignment_statement()
        return self.empty()

    def assignment_statement(self):
        left = self.variable()
        token = self.current_token
        self.eat(TokenKind.ASSIGN)
        return Node(token, [left, self.expr()])

    def variable(self):
        node = Node(self.current_token)
        self.eat(TokenKind.ID)
        return node

    def empty(self):
        return Node.group()

    def expr(self):
        node = self.term()
        while self.current_token.matches(TokenKind.ADD_OP):
            token = self.current_token
            self.eat(TokenKind.ADD_OP)
            node = Node(token, [node, self.term()])
        return node

    def term(self):
        node = self.factor()
        while self.current_token.matches(TokenKind.MUL_OP):
            token = self.current_token
            self.eat(TokenKind.MUL_OP)
            node = Node(token, [node, self.factor()])
        return node

    def factor(self):
        token = self.current_token

        if token.matches(TokenKind.ADD_OP):
            self.eat(TokenKind.ADD_OP)
            return Node(Token(TokenKind.UNARY, token.value, token.pos), [self.factor()])
        elif token.matches(TokenKind.INTEGER):
            self.eat(TokenKind.INTEGER)
            return Node(token)
        elif token.matches(TokenKind.LPAREN):
            self.eat(TokenKind.LPAREN)
            node = self.expr()
            self.eat(TokenKind.RPAREN)
            return node
        elif token.matches(TokenKind.ID):
            return self.variable()

        raise self.error("unexpected {} in expression", token)

    def _width(self, token):
        """Number of source characters token spans, used to underline it."""
        if token.pos is None or token.matches(TokenKind.EOF):
            return 1
        elif token.kind in (TokenKind.ID, TokenKind.INTEGER):
            return len(str(token.value))
        elif token.kind in (TokenKind.BEGIN, TokenKind.END):
            return len(token.kind.value)
        elif token.matches(TokenKind.ASSIGN):
            return 2
        return 1
