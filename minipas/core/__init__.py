"""Lexer, parser, syntax tree and evaluator for minipas."""
