"""Lexical analysis for minipas. Converts raw source text into classified tokens, one token per request.

Tokens can be loosely defined as follows:

```
<id>      ::= <letter> (<letter> | <digit>)*  ; "BEGIN" and "END" are reserved (case-sensitive)
<integer> ::= <digit>+                        ; unsigned, must fit in a signed 64-bit integer
<add_op>  ::= "+" | "-"
<mul_op>  ::= "*" | "/"
<assign>  ::= ":="
<punct>   ::= ";" | "." | "(" | ")"
```

Whitespace (spaces and newlines) separates tokens but never becomes one. There are no comments.
"""

import enum
import dataclasses as dc

from minipas.lang.error import LexError

INT_MAX = 2 ** 63 - 1
INT_MIN = -2 ** 63


class TokenKind(enum.Enum):
    """Tag of a token, independent of its payload. Grammar dispatch only ever looks at this."""
    EOF = "EOF"
    ADD_OP = "ADD_OP"    # payload: "+" or "-"
    MUL_OP = "MUL_OP"    # payload: "*" or "/"
    LPAREN = "LPAREN"
    RPAREN = "RPAREN"
    INTEGER = "INTEGER"  # payload: int
    UNARY = "UNARY"      # payload: "+" or "-", only created by the parser
    BEGIN = "BEGIN"
    END = "END"
    DOT = "DOT"
    ASSIGN = "ASSIGN"
    SEMI = "SEMI"
    ID = "ID"            # payload: name
    OTHER = "OTHER"      # synthetic grouping/no-op nodes


KEYWORDS = {
    "BEGIN": TokenKind.BEGIN,
    "END": TokenKind.END,
}

SINGLE_CHARS = {
    ";": TokenKind.SEMI,
    ".": TokenKind.DOT,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    "+": TokenKind.ADD_OP,
    "-": TokenKind.ADD_OP,
    "*": TokenKind.MUL_OP,
    "/": TokenKind.MUL_OP,
}

WHITESPACE = " \n"

LABELS = {
    TokenKind.EOF: "EOF",
    TokenKind.LPAREN: "(",
    TokenKind.RPAREN: ")",
    TokenKind.BEGIN: "BEGIN",
    TokenKind.END: "END",
    TokenKind.DOT: "DOT",
    TokenKind.ASSIGN: "ASSIGN",
    TokenKind.SEMI: "SEMI",
    TokenKind.OTHER: "Other",
}


@dc.dataclass(frozen=True)
class Token:
    kind: TokenKind
    value: object = None
    pos: int = None  # offset of the first character in the source, None for synthetic tokens

    def matches(self, kind):
        """Whether or not this token is of the given kind. Payloads are ignored."""
        return self.kind is kind

    def __str__(self):
        if self.kind is TokenKind.INTEGER:
            return f"INTEGER: {self.value}"
        elif self.kind in (TokenKind.ADD_OP, TokenKind.MUL_OP):
            return f"operation: {self.value}"
        elif self.kind is TokenKind.UNARY:
            return f"UNARY: {self.value}"
        elif self.kind is TokenKind.ID:
            return f"variable: {self.value}"
        return LABELS[self.kind]


def is_letter(char):
    return char.isascii() and char.isalpha()


def is_digit(char):
    return char in "0123456789"


class Lexer:
    """Hands out tokens of text on demand. Keeps no lookahead of its own: the caller holds the current token."""

    def __init__(self, text):
        self.text = text
        self.pos = 0

    def reset(self):
        """Rewinds the cursor to the beginning of the source."""
        self.pos = 0

    def next_token(self):
        """Returns the token starting at the cursor and advances the cursor past it."""
        while self.pos < len(self.text) and self.text[self.pos] in WHITESPACE:
            self.pos += 1

        if self.pos >= len(self.text):
            return Token(TokenKind.EOF, pos=self.pos)

        char = self.text[self.pos]
        start = self.pos

        if is_letter(char):
            return self._identifier()
        elif is_digit(char):
            return self._integer()
        elif char == ":":
            if self.text[start + 1:start + 2] != "=":
                raise LexError("expected '=' after ':' at position {}", start, pos=start)
            self.pos += 2
            return Token(TokenKind.ASSIGN, pos=start)
        elif char in SINGLE_CHARS:
            self.pos += 1
            kind = SINGLE_CHARS[char]
            value = char if kind in (TokenKind.ADD_OP, TokenKind.MUL_OP) else None
            return Token(kind, value, start)

        raise LexError("unrecognized character '{}' at position {}", (char, start), pos=start)

    def tokens(self):
        """Yields every remaining token, EOF included."""
        while True:
            token = self.next_token()
            yield token
            if token.matches(TokenKind.EOF):
                return

    def _identifier(self):
        start = self.pos
        while self.pos < len(self.text) and (is_letter(self.text[self.pos]) or is_digit(self.text[self.pos])):
            self.pos += 1

        name = self.text[start:self.pos]
        if name in KEYWORDS:
            return Token(KEYWORDS[name], pos=start)
        return Token(TokenKind.ID, name, start)

    def _integer(self):
        start = self.pos
        while self.pos < len(self.text) and is_digit(self.text[self.pos]):
            self.pos += 1

        literal = self.text[start:self.pos]
        value = int(literal)
        if value > INT_MAX:
            raise LexError("integer literal '{}' out of range", literal, pos=start, length=len(literal))
        return Token(TokenKind.INTEGER, value, start)
