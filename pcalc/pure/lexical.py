"""Tokens and lexer for the pcalc language, a small Pascal-like statement/expression language.

The `pure` directory contains the language core (tokens, syntax tree, parser, evaluator): nothing in it prints or
reads input. The lexer turns one line of source into a lazy sequence of Tokens:

```
<integer>    ::= <digit>+                  ; unsigned, wraps around at 2**32
<real>       ::= <digit>+ "." <digit>+     ; kept as source text, never evaluated
<identifier> ::= (<letter> | "_") (<letter> | <digit> | "_")*
<keyword>    ::= PROGRAM | VAR | BEGIN | END | INTEGER | REAL | DIV   ; case-insensitive
<comment>    ::= "{" <char>* "}"           ; skipped, no nesting
<symbol>     ::= "." | "," | ":" | ":=" | ";" | "+" | "-" | "*" | "/" | "(" | ")"
```

Identifiers keep their spelling here: variable names are lower-cased later, when the syntax tree is built.

A comment consumes its closing "}" as well. Tutorial lexers that stop just before the "}" leave it behind as an invalid
character, so "{ note } x" would fail there but lexes as the single identifier x here.
"""

from dataclasses import dataclass
from enum import Enum
import string

from pcalc.lang.error import LexicalError


class TokenType(Enum):
    """Lexical categories. Values are the textual form used in messages."""
    INTEGER_LITERAL = "integer literal"
    REAL_LITERAL = "real literal"
    IDENTIFIER = "identifier"

    PROGRAM = "PROGRAM"
    VAR = "VAR"
    BEGIN = "BEGIN"
    END = "END"
    INTEGER = "INTEGER"
    REAL = "REAL"
    DIV = "DIV"

    DOT = "."
    COLON = ":"
    COMMA = ","
    PLUS = "+"
    MINUS = "-"
    MULTIPLY = "*"
    DIVIDE = "/"
    OPEN_PAREN = "("
    CLOSE_PAREN = ")"
    ASSIGN = ":="
    SEMI = ";"
    EOF = "end of input"


@dataclass(frozen=True)
class Token:
    """Immutable token. value is only set for literals and identifiers."""
    kind: TokenType
    value: object = None

    def __str__(self):
        return self.kind.value if self.value is None else str(self.value)


KEYWORDS = {
    "PROGRAM": TokenType.PROGRAM,
    "VAR": TokenType.VAR,
    "BEGIN": TokenType.BEGIN,
    "END": TokenType.END,
    "INTEGER": TokenType.INTEGER,
    "REAL": TokenType.REAL,
    "DIV": TokenType.DIV,
}

SYMBOLS = {
    ".": TokenType.DOT,
    ",": TokenType.COMMA,
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.MULTIPLY,
    "/": TokenType.DIVIDE,
    "(": TokenType.OPEN_PAREN,
    ")": TokenType.CLOSE_PAREN,
    ";": TokenType.SEMI,
}

DIGITS = frozenset(string.digits)
UINT_MODULUS = 2 ** 32


class Lexer:
    """Converts one line of text into Tokens, one call to next_token at a time."""

    def __init__(self, text):
        self.text = text
        self.pos = 0
        self.token_start = 0  # column of the token most recently returned
        self.warnings = []    # (msg, exprs, start, end) for literals that wrapped around

    @property
    def current(self):
        """Character under the cursor, or None at end of input."""
        return self.text[self.pos] if self.pos < len(self.text) else None

    def peek(self):
        """Character after current ("" at end of input)."""
        return self.text[self.pos + 1:self.pos + 2]

    def advance(self):
        char = self.current
        self.pos += 1
        return char

    def skip_whitespace(self):
        while self.current is not None and self.current.isspace():
            self.advance()

    def skip_comment(self):
        """Skips a {...} comment, closing brace included. An unterminated comment runs to end of input."""
        while self.current is not None and self.current != "}":
            self.advance()
        if self.current is not None:
            self.advance()

    def number(self):
        """Integer literal, or a real literal if the digits are followed by '.' and another digit."""
        value = 0
        wrapped = False
        while self.current in DIGITS:
            value = value * 10 + int(self.advance())
            if value >= UINT_MODULUS:
                value %= UINT_MODULUS
                wrapped = True

        if self.current == "." and self.peek() in DIGITS:
            self.advance()
            while self.current in DIGITS:
                self.advance()
            return Token(TokenType.REAL_LITERAL, self.text[self.token_start:self.pos])

        if wrapped:
            msg = "integer literal '{1}' does not fit in 32 bits, wrapped around to {2}"
            literal = self.text[self.token_start:self.pos]
            self.warnings.append((msg, (self.text, literal, value), self.token_start, self.pos))
        return Token(TokenType.INTEGER_LITERAL, value)

    def identifier(self):
        """Identifier or keyword. Keywords are matched case-insensitively, identifiers keep their spelling."""
        while self.current is not None and (self.current.isalnum() or self.current == "_"):
            self.advance()

        name = self.text[self.token_start:self.pos]
        kind = KEYWORDS.get(name.upper())
        if kind is not None:
            return Token(kind)
        return Token(TokenType.IDENTIFIER, name)

    def next_token(self):
        """Returns the next Token. Keeps returning an EOF token once the input is exhausted."""
        while True:
            self.skip_whitespace()
            if self.current != "{":
                break
            self.advance()
            self.skip_comment()

        self.token_start = self.pos
        char = self.current

        if char is None:
            return Token(TokenType.EOF)

        if char in DIGITS:
            return self.number()

        if char.isalpha() or char == "_":
            return self.identifier()

        if char == ":":
            self.advance()
            if self.current == "=":
                self.advance()
                return Token(TokenType.ASSIGN)
            return Token(TokenType.COLON)

        if char in SYMBOLS:
            self.advance()
            return Token(SYMBOLS[char])

        raise LexicalError(char, self.text, self.pos)

    def __iter__(self):
        """Lazily yields Tokens up to and including EOF."""
        while True:
            token = self.next_token()
            yield token
            if token.kind is TokenType.EOF:
                return
