"""Lexical units of the lo language.

Punctuation kinds use their own text as value so a token renders the way it was written: `{+ + nil 1}`. Every other
kind renders by name: `{NUMBER 2 2 1}`.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class TokenKind(Enum):
    # single-character tokens
    LEFT_PAREN = "("
    RIGHT_PAREN = ")"
    LEFT_BRACE = "{"
    RIGHT_BRACE = "}"
    COMMA = ","
    DOT = "."
    MINUS = "-"
    PLUS = "+"
    SEMICOLON = ";"
    SLASH = "/"
    STAR = "*"

    # one or two character tokens
    BANG = "!"
    BANG_EQUAL = "!="
    EQUAL = "="
    EQUAL_EQUAL = "=="
    GREATER = ">"
    GREATER_EQUAL = ">="
    LESS = "<"
    LESS_EQUAL = "<="

    # literals
    IDENTIFIER = "IDENTIFIER"
    STRING = "STRING"
    NUMBER = "NUMBER"

    # keywords
    AND = "AND"
    CLASS = "CLASS"
    ELSE = "ELSE"
    FALSE = "FALSE"
    FUN = "FUN"
    FOR = "FOR"
    IF = "IF"
    NIL = "NIL"
    OR = "OR"
    PRINT = "PRINT"
    RETURN = "RETURN"
    SUPER = "SUPER"
    THIS = "THIS"
    TRUE = "TRUE"
    VAR = "VAR"
    WHILE = "WHILE"

    COMMENT = "COMMENT"
    EOF = "EOF"

    def __str__(self):
        return self.value


KEYWORDS = {
    "and": TokenKind.AND,
    "class": TokenKind.CLASS,
    "else": TokenKind.ELSE,
    "false": TokenKind.FALSE,
    "for": TokenKind.FOR,
    "fun": TokenKind.FUN,
    "if": TokenKind.IF,
    "nil": TokenKind.NIL,
    "or": TokenKind.OR,
    "print": TokenKind.PRINT,
    "return": TokenKind.RETURN,
    "super": TokenKind.SUPER,
    "this": TokenKind.THIS,
    "true": TokenKind.TRUE,
    "var": TokenKind.VAR,
    "while": TokenKind.WHILE,
}


def stringify(value):
    """Textual form of a runtime value, as `print` shows it."""
    if value is None:
        return "nil"
    elif isinstance(value, bool):
        return "true" if value else "false"
    elif isinstance(value, float):
        if value.is_integer() and abs(value) < 1e16:
            return f"{value:.0f}"  # 2.0 prints as 2
        return repr(value)
    return str(value)


@dataclass(frozen=True)
class Token:
    """One classified lexeme. literal holds the converted value of NUMBER (float) and STRING (str) tokens."""
    kind: TokenKind
    lexeme: str
    literal: Optional[Union[float, str]]
    line: int

    def __str__(self):
        return f"{{{self.kind} {self.lexeme} {stringify(self.literal)} {self.line}}}"
