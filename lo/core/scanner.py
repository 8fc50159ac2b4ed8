"""Lexical analysis for the lo language: turns source text into a list of Tokens in a single left-to-right pass.

Roughly, the lexical grammar is

```
<token>      ::= <punct> | <operator> | <number> | <string> | <identifier> | <comment>
<punct>      ::= "(" | ")" | "{" | "}" | "," | "." | "-" | "+" | ";" | "/" | "*"
<operator>   ::= "!" | "!=" | "=" | "==" | "<" | "<=" | ">" | ">="   ; longest match wins
<number>     ::= <digit>+ ("." <digit>+)?                            ; "1." is NUMBER then DOT
<string>     ::= '"' <any char but '"'>* '"'                         ; may span lines, no escapes
<identifier> ::= (<alpha> | "_") (<alpha> | <digit> | "_")*          ; keywords are looked up afterwards
<comment>    ::= "/*" <any>* "*/"                                    ; kept as a COMMENT token
```

`//` comments and whitespace produce nothing. Malformed input never aborts the scan: the error is collected in
Scanner.errors and scanning resumes after the offending text.
"""

from string import ascii_letters, digits

from lo.core.token import KEYWORDS, Token, TokenKind
from lo.lang.error import LexError


SINGLE = {
    "(": TokenKind.LEFT_PAREN,
    ")": TokenKind.RIGHT_PAREN,
    "{": TokenKind.LEFT_BRACE,
    "}": TokenKind.RIGHT_BRACE,
    ",": TokenKind.COMMA,
    ".": TokenKind.DOT,
    "-": TokenKind.MINUS,
    "+": TokenKind.PLUS,
    ";": TokenKind.SEMICOLON,
    "*": TokenKind.STAR,
}

# char: (kind if followed by "=", kind otherwise)
EQUAL_SUFFIXED = {
    "!": (TokenKind.BANG_EQUAL, TokenKind.BANG),
    "=": (TokenKind.EQUAL_EQUAL, TokenKind.EQUAL),
    "<": (TokenKind.LESS_EQUAL, TokenKind.LESS),
    ">": (TokenKind.GREATER_EQUAL, TokenKind.GREATER),
}

WHITESPACE = " \r\t"


def is_digit(char):
    return char != "" and char in digits


def is_alpha(char):
    return char != "" and (char in ascii_letters or char == "_")


def is_alphanumeric(char):
    return is_alpha(char) or is_digit(char)


class Scanner:
    """Scans one source string. Cursors: start of the current lexeme, current position and current line."""

    def __init__(self, source):
        self.source = source
        self.tokens = []
        self.errors = []

        self.start = 0
        self.current = 0
        self.line = 1

    def scan_tokens(self):
        """Returns the full token list, always ending with exactly one EOF token."""
        while not self.is_at_end():
            self.start = self.current
            self.scan_token()

        self.tokens.append(Token(TokenKind.EOF, "", None, self.line))
        return self.tokens

    def scan_token(self):
        char = self.advance()

        if char in SINGLE:
            self.add_token(SINGLE[char])

        elif char in EQUAL_SUFFIXED:
            with_equal, without_equal = EQUAL_SUFFIXED[char]
            self.add_token(with_equal if self.match("=") else without_equal)

        elif char == "/":
            if self.match("/"):
                while self.peek() != "\n" and not self.is_at_end():
                    self.advance()
            elif self.match("*"):
                self.block_comment()
            else:
                self.add_token(TokenKind.SLASH)

        elif char in WHITESPACE:
            pass

        elif char == "\n":
            self.line += 1

        elif char == '"':
            self.string()

        elif is_digit(char):
            self.number()

        elif is_alpha(char):
            self.identifier()

        else:
            self.errors.append(LexError("unexpected character", self.line, char))

    def block_comment(self):
        """Consumes up to and including the closing '*/'. The opening '/*' has already been consumed."""
        line = self.line
        while not (self.peek() == "*" and self.peek_next() == "/"):
            if self.is_at_end():
                self.errors.append(LexError("unterminated comment", line))
                return
            if self.advance() == "\n":
                self.line += 1

        self.advance()
        self.advance()
        self.add_token(TokenKind.COMMENT)

    def string(self):
        """Consumes a string literal verbatim. Embedded newlines are kept and counted."""
        line = self.line
        while self.peek() != '"' and not self.is_at_end():
            if self.advance() == "\n":
                self.line += 1

        if self.is_at_end():
            self.errors.append(LexError("unterminated string", line))
            return

        self.advance()  # closing "
        self.add_token(TokenKind.STRING, self.source[self.start + 1:self.current - 1])

    def number(self):
        while is_digit(self.peek()):
            self.advance()

        # a trailing "." only belongs to the number if a digit follows it
        if self.peek() == "." and is_digit(self.peek_next()):
            self.advance()
            while is_digit(self.peek()):
                self.advance()

        self.add_token(TokenKind.NUMBER, float(self.source[self.start:self.current]))

    def identifier(self):
        while is_alphanumeric(self.peek()):
            self.advance()

        text = self.source[self.start:self.current]
        self.add_token(KEYWORDS.get(text, TokenKind.IDENTIFIER))

    def add_token(self, kind, literal=None):
        self.tokens.append(Token(kind, self.source[self.start:self.current], literal, self.line))

    def advance(self):
        char = self.source[self.current]
        self.current += 1
        return char

    def match(self, expected):
        """Consumes the next character only if it is expected."""
        if self.peek() != expected:
            return False
        self.current += 1
        return True

    def peek(self):
        """Next character, or '' at end of input."""
        return self.source[self.current:self.current + 1]

    def peek_next(self):
        return self.source[self.current + 1:self.current + 2]

    def is_at_end(self):
        return self.current >= len(self.source)


def scan(source):
    """Returns (tokens, lexical errors) for source."""
    scanner = Scanner(source)
    return scanner.scan_tokens(), scanner.errors
