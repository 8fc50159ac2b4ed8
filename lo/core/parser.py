"""Recursive-descent parser for the lo language. Each precedence level is one method calling the next-higher level:

```
program     ::= declaration* EOF
declaration ::= "var" IDENTIFIER ("=" expression)? ";" | statement
statement   ::= "print" expression ";" | expression ";"

expression  ::= assignment
assignment  ::= IDENTIFIER "=" assignment | equality         ; right-associative
equality    ::= comparison (("!=" | "==") comparison)*        ; everything below folds left
comparison  ::= addition ((">" | ">=" | "<" | "<=") addition)*
addition    ::= multiplication (("-" | "+") multiplication)*
multiplication ::= unary (("/" | "*") unary)*
unary       ::= ("!" | "-") unary | primary
primary     ::= "true" | "false" | "nil" | NUMBER | STRING | IDENTIFIER | "(" expression ")"
```

A ParseError inside a declaration is collected in Parser.errors and the parser skips ahead to the next statement
boundary, so every malformed statement is reported once and the rest of the program still gets checked.
"""

from lo.core import syntax
from lo.core.token import TokenKind
from lo.lang.error import ParseError


# tokens that plausibly begin a new statement, used when resynchronizing after an error
STATEMENT_STARTS = {
    TokenKind.CLASS,
    TokenKind.FUN,
    TokenKind.VAR,
    TokenKind.FOR,
    TokenKind.IF,
    TokenKind.WHILE,
    TokenKind.PRINT,
    TokenKind.RETURN,
}


class Parser:
    """Consumes a token list (COMMENT tokens are ignored) and produces a list of statements."""

    def __init__(self, tokens):
        self.tokens = [token for token in tokens if token.kind is not TokenKind.COMMENT]
        self.current = 0
        self.errors = []

    def parse(self):
        """Returns every statement that parsed cleanly. If self.errors is non-empty afterwards, the program as a
        whole is invalid and should not be run.
        """
        statements = []
        while not self.is_at_end():
            stmt = self.declaration()
            if stmt is not None:
                statements.append(stmt)
        return statements

    # statements

    def declaration(self):
        try:
            if self.match(TokenKind.VAR):
                return self.var_declaration()
            return self.statement()
        except ParseError as error:
            self.errors.append(error)
            self.synchronize()
            return None
        except RecursionError:
            self.errors.append(ParseError.from_token(self.peek(), "expression nested too deeply"))
            self.synchronize()
            return None

    def var_declaration(self):
        name = self.consume(TokenKind.IDENTIFIER, "expected variable name")

        initializer = None
        if self.match(TokenKind.EQUAL):
            initializer = self.expression()

        self.consume(TokenKind.SEMICOLON, "expected ';' after variable declaration")
        return syntax.Var(name, initializer)

    def statement(self):
        if self.match(TokenKind.PRINT):
            value = self.expression()
            self.consume(TokenKind.SEMICOLON, "expected ';' after value")
            return syntax.Print(value)

        expr = self.expression()
        self.consume(TokenKind.SEMICOLON, "expected ';' after expression")
        return syntax.Expression(expr)

    # expressions, lowest precedence first

    def expression(self):
        return self.assignment()

    def assignment(self):
        expr = self.equality()

        if self.match(TokenKind.EQUAL):
            equals = self.previous()
            value = self.assignment()

            if isinstance(expr, syntax.Variable):
                return syntax.Assign(expr.name, value)

            # reported, but the statement is otherwise fine so there is nothing to resynchronize
            self.errors.append(ParseError.from_token(equals, "invalid assignment target"))

        return expr

    def binary(self, operand, *kinds):
        """Parses `operand (op operand)*` for op in kinds, folding to the left."""
        expr = operand()
        while self.match(*kinds):
            operator = self.previous()
            right = operand()
            expr = syntax.Binary(expr, operator, right)
        return expr

    def equality(self):
        return self.binary(self.comparison, TokenKind.BANG_EQUAL, TokenKind.EQUAL_EQUAL)

    def comparison(self):
        return self.binary(
            self.addition, TokenKind.GREATER, TokenKind.GREATER_EQUAL, TokenKind.LESS, TokenKind.LESS_EQUAL
        )

    def addition(self):
        return self.binary(self.multiplication, TokenKind.MINUS, TokenKind.PLUS)

    def multiplication(self):
        return self.binary(self.unary, TokenKind.SLASH, TokenKind.STAR)

    def unary(self):
        if self.match(TokenKind.BANG, TokenKind.MINUS):
            operator = self.previous()
            return syntax.Unary(operator, self.unary())
        return self.primary()

    def primary(self):
        if self.match(TokenKind.FALSE):
            return syntax.Literal(False)
        if self.match(TokenKind.TRUE):
            return syntax.Literal(True)
        if self.match(TokenKind.NIL):
            return syntax.Literal(None)

        if self.match(TokenKind.NUMBER, TokenKind.STRING):
            return syntax.Literal(self.previous().literal)

        if self.match(TokenKind.IDENTIFIER):
            return syntax.Variable(self.previous())

        if self.match(TokenKind.LEFT_PAREN):
            expr = self.expression()
            self.consume(TokenKind.RIGHT_PAREN, "expected ')' after expression")
            return syntax.Group(expr)

        raise ParseError.from_token(self.peek(), "expected an expression")

    # token helpers

    def match(self, *kinds):
        """Consumes the current token if it is any of kinds."""
        for kind in kinds:
            if self.check(kind):
                self.advance()
                return True
        return False

    def consume(self, kind, message):
        """Consumes and returns the current token if it is of kind. Otherwise raises a ParseError positioned at the
        current token, without advancing.
        """
        if self.check(kind):
            return self.advance()
        raise ParseError.from_token(self.peek(), message)

    def check(self, kind):
        if self.is_at_end():
            return False
        return self.peek().kind is kind

    def advance(self):
        if not self.is_at_end():
            self.current += 1
        return self.previous()

    def is_at_end(self):
        return self.peek().kind is TokenKind.EOF

    def peek(self):
        return self.tokens[self.current]

    def previous(self):
        return self.tokens[self.current - 1]

    def synchronize(self):
        """Discards tokens until just past a ';' or just before a token that starts a statement."""
        self.advance()
        while not self.is_at_end():
            if self.previous().kind is TokenKind.SEMICOLON:
                return
            if self.peek().kind in STATEMENT_STARTS:
                return
            self.advance()


def parse(tokens):
    """Returns (statements, parse errors) for tokens."""
    parser = Parser(tokens)
    return parser.parse(), parser.errors
