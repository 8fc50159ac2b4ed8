"""Syntax tree of the lo language. Nodes are frozen dataclasses: a tree is never modified once the Parser builds it.

str(node) gives a fully-parenthesized prefix form, used by tests and by `lo --verbose`:

```
1 + 2 * -x;     ->  (; (+ 1 (* 2 -x)))
var a = (b);    ->  (var a (b))
print a = 3;    ->  (print (= a 3))
```

Call, Get, Set, This, Logical and every statement below Var are reserved shapes: no grammar rule builds them yet and
the Evaluator rejects them.
"""

from dataclasses import dataclass
from typing import Any, Optional, Tuple

from lo.core.token import Token, stringify


class Expr:
    """Superclass of every expression node."""


class Stmt:
    """Superclass of every statement node."""


@dataclass(frozen=True)
class Literal(Expr):
    value: Any

    def __str__(self):
        return stringify(self.value)


@dataclass(frozen=True)
class Group(Expr):
    expression: Expr

    def __str__(self):
        return f"({self.expression})"


@dataclass(frozen=True)
class Unary(Expr):
    operator: Token
    right: Expr

    def __str__(self):
        return f"{self.operator.lexeme}{self.right}"


@dataclass(frozen=True)
class Binary(Expr):
    left: Expr
    operator: Token
    right: Expr

    def __str__(self):
        return f"({self.operator.lexeme} {self.left} {self.right})"


@dataclass(frozen=True)
class Variable(Expr):
    name: Token

    def __str__(self):
        return self.name.lexeme


@dataclass(frozen=True)
class Assign(Expr):
    name: Token
    value: Expr

    def __str__(self):
        return f"(= {self.name.lexeme} {self.value})"


@dataclass(frozen=True)
class Call(Expr):
    callee: Expr
    paren: Token
    arguments: Tuple[Expr, ...] = ()

    def __str__(self):
        return "(call " + " ".join(str(node) for node in (self.callee,) + tuple(self.arguments)) + ")"


@dataclass(frozen=True)
class Get(Expr):
    object: Expr
    name: Token

    def __str__(self):
        return f"(. {self.object} {self.name.lexeme})"


@dataclass(frozen=True)
class Set(Expr):
    object: Expr
    name: Token
    value: Expr


@dataclass(frozen=True)
class This(Expr):
    keyword: Token


@dataclass(frozen=True)
class Logical(Expr):
    left: Expr
    operator: Token
    right: Expr


@dataclass(frozen=True)
class Expression(Stmt):
    expression: Expr

    def __str__(self):
        return f"(; {self.expression})"


@dataclass(frozen=True)
class Print(Stmt):
    expression: Expr

    def __str__(self):
        return f"(print {self.expression})"


@dataclass(frozen=True)
class Var(Stmt):
    name: Token
    initializer: Optional[Expr] = None

    def __str__(self):
        if self.initializer is None:
            return f"(var {self.name.lexeme})"
        return f"(var {self.name.lexeme} {self.initializer})"


@dataclass(frozen=True)
class Block(Stmt):
    statements: Tuple[Stmt, ...] = ()


@dataclass(frozen=True)
class If(Stmt):
    condition: Expr
    then_branch: Stmt
    else_branch: Optional[Stmt] = None


@dataclass(frozen=True)
class While(Stmt):
    condition: Expr
    body: Stmt


@dataclass(frozen=True)
class Function(Stmt):
    name: Token
    params: Tuple[Token, ...] = ()
    body: Tuple[Stmt, ...] = ()


@dataclass(frozen=True)
class Return(Stmt):
    keyword: Token
    value: Optional[Expr] = None


@dataclass(frozen=True)
class Class(Stmt):
    name: Token
    superclass: Optional[Variable] = None
    methods: Tuple[Function, ...] = ()


def display(statements):
    """Canonical form of a whole program, one statement per line."""
    return "\n".join(str(stmt) for stmt in statements)
