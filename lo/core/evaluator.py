"""Tree-walking evaluator for the lo language.

Values are plain Python objects: float (the only number type, so 7 / 2 == 3.5), str, bool and None (nil). Statements
run strictly in order; the first LoRuntimeError ends the run and is handed back to the caller.
"""

import math
import sys

from lo.core import syntax
from lo.core.environment import Environment
from lo.core.token import TokenKind, stringify
from lo.lang.error import LoRuntimeError


def is_truthy(value):
    """nil and false are falsy, everything else (0 and "" included) is truthy."""
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    return True


def is_equal(left, right):
    """Value equality without coercion: values of different kinds are never equal, nil only equals nil."""
    if left is None and right is None:
        return True
    if left is None or right is None:
        return False
    return type(left) is type(right) and left == right


def check_number_operand(operator, operand):
    if not isinstance(operand, float):
        raise LoRuntimeError.from_token(operator, "operand must be a number")


def check_number_operands(operator, left, right):
    if not (isinstance(left, float) and isinstance(right, float)):
        raise LoRuntimeError.from_token(operator, "operands must be numbers")


class Evaluator:
    """Runs statements against one Environment, which lives as long as the Evaluator does. out is where print
    writes (sys.stdout if None).
    """

    def __init__(self, out=None, environment=None):
        self.out = out
        self.environment = environment if environment is not None else Environment()

    def interpret(self, statements):
        """Executes statements in order. Returns the LoRuntimeError that stopped execution, or None."""
        try:
            for stmt in statements:
                self.execute(stmt)
        except LoRuntimeError as error:
            return error
        except RecursionError:
            return LoRuntimeError("expression nested too deeply")
        return None

    def execute(self, stmt):
        if isinstance(stmt, syntax.Expression):
            self.evaluate(stmt.expression)

        elif isinstance(stmt, syntax.Print):
            value = self.evaluate(stmt.expression)
            print(stringify(value), file=self.out if self.out is not None else sys.stdout)

        elif isinstance(stmt, syntax.Var):
            value = None
            if stmt.initializer is not None:
                value = self.evaluate(stmt.initializer)
            self.environment.define(stmt.name.lexeme, value)

        else:
            raise LoRuntimeError(f"unsupported statement '{type(stmt).__name__}'")

    def evaluate(self, expr):
        if isinstance(expr, syntax.Literal):
            return expr.value

        elif isinstance(expr, syntax.Group):
            return self.evaluate(expr.expression)

        elif isinstance(expr, syntax.Variable):
            return self.environment.get(expr.name)

        elif isinstance(expr, syntax.Assign):
            value = self.evaluate(expr.value)
            self.environment.assign(expr.name, value)
            return value

        elif isinstance(expr, syntax.Unary):
            return self.unary(expr)

        elif isinstance(expr, syntax.Binary):
            return self.binary(expr)

        raise LoRuntimeError(f"unsupported expression '{type(expr).__name__}'")

    def unary(self, expr):
        right = self.evaluate(expr.right)
        kind = expr.operator.kind

        if kind is TokenKind.MINUS:
            check_number_operand(expr.operator, right)
            return -right
        elif kind is TokenKind.BANG:
            return not is_truthy(right)

        raise LoRuntimeError.from_token(expr.operator, "unknown unary operator")

    def binary(self, expr):
        left = self.evaluate(expr.left)
        right = self.evaluate(expr.right)
        operator = expr.operator
        kind = operator.kind

        if kind is TokenKind.PLUS:
            if isinstance(left, float) and isinstance(right, float):
                return left + right
            if isinstance(left, str) and isinstance(right, str):
                return left + right
            raise LoRuntimeError.from_token(operator, "operands must be two numbers or two strings")

        elif kind is TokenKind.EQUAL_EQUAL:
            return is_equal(left, right)
        elif kind is TokenKind.BANG_EQUAL:
            return not is_equal(left, right)

        check_number_operands(operator, left, right)

        if kind is TokenKind.MINUS:
            return left - right
        elif kind is TokenKind.STAR:
            return left * right
        elif kind is TokenKind.SLASH:
            if right == 0:
                # IEEE 754: x / 0 is a signed infinity, 0 / 0 is nan
                if left == 0 or math.isnan(left):
                    return math.nan
                return math.copysign(math.inf, left) * math.copysign(1.0, right)
            return left / right
        elif kind is TokenKind.GREATER:
            return left > right
        elif kind is TokenKind.GREATER_EQUAL:
            return left >= right
        elif kind is TokenKind.LESS:
            return left < right
        elif kind is TokenKind.LESS_EQUAL:
            return left <= right

        raise LoRuntimeError.from_token(operator, "unknown binary operator")
