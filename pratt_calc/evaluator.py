from __future__ import annotations

import logging
import math
from typing import Optional

from .environment import Environment
from .errors import (
    DivisionByZero,
    EvalError,
    ExponentTooLarge,
    InvalidAssignmentTarget,
    NegativeExponent,
    NegativeFactorial,
)
from .nodes import (
    BinaryOp,
    BinaryOperator,
    Conditional,
    Expression,
    Grouping,
    Identifier,
    NumberLiteral,
    UnaryOp,
    UnaryOperator,
)

logger = logging.getLogger(__name__)

# Exclusive upper bound on the exponent of "^" (a signed 32-bit word).
MAX_EXPONENT = 2 ** 31 - 1


def factorial(value: int) -> int:
    """Product of 2..value; 0! and 1! are 1. Negative operands raise NegativeFactorial."""
    if value < 0:
        raise NegativeFactorial(value)
    return math.factorial(value)


def truncating_divide(left: int, right: int) -> int:
    """Integer division rounding toward zero, so -7 / 2 == -3."""
    if right == 0:
        raise DivisionByZero(left)
    quotient = abs(left) // abs(right)
    return quotient if (left < 0) == (right < 0) else -quotient


def power(base: int, exponent: int, limit: int = MAX_EXPONENT) -> int:
    if exponent < 0:
        raise NegativeExponent(base, exponent)
    if exponent >= limit:
        raise ExponentTooLarge(base, exponent, limit)
    return base ** exponent


class Evaluator:
    """Evaluates expression trees against a mutable Environment.

    Binary operands are evaluated right side first, then left side; an
    assignment on either side commits to the environment as soon as it is
    evaluated.
    """

    def __init__(self, env: Optional[Environment] = None, max_exponent: int = MAX_EXPONENT):
        self.env = env if env is not None else Environment()
        self.max_exponent = max_exponent

    def evaluate(self, node: Expression) -> int:
        """Evaluate a whole tree; running out of stack is reported as an EvalError."""
        try:
            return self.eval(node)
        except RecursionError:
            raise EvalError("expression nested too deeply") from None

    def eval(self, node: Expression) -> int:
        if isinstance(node, NumberLiteral):
            return node.value
        if isinstance(node, Identifier):
            return self.env.get(node.name)
        if isinstance(node, UnaryOp):
            value = self.eval(node.operand)
            if node.operator is UnaryOperator.NEGATE:
                return -value
            if node.operator is UnaryOperator.IDENTITY:
                return value
            if node.operator is UnaryOperator.FACTORIAL:
                return factorial(value)
            raise EvalError(f"Unknown unary operator: {node.operator}")
        if isinstance(node, BinaryOp):
            return self._eval_binary(node)
        if isinstance(node, Grouping):
            return self.eval(node.inner)
        if isinstance(node, Conditional):
            if self.eval(node.condition) != 0:
                return self.eval(node.then_branch)
            return self.eval(node.else_branch)
        raise EvalError(f"Unsupported expression node: {type(node).__name__}")

    def _eval_binary(self, node: BinaryOp) -> int:
        right = self.eval(node.right)
        if node.operator is BinaryOperator.ASSIGN:
            if not isinstance(node.left, Identifier):
                raise InvalidAssignmentTarget(node.left)
            self.env.set(node.left.name, right)
            logger.debug("assigned %s", node.left.name)
            return right

        left = self.eval(node.left)
        op = node.operator
        if op is BinaryOperator.ADD:
            return left + right
        if op is BinaryOperator.SUBTRACT:
            return left - right
        if op is BinaryOperator.MULTIPLY:
            return left * right
        if op is BinaryOperator.DIVIDE:
            return truncating_divide(left, right)
        if op is BinaryOperator.EXPONENT:
            return power(left, right, self.max_exponent)
        raise EvalError(f"Unknown binary operator: {op}")


def evaluate(expression: Expression, environment: Environment, max_exponent: int = MAX_EXPONENT) -> int:
    """Evaluate a tree against the given environment, mutating it on assignment."""
    return Evaluator(environment, max_exponent).evaluate(expression)
