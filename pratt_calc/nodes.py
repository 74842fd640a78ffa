# Expression tree variants. The set is closed: the parser builds only these
# and the evaluator and printer dispatch on them with isinstance checks.

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class UnaryOperator(Enum):
    NEGATE = '-'
    IDENTITY = '+'
    FACTORIAL = '!'


class BinaryOperator(Enum):
    ADD = '+'
    SUBTRACT = '-'
    MULTIPLY = '*'
    DIVIDE = '/'
    EXPONENT = '^'
    ASSIGN = ':='


@dataclass(frozen=True)
class Expression:
    """Base expression node."""
    pass


@dataclass(frozen=True)
class NumberLiteral(Expression):
    value: int


@dataclass(frozen=True)
class Identifier(Expression):
    name: str


@dataclass(frozen=True)
class UnaryOp(Expression):
    operator: UnaryOperator
    operand: Expression


@dataclass(frozen=True)
class BinaryOp(Expression):
    operator: BinaryOperator
    left: Expression
    right: Expression


@dataclass(frozen=True)
class Grouping(Expression):
    """A parenthesized expression, kept as its own node."""
    inner: Expression


@dataclass(frozen=True)
class Conditional(Expression):
    condition: Expression
    then_branch: Expression
    else_branch: Expression
