# Exception hierarchy for the calculator pipeline.
#
# Every stage raises a subclass of CalculatorError so the REPL can report any
# failure with a single except clause. None of these are caught inside the core.

from __future__ import annotations

from typing import Any, Optional

from .tokens import Token


def _describe(token: Optional[Token]) -> str:
    if token is None:
        return "end of input"
    return f"{token.kind.name} {token.content!r} at pos {token.start}"


# str(int) fails past sys.get_int_max_str_digits(); huge operands are
# described by size instead.
_MAX_OPERAND_DIGITS = 50


def _operand(value: int) -> str:
    if -10 ** _MAX_OPERAND_DIGITS < value < 10 ** _MAX_OPERAND_DIGITS:
        return str(value)
    digits = int(abs(value).bit_length() * 0.30103) + 1
    return f"{'-' if value < 0 else ''}<~{digits}-digit integer>"


class CalculatorError(Exception):
    """Base class for calculator errors."""
    pass


# --------------------------
# Lexer errors
# --------------------------

class LexerError(CalculatorError):
    """Raised for errors during tokenization."""
    pass


class UnrecognizedCharacter(LexerError):
    def __init__(self, char: str, pos: int):
        self.char = char
        self.pos = pos
        super().__init__(f"unrecognized character {char!r} at pos {pos}")


# --------------------------
# Parse errors
# --------------------------

class ParseError(CalculatorError):
    """Raised for parsing errors with optional position information."""
    pass


class UnexpectedToken(ParseError):
    """A token (or the end of input) that cannot start or continue an expression."""

    def __init__(self, token: Optional[Token], expected: str = "an atomic expression"):
        self.token = token
        self.expected = expected
        super().__init__(f"expected {expected}, got {_describe(token)}")


class UnexpectedEndOfInput(UnexpectedToken):
    def __init__(self, expected: str = "an atomic expression"):
        super().__init__(None, expected)


class ExpectedKeyword(ParseError):
    """A conditional is missing one of its 'then', 'else' or 'end' keywords."""

    def __init__(self, keyword: str, token: Optional[Token]):
        self.keyword = keyword
        self.token = token
        super().__init__(f"expected '{keyword}', got {_describe(token)}")


class UnmatchedParenthesis(ParseError):
    def __init__(self, token: Optional[Token]):
        self.token = token
        super().__init__(f"expected closing parenthesis, got {_describe(token)}")


class TrailingInput(ParseError):
    def __init__(self, token: Token):
        self.token = token
        super().__init__(f"expected end of input, got {_describe(token)}")


# --------------------------
# Evaluation errors
# --------------------------

class EvalError(CalculatorError):
    """Raised for errors during evaluation."""
    pass


class UndefinedVariable(EvalError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"undefined variable: {name}")


class InvalidAssignmentTarget(EvalError):
    def __init__(self, target: Any):
        self.target = target
        super().__init__(f"left-hand side of ':=' must be an identifier, got {type(target).__name__}")


class DivisionByZero(EvalError):
    def __init__(self, dividend: int):
        self.dividend = dividend
        super().__init__(f"division by zero ({_operand(dividend)} / 0)")


class ExponentTooLarge(EvalError):
    def __init__(self, base: int, exponent: int, limit: int):
        self.base = base
        self.exponent = exponent
        self.limit = limit
        super().__init__(f"exponent too large ({_operand(base)} ^ {_operand(exponent)}), must be below {limit}")


class NegativeExponent(EvalError):
    def __init__(self, base: int, exponent: int):
        self.base = base
        self.exponent = exponent
        super().__init__(f"negative exponent ({_operand(base)} ^ {_operand(exponent)}) has no integer result")


class NegativeFactorial(EvalError):
    def __init__(self, value: int):
        self.value = value
        super().__init__(f"factorial not defined for negative numbers ({_operand(value)}!)")
