# Binding-power table for the Pratt parser.
#
# Precedence levels run low to high. A level L maps to base = (L + 1) * 2.
# Left-associative infix operators get (base - 1, base), right-associative
# ones get (base, base - 1), prefix and postfix operators get base.
# Zero means "not an operator in this position".

from __future__ import annotations

from typing import Optional, Tuple

from .tokens import Token, TokenKind

LEVEL_ASSIGNMENT = 0
LEVEL_ADDITION = 1
LEVEL_MULTIPLICATION = 2
LEVEL_NEGATE = 3
LEVEL_EXPONENT = 4
LEVEL_FACTORIAL = 5


def left_associative(level: int) -> Tuple[int, int]:
    base = (level + 1) * 2
    return (base - 1, base)


def right_associative(level: int) -> Tuple[int, int]:
    base = (level + 1) * 2
    return (base, base - 1)


def unary(level: int) -> int:
    return (level + 1) * 2


PREFIX_BP = {
    TokenKind.PLUS: unary(LEVEL_NEGATE),
    TokenKind.MINUS: unary(LEVEL_NEGATE),
}

POSTFIX_BP = {
    TokenKind.BANG: unary(LEVEL_FACTORIAL),
}

INFIX_BP = {
    TokenKind.PLUS: left_associative(LEVEL_ADDITION),
    TokenKind.MINUS: left_associative(LEVEL_ADDITION),
    TokenKind.ASTERISK: left_associative(LEVEL_MULTIPLICATION),
    TokenKind.SLASH: left_associative(LEVEL_MULTIPLICATION),
    TokenKind.CARET: right_associative(LEVEL_EXPONENT),
    TokenKind.WALRUS: right_associative(LEVEL_ASSIGNMENT),
}


def prefix_power(token: Optional[Token]) -> int:
    if token is None:
        return 0
    return PREFIX_BP.get(token.kind, 0)


def postfix_power(token: Optional[Token]) -> int:
    if token is None:
        return 0
    return POSTFIX_BP.get(token.kind, 0)


def infix_power(token: Optional[Token]) -> Tuple[int, int]:
    """Return the (left, right) binding powers of an infix operator, or (0, 0)."""
    if token is None:
        return (0, 0)
    return INFIX_BP.get(token.kind, (0, 0))
