from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from .errors import (
    ExpectedKeyword,
    ParseError,
    TrailingInput,
    UnexpectedEndOfInput,
    UnexpectedToken,
    UnmatchedParenthesis,
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
from .precedence import infix_power, postfix_power, prefix_power
from .tokens import Token, TokenKind

logger = logging.getLogger(__name__)

_PREFIX_OPS = {
    TokenKind.PLUS: UnaryOperator.IDENTITY,
    TokenKind.MINUS: UnaryOperator.NEGATE,
}

_POSTFIX_OPS = {
    TokenKind.BANG: UnaryOperator.FACTORIAL,
}

_INFIX_OPS = {
    TokenKind.PLUS: BinaryOperator.ADD,
    TokenKind.MINUS: BinaryOperator.SUBTRACT,
    TokenKind.ASTERISK: BinaryOperator.MULTIPLY,
    TokenKind.SLASH: BinaryOperator.DIVIDE,
    TokenKind.CARET: BinaryOperator.EXPONENT,
    TokenKind.WALRUS: BinaryOperator.ASSIGN,
}

# int() refuses strings longer than sys.get_int_max_str_digits(), so long
# literals are converted in chunks below that limit.
_DIGIT_CHUNK = 4000


def parse_digits(digits: str) -> int:
    value = 0
    for i in range(0, len(digits), _DIGIT_CHUNK):
        chunk = digits[i:i + _DIGIT_CHUNK]
        value = value * 10 ** len(chunk) + int(chunk)
    return value


class Parser:
    """Pratt parser producing an expression tree from a token list.

    A single procedure, parse_expression(min_power), handles prefix, postfix
    and infix operators. Associativity comes from the binding-power pairs in
    precedence.py; nothing here special-cases it.
    """

    def __init__(self, tokens: Sequence[Token]):
        self.tokens: List[Token] = list(tokens)
        self.pos = 0

    def _current(self) -> Optional[Token]:
        return self.tokens[self.pos] if self.pos < len(self.tokens) else None

    def _advance(self) -> Token:
        tok = self._current()
        if tok is None:
            raise UnexpectedEndOfInput()
        self.pos += 1
        return tok

    def _expect_keyword(self, kind: TokenKind) -> Token:
        tok = self._current()
        if tok is None or tok.kind is not kind:
            raise ExpectedKeyword(kind.value, tok)
        return self._advance()

    def parse(self) -> Expression:
        """Parse exactly one expression; leftover tokens raise TrailingInput."""
        try:
            node = self.parse_expression(0)
        except RecursionError:
            raise ParseError("expression nested too deeply") from None
        tok = self._current()
        if tok is not None:
            raise TrailingInput(tok)
        logger.debug("parsed %s from %d tokens", type(node).__name__, len(self.tokens))
        return node

    def parse_expression(self, min_power: int = 0) -> Expression:
        power = prefix_power(self._current())
        if power != 0 and power >= min_power:
            op_tok = self._advance()
            operand = self.parse_expression(power)
            left: Expression = UnaryOp(_PREFIX_OPS[op_tok.kind], operand)
        else:
            left = self.parse_atom()

        while True:
            power = postfix_power(self._current())
            if power == 0 or power < min_power:
                break
            op_tok = self._advance()
            left = UnaryOp(_POSTFIX_OPS[op_tok.kind], left)

        while True:
            left_power, right_power = infix_power(self._current())
            if left_power == 0 or left_power < min_power:
                break
            op_tok = self._advance()
            right = self.parse_expression(right_power)
            left = BinaryOp(_INFIX_OPS[op_tok.kind], left, right)

        return left

    def parse_atom(self) -> Expression:
        """Parse an expression that needs no left-hand context."""
        tok = self._current()
        if tok is None:
            raise UnexpectedEndOfInput()
        if tok.kind is TokenKind.IDENTIFIER:
            self._advance()
            return Identifier(tok.content)
        if tok.kind is TokenKind.NUMBER:
            self._advance()
            return NumberLiteral(parse_digits(tok.content))
        if tok.kind is TokenKind.LPAREN:
            self._advance()
            inner = self.parse_expression(0)
            closer = self._current()
            if closer is None or closer.kind is not TokenKind.RPAREN:
                raise UnmatchedParenthesis(closer)
            self._advance()
            return Grouping(inner)
        if tok.kind is TokenKind.KW_IF:
            self._advance()
            condition = self.parse_expression(0)
            self._expect_keyword(TokenKind.KW_THEN)
            then_branch = self.parse_expression(0)
            self._expect_keyword(TokenKind.KW_ELSE)
            else_branch = self.parse_expression(0)
            self._expect_keyword(TokenKind.KW_END)
            return Conditional(condition, then_branch, else_branch)
        raise UnexpectedToken(tok)


def parse(tokens: Sequence[Token]) -> Expression:
    """Parse a full token list into one expression tree."""
    return Parser(tokens).parse()
