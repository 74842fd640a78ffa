from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class TokenKind(Enum):
    """Lexeme classes produced by the lexer."""
    LPAREN = '('
    RPAREN = ')'
    LBRACE = '{'
    RBRACE = '}'
    LBRACKET = '['
    RBRACKET = ']'
    CARET = '^'
    PLUS = '+'
    MINUS = '-'
    SLASH = '/'
    ASTERISK = '*'
    BANG = '!'
    KW_IF = 'if'
    KW_THEN = 'then'
    KW_ELSE = 'else'
    KW_END = 'end'
    WALRUS = ':='
    EQUALS = '='
    NUMBER = 'number'
    IDENTIFIER = 'identifier'


KEYWORDS = {
    'if': TokenKind.KW_IF,
    'then': TokenKind.KW_THEN,
    'else': TokenKind.KW_ELSE,
    'end': TokenKind.KW_END,
}

# Single-character punctuation and operators.
PUNCTUATION = {
    '(': TokenKind.LPAREN,
    ')': TokenKind.RPAREN,
    '{': TokenKind.LBRACE,
    '}': TokenKind.RBRACE,
    '[': TokenKind.LBRACKET,
    ']': TokenKind.RBRACKET,
    '^': TokenKind.CARET,
    '+': TokenKind.PLUS,
    '-': TokenKind.MINUS,
    '/': TokenKind.SLASH,
    '*': TokenKind.ASTERISK,
    '!': TokenKind.BANG,
    '=': TokenKind.EQUALS,
}


@dataclass(frozen=True)
class Token:
    """A classified lexeme with its [start, end) offsets into the source."""
    kind: TokenKind
    start: int
    end: int
    content: str

    @property
    def span(self) -> Tuple[int, int]:
        return (self.start, self.end)

    def __repr__(self) -> str:
        return f"Token({self.kind.name}, {self.content!r}, span={self.start}..{self.end})"
