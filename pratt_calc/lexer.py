from __future__ import annotations

import logging
from typing import List

from .errors import UnrecognizedCharacter
from .tokens import KEYWORDS, PUNCTUATION, Token, TokenKind

logger = logging.getLogger(__name__)

_WHITESPACE = ' \t\n'


def _is_digit(ch: str) -> bool:
    # str.isdigit() also accepts superscripts and other scripts that int() rejects
    return '0' <= ch <= '9'


class Lexer:
    """Tokenizer for calculator expressions.

    Produces NUMBER, IDENTIFIER, keyword and operator tokens. Whitespace is
    dropped and no token marks the end of input: running out of tokens is the
    end-of-input signal for the parser.
    """

    def __init__(self, text: str):
        self.text = text
        self.pos = 0
        self.len = len(text)

    def _peek(self, n: int = 0) -> str:
        i = self.pos + n
        return self.text[i] if i < self.len else ''

    def _advance(self, n: int = 1) -> None:
        self.pos += n

    def _emit(self, kind: TokenKind, start: int) -> Token:
        return Token(kind, start, self.pos, self.text[start:self.pos])

    def _read_number(self) -> Token:
        start = self.pos
        while _is_digit(self._peek()):
            self._advance()
        return self._emit(TokenKind.NUMBER, start)

    def _read_word(self) -> Token:
        start = self.pos
        while self._peek() and (self._peek().isalpha() or _is_digit(self._peek())):
            self._advance()
        token = self._emit(TokenKind.IDENTIFIER, start)
        kind = KEYWORDS.get(token.content)
        if kind is not None:
            return Token(kind, token.start, token.end, token.content)
        return token

    def tokenize(self) -> List[Token]:
        tokens: List[Token] = []
        while True:
            ch = self._peek()
            if ch == '':
                break
            start = self.pos
            if ch in _WHITESPACE:
                self._advance()
            elif ch == ':' and self._peek(1) == '=':
                self._advance(2)
                tokens.append(self._emit(TokenKind.WALRUS, start))
            elif ch in PUNCTUATION:
                self._advance()
                tokens.append(self._emit(PUNCTUATION[ch], start))
            elif _is_digit(ch):
                tokens.append(self._read_number())
            elif ch.isalpha():
                tokens.append(self._read_word())
            else:
                raise UnrecognizedCharacter(ch, self.pos)
        logger.debug("lexed %d tokens from %r", len(tokens), self.text)
        return tokens


def lex(text: str) -> List[Token]:
    """Convert source text to a list of tokens, raising UnrecognizedCharacter on bad input."""
    return Lexer(text).tokenize()
