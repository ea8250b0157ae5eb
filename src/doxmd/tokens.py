from __future__ import annotations

from typing import Callable, Iterator, Optional

from .errors import AttributeListError

WORD_SEPARATORS = frozenset(" \t\r\n[")
# str.isspace() would also accept vertical tab and unicode spaces.
ASCII_WHITESPACE = frozenset(" \t\n\x0c\r")


class Tokens:
    """Forward-only character cursor over a comment."""

    def __init__(self, text: str):
        self._text = text
        self._pos = 0

    @property
    def position(self) -> int:
        return self._pos

    @property
    def exhausted(self) -> bool:
        return self._pos >= len(self._text)

    def peek(self) -> Optional[str]:
        if self._pos < len(self._text):
            return self._text[self._pos]
        return None

    def advance(self) -> Optional[str]:
        ch = self.peek()
        if ch is not None:
            self._pos += 1
        return ch

    def take_while(self, predicate: Callable[[str], bool]) -> str:
        start = self._pos
        end = start
        while end < len(self._text) and predicate(self._text[end]):
            end += 1
        self._pos = end
        return self._text[start:end]

    def skip_while(self, predicate: Callable[[str], bool]) -> None:
        self.take_while(predicate)

    def __iter__(self) -> Iterator[str]:
        while True:
            ch = self.advance()
            if ch is None:
                return
            yield ch


def skip_whitespace(tokens: Tokens) -> None:
    tokens.skip_while(lambda c: c in ASCII_WHITESPACE)


def read_word(tokens: Tokens) -> str:
    return tokens.take_while(lambda c: c not in WORD_SEPARATORS)


def read_attributes(tokens: Tokens) -> str:
    """Consume a ``[...]`` attribute list and return the text between the brackets."""
    if tokens.advance() != "[":
        raise AttributeListError("Expected opening '[' inside attribute list")
    attributes = tokens.take_while(lambda c: c != "]")
    if tokens.advance() != "]":
        raise AttributeListError("Expected closing ']' inside attribute list")
    return attributes
