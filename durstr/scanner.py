"""Split a duration string into ``(number, alias)`` components."""

import string
from typing import Iterator, NamedTuple, Tuple

from .errors import EmptyInput, ExpectedNumber, ExpectedUnit

NUMBER = "number"
ALIAS = "alias"

SEPARATORS = frozenset(string.whitespace + ",")
DIGITS = frozenset(string.digits)
LETTERS = frozenset(string.ascii_letters)


class Token(NamedTuple):
    kind: str
    text: str
    position: int


Component = Tuple[Token, Token]


class Scanner:
    """Single left-to-right pass over ``source``.

    Whitespace and commas separate components and are otherwise ignored.
    Whitespace between a number and its alias is skipped as well, so
    ``"1hr"`` and ``"1 hr"`` scan the same.
    """

    def __init__(self, source: str):
        self.source = source
        self.pos = 0

    def _peek(self) -> str:
        if self.pos < len(self.source):
            return self.source[self.pos]
        return ""

    def _take_while(self, allowed) -> str:
        start = self.pos
        while self.pos < len(self.source) and self.source[self.pos] in allowed:
            self.pos += 1
        return self.source[start : self.pos]

    def _skip_separators(self) -> None:
        self._take_while(SEPARATORS)

    def _skip_whitespace(self) -> None:
        self._take_while(string.whitespace)

    def scan_number(self) -> Token:
        start = self.pos
        literal = self._take_while(DIGITS)
        if not literal:
            raise ExpectedNumber(self.source, start)
        if self._peek() == "." and self.pos + 1 < len(self.source):
            if self.source[self.pos + 1] in DIGITS:
                self.pos += 1
                literal += "." + self._take_while(DIGITS)
        return Token(NUMBER, literal, start)

    def scan_alias(self) -> Token:
        start = self.pos
        alias = self._take_while(LETTERS)
        if not alias:
            raise ExpectedUnit(self.source, start)
        return Token(ALIAS, alias, start)

    def scan(self) -> Iterator[Component]:
        self._skip_separators()
        if self.pos >= len(self.source):
            raise EmptyInput(self.source)
        while self.pos < len(self.source):
            number = self.scan_number()
            self._skip_whitespace()
            alias = self.scan_alias()
            yield number, alias
            self._skip_separators()
