"""Exceptions raised while parsing duration strings.

::

    ValueError
     +- ParseError
         +- EmptyInput
         +- ExpectedNumber
         +- ExpectedUnit
         +- UnknownUnit
         +- Overflow
"""

from typing import Optional


class ParseError(ValueError):
    """Base class for every failure of :func:`durstr.parse`.

    ``text`` is the string being parsed and ``position`` the index of the
    offending character, or ``None`` when the error is not tied to one.
    """

    reason = "invalid duration"

    def __init__(self, text: str, position: Optional[int] = None):
        self.text = text
        self.position = position
        super().__init__(self._message())

    def _detail(self) -> str:
        return self.reason

    def _message(self) -> str:
        detail = self._detail()
        if self.position is None:
            return detail
        return f"{detail} at position {self.position} in {self.text!r}"


class EmptyInput(ParseError):
    reason = "empty duration"

    def _message(self) -> str:
        return f"{self.reason}: {self.text!r}"


class ExpectedNumber(ParseError):
    reason = "expected a number"

    def _detail(self) -> str:
        if self.position is not None and self.position < len(self.text):
            return f"{self.reason}, found {self.text[self.position]!r}"
        return self.reason


class ExpectedUnit(ParseError):
    reason = "expected a unit"

    def _detail(self) -> str:
        if self.position is not None and self.position < len(self.text):
            return f"{self.reason}, found {self.text[self.position]!r}"
        return f"{self.reason}, found end of input"


class UnknownUnit(ParseError):
    reason = "unknown unit"

    def __init__(self, text: str, alias: str, position: Optional[int] = None):
        self.alias = alias
        super().__init__(text, position)

    def _detail(self) -> str:
        return f"{self.reason} {self.alias!r}"


class Overflow(ParseError):
    reason = "duration out of range"
