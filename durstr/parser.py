import logging
from dataclasses import dataclass, field, replace
from datetime import timedelta
from fractions import Fraction
from typing import Optional

from .errors import Overflow, UnknownUnit
from .scanner import Scanner
from .units import MICROSECONDS_PER_SECOND, UnitTable, to_microseconds

logger = logging.getLogger(__name__)

MAX_MICROSECONDS = to_microseconds(timedelta.max)
MAX_INTEGER_DIGITS = len(str(MAX_MICROSECONDS))

# int() refuses very long strings (sys.get_int_max_str_digits), so long digit
# runs are converted piecewise.
DIGIT_CHUNK = 1000


def _digits_to_int(digits: str) -> int:
    value = 0
    for start in range(0, len(digits), DIGIT_CHUNK):
        chunk = digits[start : start + DIGIT_CHUNK]
        value = value * 10 ** len(chunk) + int(chunk)
    return value


def literal_value(literal: str) -> Optional[Fraction]:
    """Exact value of a scanned number, or ``None`` if its integer part alone
    exceeds the largest representable duration.
    """
    whole, _, fraction = literal.partition(".")
    whole = whole.lstrip("0")
    fraction = fraction.rstrip("0")
    if len(whole) > MAX_INTEGER_DIGITS:
        return None
    value = Fraction(_digits_to_int(whole or "0"))
    if fraction:
        value += Fraction(_digits_to_int(fraction), 10 ** len(fraction))
    return value


@dataclass(frozen=True)
class ParserOptions:
    """Settings for a :class:`Parser`.

    ``ignore_case`` folds unit aliases with ASCII lowercase before lookup.
    ``units`` defaults to :meth:`UnitTable.default`.
    """

    ignore_case: bool = False
    units: UnitTable = field(default_factory=UnitTable.default)

    # units is a mutable mapping
    __hash__ = None

    def replace(self, **changes) -> "ParserOptions":
        return replace(self, **changes)


class Parser:
    """Parse human-written durations such as ``"1hr 2min 3sec"``.

    A parser holds its own copy of the unit table, taken at construction, and
    keeps no state between calls, so one instance can be shared freely.
    """

    def __init__(self, options: Optional[ParserOptions] = None, **overrides):
        options = options or ParserOptions()
        if overrides:
            options = options.replace(**overrides)
        self.options = options.replace(units=options.units.freeze())
        logger.debug(
            "parser created: %d aliases, ignore_case=%s",
            len(self.options.units),
            self.options.ignore_case,
        )

    @property
    def ignore_case(self) -> bool:
        return self.options.ignore_case

    @property
    def units(self) -> UnitTable:
        return self.options.units

    def parse_microseconds(self, text: str) -> int:
        total = 0
        for number, alias in Scanner(text).scan():
            unit = self.units.resolve(alias.text, self.ignore_case)
            if unit is None:
                raise UnknownUnit(text, alias.text, alias.position)
            count = literal_value(number.text)
            if count is None:
                raise Overflow(text, number.position)
            # round() on a Fraction is exact and rounds half to even,
            # matching timedelta's own rounding
            micros = round(count * unit.microseconds)
            if micros > MAX_MICROSECONDS:
                raise Overflow(text, number.position)
            total += micros
            if total > MAX_MICROSECONDS:
                raise Overflow(text, number.position)
        return total

    def parse(self, text: str) -> timedelta:
        return timedelta(microseconds=self.parse_microseconds(text))

    def parse_seconds(self, text: str) -> Fraction:
        """Seconds as a ``Fraction``, at microsecond resolution like :meth:`parse`."""
        return Fraction(self.parse_microseconds(text), MICROSECONDS_PER_SECOND)


_default_parser: Optional[Parser] = None


def default_parser() -> Parser:
    global _default_parser
    if _default_parser is None:
        _default_parser = Parser()
    return _default_parser


def parse(text: str) -> timedelta:
    """Parse ``text`` with the default units, case-sensitively.

    >>> parse("12 minutes, 21 seconds")
    datetime.timedelta(seconds=741)
    """
    return default_parser().parse(text)


def parse_seconds(text: str) -> Fraction:
    return default_parser().parse_seconds(text)
