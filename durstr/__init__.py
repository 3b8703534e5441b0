"""Parse human-readable duration strings into :class:`datetime.timedelta`.

>>> from durstr import parse
>>> parse("1hr 2min 3sec")
datetime.timedelta(seconds=3723)
"""

import logging

from .errors import (
    EmptyInput,
    ExpectedNumber,
    ExpectedUnit,
    Overflow,
    ParseError,
    UnknownUnit,
)
from .parser import Parser, ParserOptions, parse, parse_seconds
from .units import Unit, UnitTable

__all__ = [
    "EmptyInput",
    "ExpectedNumber",
    "ExpectedUnit",
    "Overflow",
    "ParseError",
    "Parser",
    "ParserOptions",
    "Unit",
    "UnitTable",
    "UnknownUnit",
    "parse",
    "parse_seconds",
]

logging.getLogger(__name__).addHandler(logging.NullHandler())
