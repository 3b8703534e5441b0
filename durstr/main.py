import logging
import sys
from datetime import timedelta
from typing import List, Optional

from .cli import parse_args
from .errors import ParseError
from .parser import Parser, ParserOptions
from .units import MICROSECONDS_PER_SECOND, UnitTable

logger = logging.getLogger("durstr")


def configure_logging(verbose: bool = False) -> None:
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter("[%(asctime)s] %(levelname)s> %(message)s", "%H:%M:%S")
    )
    logger.handlers = [h for h in logger.handlers if isinstance(h, logging.NullHandler)]
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


def build_parser(params) -> Parser:
    table = UnitTable.default()
    for alias, value in params.units:
        logger.debug("unit %s = %s", alias, value)
        table.add_unit(alias, value)
    return Parser(ParserOptions(ignore_case=params.ignore_case, units=table))


def format_duration(value: timedelta, fmt: str) -> str:
    if fmt == "timedelta":
        return str(value)
    micros = value // timedelta(microseconds=1)
    if fmt == "ms":
        millis, rest = divmod(micros, 1000)
        return f"{millis}.{rest:03d}".rstrip("0").rstrip(".")
    if fmt == "seconds":
        seconds, rest = divmod(micros, MICROSECONDS_PER_SECOND)
        return f"{seconds}.{rest:06d}".rstrip("0").rstrip(".")
    raise ValueError(f"Unsupported output format: {fmt}")


def parse_expressions(parser: Parser, expressions: List[str], fmt: str) -> int:
    failures = 0
    for expr in expressions:
        try:
            value = parser.parse(expr)
        except ParseError as exc:
            print(f"[error] {exc}")
            failures += 1
            continue
        print(format_duration(value, fmt))
    return failures


def list_units(parser: Parser) -> None:
    for unit, aliases in parser.units.by_unit().items():
        seconds = format_duration(unit.as_timedelta(), "seconds")
        print(f"{unit.name:>12}: {seconds}s  ({', '.join(aliases)})")


def main(argv: Optional[List[str]] = None):
    params = parse_args(argv if argv is not None else sys.argv[1:])
    configure_logging(params.verbose)
    try:
        parser = build_parser(params)
        if params.command == "parse":
            if parse_expressions(parser, params.expressions, params.format):
                sys.exit(1)
        elif params.command == "units":
            list_units(parser)
        else:
            raise ValueError(f"Unknown command: {params.command}")
    except (ValueError, TypeError) as exc:
        print(f"[error] {exc}")
        sys.exit(1)


if __name__ == "__main__":  # pragma: no cover - exercised via CLI invocation
    main(sys.argv[1:])
