import argparse
from datetime import timedelta
from typing import Callable, List, Optional, Tuple

from .errors import ParseError
from .parser import Parser, default_parser

FORMATS = ["seconds", "ms", "timedelta"]


def duration_type(parser: Optional[Parser] = None) -> Callable[[str], timedelta]:
    """Build an argparse ``type=`` callable that parses human durations."""

    def _convert(value: str) -> timedelta:
        try:
            return (parser or default_parser()).parse(value)
        except ParseError as exc:
            raise argparse.ArgumentTypeError(str(exc)) from exc

    _convert.__name__ = "duration"
    return _convert


def unit_definition(value: str) -> Tuple[str, timedelta]:
    alias, sep, amount = value.partition("=")
    if not sep or not alias.strip():
        raise argparse.ArgumentTypeError(
            f"expected ALIAS=DURATION (e.g. days=24h), got {value!r}"
        )
    return alias.strip(), duration_type()(amount)


def add_table_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--unit",
        dest="units",
        action="append",
        default=[],
        type=unit_definition,
        metavar="ALIAS=DURATION",
        help="Add or override a unit alias (e.g. days=24h); repeatable",
    )
    parser.add_argument(
        "-i",
        "--ignore-case",
        action="store_true",
        help="Match unit aliases case-insensitively",
    )


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="durstr", description="Parse human-readable durations"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    parse = subparsers.add_parser("parse", help="Parse one or more durations")
    parse.add_argument("expressions", nargs="+", metavar="EXPR", help="Durations")
    parse.add_argument(
        "--format",
        choices=FORMATS,
        default="seconds",
        help="Output format (default: seconds)",
    )
    add_table_arguments(parse)

    units = subparsers.add_parser("units", help="List the known unit aliases")
    add_table_arguments(units)

    return parser


def parse_args(argv: List[str]):
    parser = create_parser()
    return parser.parse_args(argv)
