from collections.abc import Mapping
from datetime import timedelta
from decimal import Decimal
from fractions import Fraction
from typing import Dict, Iterable, Iterator, List, NamedTuple, Optional, Union

UnitValue = Union[timedelta, int, float, Decimal, Fraction]

MICROSECONDS_PER_SECOND = 1_000_000


class Unit(NamedTuple):
    name: str
    microseconds: int

    def as_timedelta(self) -> timedelta:
        return timedelta(microseconds=self.microseconds)


DEFAULT_UNITS: Dict[str, List[str]] = {
    "millisecond": ["ms", "msec", "msecs", "millisecond", "milliseconds"],
    "second": ["s", "sec", "secs", "second", "seconds"],
    "minute": ["m", "min", "mins", "minute", "minutes"],
    "hour": ["h", "hr", "hrs", "hour", "hours"],
}

DEFAULT_VALUES: Dict[str, timedelta] = {
    "millisecond": timedelta(milliseconds=1),
    "second": timedelta(seconds=1),
    "minute": timedelta(minutes=1),
    "hour": timedelta(hours=1),
}


def to_microseconds(value: UnitValue) -> int:
    """Convert a unit value to a positive whole number of microseconds.

    ``timedelta`` values are taken as-is; numbers are read as seconds.
    """
    if isinstance(value, bool):
        raise TypeError("unit value must be a timedelta or a number of seconds")
    if isinstance(value, timedelta):
        micros = (
            value.days * 86400 + value.seconds
        ) * MICROSECONDS_PER_SECOND + value.microseconds
    elif isinstance(value, (int, float, Decimal, Fraction)):
        try:
            exact = Fraction(value)
        except (ValueError, OverflowError) as exc:
            raise ValueError(f"invalid unit value: {value!r}") from exc
        if exact <= 0:
            raise ValueError(f"unit value must be positive, got {value!r}")
        micros = round(exact * MICROSECONDS_PER_SECOND)
    else:
        raise TypeError(
            f"unit value must be a timedelta or a number of seconds, got {value!r}"
        )
    if micros <= 0:
        raise ValueError(f"unit value must be at least one microsecond, got {value!r}")
    return micros


def _check_unit(unit) -> Unit:
    name, micros = unit
    if isinstance(micros, bool) or not isinstance(micros, int):
        raise TypeError(f"unit microseconds must be an int, got {micros!r}")
    if micros <= 0:
        raise ValueError(f"unit value must be at least one microsecond, got {micros!r}")
    return Unit(name, micros)


def _check_alias(alias: str) -> str:
    if not isinstance(alias, str):
        raise TypeError(f"unit alias must be a string, got {alias!r}")
    if not alias or not (alias.isascii() and alias.isalpha()):
        raise ValueError(f"unit alias must be ASCII letters only, got {alias!r}")
    return alias


class UnitTable(Mapping):
    """Mapping of unit alias to :class:`Unit`.

    Aliases keep the case they were added with. Case-insensitive lookups fold
    both sides in :meth:`resolve` instead of at insert time, so the same table
    serves parsers in either mode.
    """

    def __init__(self, units: Optional[Mapping] = None):
        self._units: Dict[str, Unit] = {}
        self._frozen = False
        if units:
            for alias, unit in units.items():
                self._units[_check_alias(alias)] = _check_unit(unit)

    @classmethod
    def default(cls) -> "UnitTable":
        table = cls()
        for name, aliases in DEFAULT_UNITS.items():
            table.add_unit(aliases, DEFAULT_VALUES[name], name=name)
        return table

    def __getitem__(self, alias: str) -> Unit:
        return self._units[alias]

    def __iter__(self) -> Iterator[str]:
        return iter(self._units)

    def __len__(self) -> int:
        return len(self._units)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._units!r})"

    def add_unit(
        self,
        aliases: Union[str, Iterable[str]],
        value: UnitValue,
        name: Optional[str] = None,
    ) -> "UnitTable":
        if isinstance(aliases, str):
            aliases = [aliases]
        aliases = [_check_alias(alias) for alias in aliases]
        if not aliases:
            raise ValueError("at least one alias is required")
        self._check_mutable()
        unit = Unit(name or aliases[0], to_microseconds(value))
        for alias in aliases:
            if self._units.get(alias) == unit:
                continue
            # Re-inserting moves the alias to the end so that the newest
            # definition wins case-insensitive ties.
            self._units.pop(alias, None)
            self._units[alias] = unit
        return self

    def remove_unit(self, alias: str) -> None:
        self._check_mutable()
        del self._units[alias]

    def resolve(self, alias: str, ignore_case: bool = False) -> Optional[Unit]:
        unit = self._units.get(alias)
        if unit is not None or not ignore_case:
            return unit
        folded = alias.lower()
        for candidate in reversed(list(self._units)):
            if candidate.lower() == folded:
                return self._units[candidate]
        return None

    def by_unit(self) -> Dict[Unit, List[str]]:
        """Group aliases by the unit they resolve to, in insertion order."""
        grouped: Dict[Unit, List[str]] = {}
        for alias, unit in self._units.items():
            grouped.setdefault(unit, []).append(alias)
        return grouped

    def _check_mutable(self) -> None:
        if self._frozen:
            raise TypeError("unit table is frozen")

    def copy(self) -> "UnitTable":
        return type(self)(self._units)

    def freeze(self) -> "UnitTable":
        """Return a copy that rejects further changes."""
        table = self.copy()
        table._frozen = True
        return table

    @property
    def frozen(self) -> bool:
        return self._frozen
