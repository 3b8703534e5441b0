from datetime import timedelta
from decimal import Decimal
from fractions import Fraction

import pytest

from durstr.units import Unit, UnitTable, to_microseconds


class TestDefaultTable:
    def test_aliases(self):
        table = UnitTable.default()
        assert list(table) == [
            "ms", "msec", "msecs", "millisecond", "milliseconds",
            "s", "sec", "secs", "second", "seconds",
            "m", "min", "mins", "minute", "minutes",
            "h", "hr", "hrs", "hour", "hours",
        ]

    def test_values(self):
        table = UnitTable.default()
        assert table["ms"] == Unit("millisecond", 1_000)
        assert table["seconds"] == Unit("second", 1_000_000)
        assert table["min"].as_timedelta() == timedelta(minutes=1)
        assert table["hrs"].as_timedelta() == timedelta(hours=1)

    def test_each_call_is_independent(self):
        first = UnitTable.default()
        first.add_unit("d", timedelta(days=1))
        assert "d" not in UnitTable.default()


class TestAddUnit:
    def test_single_alias(self):
        table = UnitTable().add_unit("days", timedelta(days=1))
        assert table["days"] == Unit("days", 86_400_000_000)

    def test_many_aliases_share_unit(self):
        table = UnitTable().add_unit(("d", "day", "days"), 86400, name="day")
        assert table["d"] is table["days"]
        assert table["day"].name == "day"

    @pytest.mark.parametrize(
        "value,micros",
        [
            (timedelta(weeks=1), 604_800_000_000),
            (2, 2_000_000),
            (0.5, 500_000),
            (Decimal("0.000001"), 1),
            (Fraction(1, 4), 250_000),
        ],
    )
    def test_value_types(self, value, micros):
        assert to_microseconds(value) == micros

    def test_same_value_is_a_no_op(self):
        table = UnitTable.default()
        before = list(table.items())
        table.add_unit("min", timedelta(minutes=1), name="minute")
        assert list(table.items()) == before

    def test_last_write_wins(self):
        table = UnitTable.default()
        table.add_unit("m", timedelta(days=30), name="month")
        assert table.resolve("m") == Unit("month", 30 * 86_400_000_000)
        assert table.resolve("min").name == "minute"

    @pytest.mark.parametrize(
        "value", [0, -1, timedelta(0), timedelta(seconds=-1), 1e-9, float("nan")]
    )
    def test_rejects_non_positive(self, value):
        with pytest.raises(ValueError):
            UnitTable().add_unit("x", value)

    @pytest.mark.parametrize("value", [True, "60", None])
    def test_rejects_other_types(self, value):
        with pytest.raises(TypeError):
            UnitTable().add_unit("x", value)

    @pytest.mark.parametrize("alias", ["", "two words", "µs", "m2", "-"])
    def test_rejects_unscannable_alias(self, alias):
        with pytest.raises(ValueError):
            UnitTable().add_unit(alias, 1)

    def test_rejects_no_aliases(self):
        with pytest.raises(ValueError):
            UnitTable().add_unit([], 1)


class TestResolve:
    def test_exact(self):
        table = UnitTable.default()
        assert table.resolve("hr").name == "hour"
        assert table.resolve("HR") is None
        assert table.resolve("fortnight") is None

    def test_ignore_case_folds_both_sides(self):
        table = UnitTable().add_unit("Fortnight", timedelta(weeks=2))
        assert table.resolve("fortnight") is None
        assert table.resolve("FORTNIGHT", ignore_case=True).name == "Fortnight"

    def test_newest_folded_match_wins(self):
        table = UnitTable().add_unit("Mo", 1).add_unit("MO", 2)
        assert table.resolve("mo", ignore_case=True) == Unit("MO", 2_000_000)
        table.add_unit("Mo", 3)
        assert table.resolve("mo", ignore_case=True) == Unit("Mo", 3_000_000)


def test_remove_unit():
    table = UnitTable.default()
    table.remove_unit("h")
    assert table.resolve("h") is None
    with pytest.raises(KeyError):
        table.remove_unit("h")


def test_freeze_and_copy():
    table = UnitTable.default()
    frozen = table.freeze()
    assert frozen == table
    assert frozen.frozen and not table.frozen
    with pytest.raises(TypeError):
        frozen.add_unit("d", 86400)
    with pytest.raises(TypeError):
        frozen.remove_unit("s")
    thawed = frozen.copy()
    thawed.add_unit("d", 86400)
    assert "d" in thawed and "d" not in frozen


def test_by_unit_groups_aliases():
    grouped = UnitTable.default().by_unit()
    assert [unit.name for unit in grouped] == ["millisecond", "second", "minute", "hour"]
    assert grouped[Unit("hour", 3_600_000_000)] == ["h", "hr", "hrs", "hour", "hours"]


class TestConstructor:
    def test_accepts_unit_pairs(self):
        table = UnitTable({"wk": ("week", 604_800_000_000)})
        assert table["wk"] == Unit("week", 604_800_000_000)
        assert table.copy() == table

    @pytest.mark.parametrize("micros", [0, -1_000_000])
    def test_rejects_non_positive(self, micros):
        with pytest.raises(ValueError):
            UnitTable({"back": ("back", micros)})

    @pytest.mark.parametrize("micros", [1.5, "60", True])
    def test_rejects_non_integer(self, micros):
        with pytest.raises(TypeError):
            UnitTable({"x": ("x", micros)})
