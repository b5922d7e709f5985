"""Tests for QueryWindow and Horizons type enums."""

from datetime import datetime

import pytest

from horizonsjax.horizons import (
    DecodeMode,
    EphemerisLayout,
    FailureKind,
    QueryWindow,
    parse_calendar_date,
)


class TestParseCalendarDate:
    def test_iso_date(self):
        assert parse_calendar_date("2023-01-01") == datetime(2023, 1, 1)

    def test_iso_datetime(self):
        assert parse_calendar_date("2023-01-01 12:30") == datetime(2023, 1, 1, 12, 30)

    def test_month_name(self):
        assert parse_calendar_date("2023-Jan-01 06:00") == datetime(2023, 1, 1, 6, 0)

    def test_invalid(self):
        with pytest.raises(ValueError, match="Unrecognized calendar date"):
            parse_calendar_date("01/01/2023")


class TestQueryWindow:
    def test_defaults(self):
        window = QueryWindow("2000001", "2023-01-01", "2023-06-01")
        assert window.step_size == "1 day"

    def test_same_start_and_stop(self):
        window = QueryWindow("2000001", "2023-01-01", "2023-01-01")
        assert window.start_time == window.stop_time

    def test_start_after_stop_raises(self):
        with pytest.raises(ValueError, match="after stop_time"):
            QueryWindow("2000001", "2023-06-01", "2023-01-01")

    def test_blank_designator_raises(self):
        with pytest.raises(ValueError, match="Designator"):
            QueryWindow("  ", "2023-01-01", "2023-06-01")

    def test_blank_step_raises(self):
        with pytest.raises(ValueError, match="Step size"):
            QueryWindow("1", "2023-01-01", "2023-06-01", step_size="")

    def test_unparsable_date_raises(self):
        with pytest.raises(ValueError, match="Unrecognized"):
            QueryWindow("1", "yesterday", "2023-06-01")

    def test_command(self):
        assert QueryWindow(" 54481740 ", "2023-01-01", "2023-01-02").command() == "'DES=54481740;'"

    def test_params(self):
        window = QueryWindow("54481740", "2006-01-01", "2007-01-20", "1d")
        params = window.to_params()
        assert params == {
            "format": "json",
            "COMMAND": "'DES=54481740;'",
            "OBJ_DATA": "YES",
            "MAKE_EPHEM": "YES",
            "EPHEM_TYPE": "OBSERVER",
            "CENTER": "500@399",
            "START_TIME": "2006-01-01",
            "STOP_TIME": "2007-01-20",
            "STEP_SIZE": "1d",
            "QUANTITIES": "1",
        }

    def test_params_custom_center(self):
        window = QueryWindow("1", "2023-01-01", "2023-01-02")
        assert window.to_params(center="500@899")["CENTER"] == "500@899"

    def test_frozen(self):
        window = QueryWindow("1", "2023-01-01", "2023-01-02")
        with pytest.raises(AttributeError):
            window.designator = "2"

    def test_str(self):
        s = str(QueryWindow("1", "2023-01-01", "2023-01-02"))
        assert "QueryWindow" in s
        assert "2023-01-01" in s


class TestDecodeMode:
    def test_from_str(self):
        assert DecodeMode.from_str("DECIMAL") == DecodeMode.DECIMAL
        assert DecodeMode.from_str(" sexagesimal ") == DecodeMode.SEXAGESIMAL

    def test_from_str_passthrough(self):
        assert DecodeMode.from_str(DecodeMode.CARTESIAN) is DecodeMode.CARTESIAN

    def test_from_str_unknown(self):
        with pytest.raises(ValueError, match="Unknown decode mode"):
            DecodeMode.from_str("ecliptic")

    def test_is_angular(self):
        assert DecodeMode.SEXAGESIMAL.is_angular()
        assert DecodeMode.DECIMAL.is_angular()
        assert not DecodeMode.CARTESIAN.is_angular()

    def test_str_repr(self):
        assert str(DecodeMode.DECIMAL) == "decimal"
        assert repr(DecodeMode.DECIMAL) == "DecodeMode.Decimal"


class TestFailureKind:
    def test_str_repr(self):
        assert str(FailureKind.UPSTREAM_STATUS) == "upstream_status"
        assert repr(FailureKind.MALFORMED_TABLE) == "FailureKind.MalformedTable"


class TestEphemerisLayout:
    def test_default_indices(self):
        layout = EphemerisLayout()
        assert layout.indices(DecodeMode.SEXAGESIMAL) == (2, 3, 4, 5, 6, 7)
        assert layout.indices(DecodeMode.DECIMAL) == (3, 5)
        assert layout.indices(DecodeMode.CARTESIAN) == (2, 3, 4)

    def test_min_fields(self):
        layout = EphemerisLayout()
        assert layout.min_fields(DecodeMode.SEXAGESIMAL) == 8
        assert layout.min_fields(DecodeMode.DECIMAL) == 6
        assert layout.min_fields(DecodeMode.CARTESIAN) == 5

    def test_min_fields_counts_time_fields(self):
        layout = EphemerisLayout(ra_deg=1, dec_deg=2, time_fields=(0, 4))
        assert layout.min_fields(DecodeMode.DECIMAL) == 5
        assert EphemerisLayout(time_fields=(0, 1)).min_fields(DecodeMode.DECIMAL) == 6

    def test_default_time_fields(self):
        assert EphemerisLayout().time_fields == (0,)

    def test_empty_time_fields_raises(self):
        with pytest.raises(ValueError, match="time_fields"):
            EphemerisLayout(time_fields=())
