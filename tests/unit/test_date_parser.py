"""Unit tests for end date parsing and formatting."""

import locale
from datetime import datetime, UTC

import pytest

from capacity_reservation.utils.date_parser import format_end_date, parse_end_date


class TestParseIso:
    """ISO-8601 inputs."""

    def test_utc_designator(self):
        assert parse_end_date("2030-01-01T00:00:00Z") == datetime(2030, 1, 1, tzinfo=UTC)

    def test_offset_is_normalized_to_utc(self):
        parsed = parse_end_date("2030-01-01T02:00:00+02:00")

        assert parsed == datetime(2030, 1, 1, tzinfo=UTC)
        assert parsed.utcoffset().total_seconds() == 0

    def test_naive_value_is_treated_as_utc(self):
        assert parse_end_date("2030-06-15T12:30:00") == datetime(2030, 6, 15, 12, 30, tzinfo=UTC)

    def test_fractional_seconds(self):
        parsed = parse_end_date("2030-01-01T00:00:00.250Z")

        assert parsed.microsecond == 250000

    def test_surrounding_whitespace(self):
        assert parse_end_date("  2030-01-01T00:00:00Z ") == datetime(2030, 1, 1, tzinfo=UTC)


class TestParseLegacy:
    """``EEE MMM dd HH:mm:ss zzz yyyy`` inputs."""

    def test_utc_zone(self):
        assert parse_end_date("Tue Jan 01 00:00:00 UTC 2030") == datetime(2030, 1, 1, tzinfo=UTC)

    def test_named_zone_offset(self):
        # 19:00 EST is midnight UTC the next day
        assert parse_end_date("Mon Dec 31 19:00:00 EST 2029") == datetime(2030, 1, 1, tzinfo=UTC)

    def test_gmt_offset_zone(self):
        assert parse_end_date("Tue Jan 01 05:30:00 GMT+05:30 2030") == datetime(2030, 1, 1, tzinfo=UTC)

    def test_unknown_zone(self):
        assert parse_end_date("Tue Jan 01 00:00:00 XYZ 2030") is None

    def test_bad_month(self):
        assert parse_end_date("Tue Foo 01 00:00:00 UTC 2030") is None

    def test_month_case_is_ignored(self):
        assert parse_end_date("tue JAN 01 00:00:00 UTC 2030") == datetime(2030, 1, 1, tzinfo=UTC)

    @pytest.mark.parametrize("value", [
        "Sat Feb 30 00:00:00 UTC 2030",
        "Tue Jan 01 24:00:00 UTC 2030",
    ])
    def test_impossible_date(self, value):
        assert parse_end_date(value) is None

    def test_independent_of_process_locale(self):
        previous = locale.setlocale(locale.LC_TIME)
        for name in ("de_DE.UTF-8", "fr_FR.UTF-8", "es_ES.UTF-8"):
            try:
                locale.setlocale(locale.LC_TIME, name)
                break
            except locale.Error:
                continue
        else:
            pytest.skip("no non-English locale installed")

        try:
            parsed = parse_end_date("Tue Mar 05 00:00:00 UTC 2030")
        finally:
            locale.setlocale(locale.LC_TIME, previous)

        assert parsed == datetime(2030, 3, 5, tzinfo=UTC)


class TestParseRejects:
    """Values that are absent or unparsable."""

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_absent(self, value):
        assert parse_end_date(value) is None

    @pytest.mark.parametrize("value", ["next tuesday", "2030-13-01T00:00:00Z", "01/01/2030"])
    def test_garbage(self, value):
        assert parse_end_date(value) is None


class TestFormatEndDate:
    """Rendering instants for resource models."""

    def test_whole_seconds(self):
        assert format_end_date(datetime(2030, 1, 1, tzinfo=UTC)) == "2030-01-01T00:00:00Z"

    def test_naive_is_utc(self):
        assert format_end_date(datetime(2030, 1, 1, 8, 0, 0)) == "2030-01-01T08:00:00Z"

    def test_microseconds_kept(self):
        value = datetime(2030, 1, 1, 0, 0, 0, 500, tzinfo=UTC)

        assert format_end_date(value) == "2030-01-01T00:00:00.000500Z"

    def test_none(self):
        assert format_end_date(None) is None

    def test_formatted_value_parses_back(self):
        value = datetime(2031, 7, 4, 16, 45, 10, tzinfo=UTC)

        assert parse_end_date(format_end_date(value)) == value
