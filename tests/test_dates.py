from datetime import datetime, timezone

import pytest

from newswatch.dates import (
    EPOCH,
    normalize_date,
    parse_date,
    parse_iso8601,
    parse_rfc822_named,
    parse_rfc822_numeric,
)


def utc(*args):
    return datetime(*args, tzinfo=timezone.utc)


class TestRfc822:
    def test_numeric_offset(self):
        assert parse_rfc822_numeric("Wed, 02 Oct 2002 13:00:00 +0100") == utc(2002, 10, 2, 12, 0, 0)

    def test_negative_offset_with_minutes(self):
        assert parse_rfc822_numeric("Wed, 02 Oct 2002 13:00:00 -0530") == utc(2002, 10, 2, 18, 30, 0)

    def test_named_zone(self):
        assert parse_rfc822_named("Wed, 02 Oct 2002 13:00:00 GMT") == utc(2002, 10, 2, 13, 0, 0)

    def test_named_us_zone(self):
        assert parse_rfc822_named("Wed, 02 Oct 2002 08:00:00 EST") == utc(2002, 10, 2, 13, 0, 0)

    def test_unknown_zone_name_does_not_match(self):
        assert parse_rfc822_named("Wed, 02 Oct 2002 13:00:00 XYZ") is None

    def test_numeric_parser_rejects_named_zone(self):
        assert parse_rfc822_numeric("Wed, 02 Oct 2002 13:00:00 GMT") is None

    def test_single_digit_day_and_missing_weekday(self):
        assert parse_date("2 Oct 2002 13:00:00 +0000") == utc(2002, 10, 2, 13, 0, 0)

    def test_invalid_calendar_date(self):
        assert parse_date("Mon, 31 Feb 2002 13:00:00 +0000") is None


class TestIso8601:
    def test_colon_offset(self):
        assert parse_iso8601("2024-03-05T10:15:30+01:00") == utc(2024, 3, 5, 9, 15, 30)

    def test_zulu(self):
        assert parse_iso8601("2024-03-05T10:15:30Z") == utc(2024, 3, 5, 10, 15, 30)

    def test_fractional_seconds(self):
        assert parse_iso8601("2024-03-05T10:15:30.250Z") == utc(2024, 3, 5, 10, 15, 30)

    def test_requires_zone(self):
        assert parse_iso8601("2024-03-05T10:15:30") is None


def test_results_are_utc():
    parsed = parse_date("Tue, 05 Mar 2024 10:15:30 +0200")
    assert parsed.tzinfo == timezone.utc


def test_numeric_offset_wins_over_later_formats():
    assert parse_date("Tue, 05 Mar 2024 10:15:30 +0000") == utc(2024, 3, 5, 10, 15, 30)


@pytest.mark.parametrize("text", ["not a date", "", None, "05/03/2024 10:15", "Mär 5 2024"])
def test_unparsable_falls_back_to_epoch(text):
    assert parse_date(text) is None
    assert normalize_date(text) == EPOCH


def test_fallback_sorts_last():
    dates = [normalize_date("not a date"), normalize_date("Tue, 05 Mar 2024 10:15:30 GMT"), normalize_date("")]
    ordered = sorted(dates, reverse=True)
    assert ordered[0] == utc(2024, 3, 5, 10, 15, 30)
    assert ordered[1:] == [EPOCH, EPOCH]


@pytest.mark.parametrize(
    "text",
    [
        "Mon, 01 Jan 0001 00:00:00 +0100",
        "Fri, 31 Dec 9999 23:59:59 -0100",
        "0001-01-01T00:00:00+01:00",
        "9999-12-31T23:59:59-01:00",
    ],
)
def test_dates_outside_utc_range_fall_back_to_epoch(text):
    assert parse_date(text) is None
    assert normalize_date(text) == EPOCH


def test_out_of_range_parsers_return_none():
    assert parse_rfc822_numeric("Mon, 01 Jan 0001 00:00:00 +0100") is None
    assert parse_rfc822_named("Mon, 01 Jan 0001 00:00:00 CET") is None
    assert parse_iso8601("0001-01-01T00:00:00+01:00") is None


def test_raising_parser_counts_as_no_match():
    def broken(text):
        raise OverflowError("date value out of range")

    assert parse_date("Wed, 02 Oct 2002 13:00:00 GMT", parsers=(broken, parse_rfc822_named)) == utc(2002, 10, 2, 13, 0, 0)


class TestZoneNames:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("Wed, 02 Oct 2002 13:00:00 GMT+01:00", utc(2002, 10, 2, 12, 0, 0)),
            ("Wed, 02 Oct 2002 13:00:00 GMT-05:00", utc(2002, 10, 2, 18, 0, 0)),
            ("Wed, 02 Oct 2002 13:00:00 UTC+0530", utc(2002, 10, 2, 7, 30, 0)),
            ("Wed, 02 Oct 2002 13:00:00 GMT+1", utc(2002, 10, 2, 12, 0, 0)),
        ],
    )
    def test_gmt_with_explicit_offset(self, text, expected):
        assert normalize_date(text) == expected

    @pytest.mark.parametrize(
        "zone, hour, minute",
        [("JST", 4, 0), ("IST", 7, 30), ("AEST", 3, 0), ("SAST", 11, 0), ("HKT", 5, 0)],
    )
    def test_common_abbreviations(self, zone, hour, minute):
        assert normalize_date(f"Wed, 02 Oct 2002 13:00:00 {zone}") == utc(2002, 10, 2, hour, minute, 0)

    def test_offset_only_allowed_after_gmt_or_utc(self):
        assert parse_rfc822_named("Wed, 02 Oct 2002 13:00:00 EST+01:00") is None
