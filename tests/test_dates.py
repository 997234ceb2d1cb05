from datetime import datetime, timedelta, timezone

import pytest

from flowdata.dates import (
    MAX_TIME,
    date_string_from_time_point,
    date_string_valid,
    time_point_from_date_string,
)


def test_valid_date_string_is_accepted():
    assert date_string_valid("2022-04-16T13:16:00Z") is True


@pytest.mark.parametrize(
    "value",
    ["abc", "", "2022-04-16", "2022-04-16T13:16:00", "2022-13-16T13:16:00Z", 123, None],
)
def test_invalid_date_strings_are_rejected(value):
    assert date_string_valid(value) is False


def test_parses_to_utc_datetime():
    parsed = time_point_from_date_string("2022-04-16T13:16:00Z")
    assert parsed == datetime(2022, 4, 16, 13, 16, 0, tzinfo=timezone.utc)


def test_ordering_of_parsed_dates():
    start = time_point_from_date_string("2022-04-16T13:16:00Z")
    end = time_point_from_date_string("2022-04-16T13:17:00Z")
    assert end - start == timedelta(minutes=1)


def test_fractional_seconds_are_kept():
    whole = time_point_from_date_string("2022-04-16T13:16:00Z")
    fractional = time_point_from_date_string("2022-04-16T13:16:00.5Z")
    assert fractional - whole == timedelta(milliseconds=500)


def test_invalid_string_gives_max_time():
    assert time_point_from_date_string("abc") == MAX_TIME


def test_formats_utc_datetime():
    value = datetime(2022, 4, 16, 13, 16, 0, tzinfo=timezone.utc)
    assert date_string_from_time_point(value) == "2022-04-16T13:16:00Z"


def test_formats_other_timezone_as_utc():
    value = datetime(2022, 4, 16, 15, 16, 0, tzinfo=timezone(timedelta(hours=2)))
    assert date_string_from_time_point(value) == "2022-04-16T13:16:00Z"


@pytest.mark.parametrize(
    "text", ["2022-04-16T13:16:00Z", "2022-04-17T13:16:00Z", "2022-04-18T13:17:00Z"]
)
def test_round_trip(text):
    assert date_string_from_time_point(time_point_from_date_string(text)) == text