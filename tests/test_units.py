from datetime import datetime, timedelta, timezone

import pytest
from dateutil.relativedelta import relativedelta

from calperiod import (
    days_in_month,
    iso_weeks_in_year,
    start_of,
    unit_duration,
    unit_length,
)

UTC = timezone.utc
REFERENCE = datetime(2018, 6, 15, 13, 45, 12, 500, tzinfo=UTC)


@pytest.mark.parametrize(
    "unit,expected",
    [
        ("year", datetime(2018, 1, 1, tzinfo=UTC)),
        ("semester", datetime(2018, 1, 1, tzinfo=UTC)),
        ("quarter", datetime(2018, 4, 1, tzinfo=UTC)),
        ("month", datetime(2018, 6, 1, tzinfo=UTC)),
        ("iso_week", datetime(2018, 6, 11, tzinfo=UTC)),
        ("day", datetime(2018, 6, 15, tzinfo=UTC)),
        ("hour", datetime(2018, 6, 15, 13, tzinfo=UTC)),
        ("minute", datetime(2018, 6, 15, 13, 45, tzinfo=UTC)),
        ("second", datetime(2018, 6, 15, 13, 45, 12, tzinfo=UTC)),
    ],
)
def test_start_of(unit, expected):
    """A Friday afternoon aligns to the start of every enclosing unit."""
    assert start_of(REFERENCE, unit) == expected


def test_june_belongs_to_first_semester():
    """Semesters split between June and July."""
    assert start_of(datetime(2018, 6, 30, tzinfo=UTC), "semester").month == 1
    assert start_of(datetime(2018, 7, 1, tzinfo=UTC), "semester").month == 7


def test_iso_year_start_can_fall_in_previous_calendar_year():
    # 2021-01-02 is in ISO week 53 of 2020, which began on 2019-12-30
    assert start_of(datetime(2021, 1, 2, tzinfo=UTC), "iso_year") == datetime(
        2019, 12, 30, tzinfo=UTC
    )


def test_start_of_keeps_zone():
    """Alignment happens on the wall clock of the instant's own zone."""
    plus_two = timezone(timedelta(hours=2))
    result = start_of(datetime(2018, 6, 15, 1, tzinfo=plus_two), "day")
    assert result.tzinfo is plus_two
    assert result == datetime(2018, 6, 14, 22, tzinfo=UTC)


def test_unknown_unit():
    with pytest.raises(ValueError, match="Invalid calendar unit"):
        start_of(REFERENCE, "fortnight")


class TestUnitDuration:
    def test_fixed_units(self):
        """Most units have one fixed calendar length."""
        assert unit_duration("month") == relativedelta(months=1)
        assert unit_duration("semester") == relativedelta(months=6)
        assert unit_duration("iso_week") == relativedelta(weeks=1)

    def test_iso_year_depends_on_start(self):
        """ISO years last 52 or 53 weeks."""
        assert unit_duration(
            "iso_year", datetime(2018, 1, 1, tzinfo=UTC)
        ) == relativedelta(weeks=52)
        assert unit_duration(
            "iso_year", datetime(2019, 12, 30, tzinfo=UTC)
        ) == relativedelta(weeks=53)

    def test_iso_year_requires_start(self):
        """Without a start the ISO year length is unknown."""
        with pytest.raises(ValueError):
            unit_duration("iso_year")


class TestUnitLength:
    def test_days_in_month(self):
        """Day counts follow the month and leap years."""
        assert unit_length("day", datetime(2016, 2, 10, tzinfo=UTC)) == 29
        assert unit_length("day", datetime(2015, 2, 10, tzinfo=UTC)) == 28
        assert days_in_month(2015, 1) == 31

    def test_iso_weeks(self):
        """ISO week counts follow the ISO year."""
        assert unit_length("iso_week", datetime(2015, 6, 1, tzinfo=UTC)) == 53
        assert iso_weeks_in_year(2018) == 52
        assert iso_weeks_in_year(2020) == 53

    @pytest.mark.parametrize(
        "unit,expected",
        [("month", 12), ("quarter", 4), ("semester", 2), ("hour", 24), ("minute", 60)],
    )
    def test_fixed(self, unit, expected):
        assert unit_length(unit, REFERENCE) == expected

    def test_year_has_no_enclosing_unit(self):
        """Years are the outermost unit."""
        with pytest.raises(ValueError):
            unit_length("year", REFERENCE)
