from datetime import datetime, timedelta, timezone

import pytest

from calperiod import (
    DAY,
    MINUTE,
    BoundaryType,
    Interval,
    OutOfRange,
    day,
    hour,
    instant,
    interval_after,
    interval_around,
    interval_before,
    iso_week,
    iso_year,
    minute,
    month,
    quarter,
    second,
    semester,
    year,
)

PLUS_TWO = timezone(timedelta(hours=2))


class TestMonth:
    def test_february(self):
        """February 2018 runs from the 1st to March 1st and lasts 28 days."""
        february = month(2018, 2)
        assert february == Interval("2018-02-01T00:00:00", "2018-03-01T00:00:00")
        assert february.timedelta == timedelta(days=28)

    def test_from_datepoint(self):
        """Any datepoint inside the month gives the same month."""
        assert month("2018-02-14 13:00") == month(2018, 2)

    @pytest.mark.parametrize("index", [0, 13, -1])
    def test_index_out_of_range(self, index):
        """Month indexes run from 1 to 12."""
        with pytest.raises(OutOfRange, match="Valid range: 1 to 12"):
            month(2018, index)

    def test_zone(self):
        """Int years are laid out in the requested zone."""
        assert month(2018, 2, tz=PLUS_TWO).start == datetime(
            2018, 1, 31, 22, tzinfo=timezone.utc
        )

    def test_boundary_type(self):
        assert month(2018, 2, boundary_type="[]").boundary_type is BoundaryType.INCLUDE_ALL


class TestIsoWeek:
    def test_week_beyond_last_iso_week(self):
        """2018 has 52 ISO weeks."""
        with pytest.raises(OutOfRange, match="Valid range: 1 to 52"):
            iso_week(2018, 60)
        with pytest.raises(OutOfRange):
            iso_week(2018, 53)

    def test_first_week(self):
        """Week 1 of 2018 starts on Monday January 1st."""
        assert iso_week(2018, 1) == Interval("2018-01-01", "2018-01-08")
        assert iso_week(2018) == iso_week(2018, 1)

    def test_week_53(self):
        """Long ISO years accept a 53rd week."""
        assert iso_week(2020, 53) == Interval("2020-12-28", "2021-01-04")

    def test_from_datepoint(self):
        """A Friday belongs to the week starting the Monday before."""
        assert iso_week("2018-06-15") == Interval("2018-06-11", "2018-06-18")


class TestYears:
    def test_year(self):
        """Calendar years run January to January."""
        assert year(2015) == Interval("2015-01-01", "2016-01-01")
        assert year("2015-06-15 10:00") == year(2015)

    def test_iso_year(self):
        # ISO 2015 begins on Monday 2014-12-29 and has 53 weeks
        assert iso_year(2015) == Interval("2014-12-29", "2016-01-04")
        assert iso_year("2016-01-02") == iso_year(2015)

    @pytest.mark.parametrize("value", [0, 9999, 10000])
    def test_out_of_calendar(self, value):
        """Years whose span leaves the datetime range are out of range."""
        with pytest.raises(OutOfRange):
            year(value)


class TestSemesterAndQuarter:
    def test_semesters(self):
        """Semesters start in January and July."""
        assert semester(2018, 1) == Interval("2018-01-01", "2018-07-01")
        assert semester(2018, 2) == Interval("2018-07-01", "2019-01-01")

    def test_june_is_in_first_semester(self):
        assert semester("2018-06-30") == semester(2018, 1)

    def test_quarters(self):
        """Quarters start every three months."""
        assert quarter(2018) == Interval("2018-01-01", "2018-04-01")
        assert quarter(2018, 4) == Interval("2018-10-01", "2019-01-01")
        assert quarter("2018-05-20") == quarter(2018, 2)

    @pytest.mark.parametrize(
        "factory,index", [(semester, 0), (semester, 3), (quarter, 0), (quarter, 5)]
    )
    def test_index_out_of_range(self, factory, index):
        """Indexes outside the unit count are out of range."""
        with pytest.raises(OutOfRange):
            factory(2018, index)


class TestDay:
    def test_leap_day(self):
        """February 29th exists in leap years."""
        assert day(2016, 2, 29) == Interval("2016-02-29", "2016-03-01")

    def test_day_beyond_month(self):
        """Day indexes are bounded by the month's length."""
        with pytest.raises(OutOfRange, match="Valid range: 1 to 28"):
            day(2015, 2, 29)

    def test_month_out_of_range(self):
        with pytest.raises(OutOfRange):
            day(2015, 13, 1)

    def test_from_datepoint(self):
        """Any instant of the day gives the whole day."""
        assert day("2015-02-14 13:00") == Interval("2015-02-14", "2015-02-15")

    def test_local_midnight(self):
        """Days start at local midnight in the requested zone."""
        interval = day("2015-06-14 01:00", tz=PLUS_TWO)
        assert interval.start == datetime(2015, 6, 14, tzinfo=PLUS_TWO)
        assert interval.duration_in_seconds() == DAY


class TestTimeOfDay:
    def test_hour_minute_second(self):
        """Sub-day units truncate the datepoint."""
        point = "2015-01-01 10:30:15.250"
        assert hour(point) == Interval("2015-01-01 10:00", "2015-01-01 11:00")
        assert minute(point) == Interval("2015-01-01 10:30", "2015-01-01 10:31")
        assert minute(point).duration_in_seconds() == MINUTE
        assert second(point) == Interval("2015-01-01 10:30:15", "2015-01-01 10:30:16")

    def test_int_is_a_timestamp(self):
        """Ints given to hour() are Unix timestamps, not years."""
        assert hour(1422662400) == Interval("2015-01-31 00:00", "2015-01-31 01:00")


class TestPointIntervals:
    def test_instant(self):
        """instant() gives a zero-length interval at the datepoint."""
        point = instant("2015-01-01 10:00")
        assert point.is_degenerate
        assert point.start == datetime(2015, 1, 1, 10, tzinfo=timezone.utc)

    def test_closed_instant_contains_itself(self):
        """Only a closed instant holds its own datepoint."""
        assert instant("2015-01-01", boundary_type="[]").contains("2015-01-01")
        assert not instant("2015-01-01").contains("2015-01-01")

    def test_relative_intervals(self):
        """Intervals after, before and around a datepoint."""
        assert interval_after("2015-01-01", "P1D") == Interval("2015-01-01", "2015-01-02")
        assert interval_before("2015-01-01", "1 DAY") == Interval(
            "2014-12-31", "2015-01-01"
        )
        assert interval_around("2015-01-02", DAY) == Interval("2015-01-01", "2015-01-03")

    def test_relative_interval_zone(self):
        """Naive datepoints are read in the requested zone."""
        interval = interval_after("2015-01-01", "PT1H", tz=PLUS_TWO)
        assert interval.start == datetime(2014, 12, 31, 22, tzinfo=timezone.utc)
