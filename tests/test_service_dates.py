import datetime
import pytest
from ministry_scheduler.service_dates import first_weekday, plan_month, service_dates, shift_month

pytestmark = pytest.mark.unit


class TestServiceDates:
    def test_prayer_friday_first_even_when_sunday_precedes_it(self):
        dates = service_dates(2025, 6)
        assert [d.key for d in dates] == ["06/06", "06/01", "06/08", "06/15", "06/22", "06/29"]
        assert dates[0].label == "Corporate Prayer"
        assert all(d.label is None for d in dates[1:])

    def test_month_with_four_sundays(self):
        dates = service_dates(2024, 11)
        assert dates[0].date == datetime.date(2024, 11, 1)
        assert [d.date.day for d in dates[1:]] == [3, 10, 17, 24]

    def test_custom_prayer_label(self):
        dates = service_dates(2025, 6, prayer_label="Prayer Night")
        assert dates[0].header == "06/06 - Prayer Night"
        assert dates[1].header == "06/01"

    @pytest.mark.parametrize("year", [2024, 2025, 2026])
    @pytest.mark.parametrize("month", range(1, 13))
    def test_structure_holds_for_every_month(self, year, month):
        dates = service_dates(year, month)
        friday, sundays = dates[0], dates[1:]

        assert friday.date.weekday() == 4
        assert friday.date.day <= 7
        assert friday.date.month == month

        assert 4 <= len(sundays) <= 5
        assert all(d.date.weekday() == 6 and d.date.month == month for d in sundays)
        assert sundays[0].date.day <= 7
        days = [d.date for d in sundays]
        assert days == sorted(set(days))
        # no Sunday left out at the end of the month
        assert (days[-1] + datetime.timedelta(days=7)).month != month


class TestMonthHelpers:
    def test_first_weekday(self):
        assert first_weekday(2025, 6, 6) == datetime.date(2025, 6, 1)
        assert first_weekday(2025, 6, 4) == datetime.date(2025, 6, 6)

    @pytest.mark.parametrize(
        "year, month, offset, expected",
        [
            (2025, 12, 1, (2026, 1)),
            (2026, 1, -1, (2025, 12)),
            (2025, 6, 1, (2025, 7)),
            (2025, 6, -13, (2024, 5)),
        ],
    )
    def test_shift_month(self, year, month, offset, expected):
        assert shift_month(year, month, offset) == expected

    def test_plan_month_is_next_month(self):
        assert plan_month(datetime.date(2026, 10, 19)) == (2026, 11)
        assert plan_month(datetime.date(2025, 12, 31)) == (2026, 1)
