import datetime
from ministry_scheduler.constants import PRAYER_LABEL, PRAYER_WEEKDAY, SERVICE_WEEKDAY
from ministry_scheduler.models import ServiceDate


def first_weekday(year: int, month: int, weekday: int) -> datetime.date:
    """Return the first date in the month falling on weekday (Monday=0)."""
    first = datetime.date(year, month, 1)
    return first + datetime.timedelta(days=(weekday - first.weekday()) % 7)


def service_dates(year: int, month: int, prayer_label: str = PRAYER_LABEL) -> list[ServiceDate]:
    """
    Return the service dates for a month (month is 1-based).

    The first Friday (prayer gathering) is always the first element, even when
    a Sunday comes before it; every Sunday of the month follows in calendar order.
    """
    dates = [ServiceDate(first_weekday(year, month, PRAYER_WEEKDAY), prayer_label)]

    sunday = first_weekday(year, month, SERVICE_WEEKDAY)
    while sunday.month == month:
        dates.append(ServiceDate(sunday))
        sunday += datetime.timedelta(days=7)
    return dates


def shift_month(year: int, month: int, offset: int) -> tuple[int, int]:
    """Move (year, month) by offset months, e.g. (2025, 12) + 1 -> (2026, 1)."""
    index = year * 12 + (month - 1) + offset
    return index // 12, index % 12 + 1


def plan_month(today: datetime.date | None = None) -> tuple[int, int]:
    """The month being planned is the one after today's."""
    today = today or datetime.date.today()
    return shift_month(today.year, today.month, 1)
