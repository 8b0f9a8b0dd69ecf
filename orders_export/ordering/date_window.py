"""Last-week date window calculation."""
from __future__ import annotations

from datetime import datetime, time, timedelta
from typing import Callable

from orders_export.ordering.models import DateWindow


END_OF_DAY = time(23, 59, 59, 999000)


def last_week_window(now: datetime) -> DateWindow:
    """Returns the Monday-Sunday week strictly before the week containing ``now``.

    Offsets are applied to the calendar date and the bounds rebuilt with
    ``datetime.combine``, so DST changes never shift the wall-clock hour.
    """
    today = now.date()
    # weekday(): Monday == 0, so this always lands on last week's Monday
    monday = today - timedelta(days=today.weekday() + 7)
    sunday = monday + timedelta(days=6)

    start = datetime.combine(monday, time.min, tzinfo=now.tzinfo)
    end = datetime.combine(sunday, END_OF_DAY, tzinfo=now.tzinfo)
    return DateWindow(start=start, end=end)


def previous_week_window(clock: Callable[[], datetime] = datetime.now) -> DateWindow:
    return last_week_window(clock())
