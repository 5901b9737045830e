"""Rating-period cutoff used to decide which events count as recent."""

from __future__ import annotations

import calendar
from datetime import date, timedelta

from uscf_roster.core.constants import (
    CUTOFF_OCCURRENCE,
    CUTOFF_OFFSET_DAYS,
    CUTOFF_WEEKDAY,
)
from uscf_roster.core.errors import CutoffError


def weekdays_in_month(year: int, month: int, weekday: int) -> list[date]:
    """All dates of ``month`` falling on ``weekday`` (Monday == 0)."""
    _, days_in_month = calendar.monthrange(year, month)
    return [
        date(year, month, day)
        for day in range(1, days_in_month + 1)
        if date(year, month, day).weekday() == weekday
    ]


def compute_cutoff(today: date | None = None) -> date:
    """Return the boundary date below which event history is ignored.

    The cutoff is two days before the third Wednesday of the month preceding
    ``today`` (defaults to the current date). Published ratings are assumed
    to include every event rated before that point.

    Raises:
        CutoffError: If the previous month has fewer than three Wednesdays.
    """
    if today is None:
        today = date.today()

    last_of_previous = today.replace(day=1) - timedelta(days=1)
    wednesdays = weekdays_in_month(
        last_of_previous.year, last_of_previous.month, CUTOFF_WEEKDAY
    )
    if len(wednesdays) < CUTOFF_OCCURRENCE:
        raise CutoffError(
            f"{last_of_previous:%Y-%m} has only {len(wednesdays)} Wednesdays"
        )
    return wednesdays[CUTOFF_OCCURRENCE - 1] - timedelta(days=CUTOFF_OFFSET_DAYS)
