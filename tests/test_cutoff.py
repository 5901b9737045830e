from datetime import date, timedelta

import pytest

from uscf_roster.core import cutoff as cutoff_mod
from uscf_roster.core.cutoff import compute_cutoff, weekdays_in_month
from uscf_roster.core.errors import CutoffError


@pytest.mark.parametrize(
    ("today", "expected"),
    [
        # Feb 2024: Wednesdays 7, 14, 21, 28
        (date(2024, 3, 15), date(2024, 2, 19)),
        (date(2024, 3, 1), date(2024, 2, 19)),
        (date(2024, 3, 31), date(2024, 2, 19)),
        # Dec 2024 (year boundary): Wednesdays 4, 11, 18, 25
        (date(2025, 1, 10), date(2024, 12, 16)),
        # Sep 2026: Wednesdays 2, 9, 16, 23, 30
        (date(2026, 10, 19), date(2026, 9, 14)),
    ],
)
def test_cutoff_known_dates(today: date, expected: date):
    assert compute_cutoff(today) == expected


def test_cutoff_before_current_month_for_every_day():
    day = date(2023, 1, 1)
    while day < date(2027, 1, 1):
        result = compute_cutoff(day)
        assert result < day.replace(day=1)
        assert compute_cutoff(day) == result
        day += timedelta(days=1)


def test_weekdays_in_month():
    wednesdays = weekdays_in_month(2024, 2, 2)
    assert wednesdays == [date(2024, 2, d) for d in (7, 14, 21, 28)]


def test_cutoff_fails_fast_without_third_wednesday(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(
        cutoff_mod,
        "weekdays_in_month",
        lambda year, month, weekday: [date(year, month, 1), date(year, month, 8)],
    )
    with pytest.raises(CutoffError, match="only 2 Wednesdays"):
        compute_cutoff(date(2024, 3, 15))


def test_cutoff_defaults_to_today():
    today = date.today()
    assert compute_cutoff() == compute_cutoff(today)
