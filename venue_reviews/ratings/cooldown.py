from __future__ import annotations

import calendar
from datetime import datetime

COOLDOWN_MONTHS = 3


def cooldown_cutoff(now: datetime, months: int = COOLDOWN_MONTHS) -> datetime:
    """Return ``now`` moved back by ``months`` calendar months.

    The day is clamped to the target month's length, so 31 May minus three
    months is the last day of February.
    """
    month_index = now.month - 1 - months
    year = now.year + month_index // 12
    month = month_index % 12 + 1
    day = min(now.day, calendar.monthrange(year, month)[1])
    return now.replace(year=year, month=month, day=day)


def is_within_cooldown(submitted_at: datetime, now: datetime, months: int = COOLDOWN_MONTHS) -> bool:
    return submitted_at >= cooldown_cutoff(now, months)
