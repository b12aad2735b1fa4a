from __future__ import annotations

from datetime import date
from typing import List, NamedTuple

import numpy as np
from dateutil.relativedelta import relativedelta

from .schema import MONTH_NAMES, QUINCENA_DAYS


class PeriodMarker(NamedTuple):
    """A quincena pay date. Field order makes markers sort chronologically."""

    year: int
    month: int  # 0-indexed (0 = Jan)
    day: int

    @property
    def date(self) -> date:
        return date(self.year, self.month + 1, self.day)

    @property
    def label(self) -> str:
        return f"{self.day} {month_name(self.month)} {self.year}"


def round_half_up(x) -> int:
    """Round half away from zero to a whole currency unit (Python's round() is banker's)."""
    x = float(x)
    return int(np.sign(x) * np.floor(np.abs(x) + 0.5))


def month_name(month: int) -> str:
    return MONTH_NAMES[month]


def split_amount(amount: int, day: int) -> int:
    """
    Share of a monthly amount that falls on the given quincena.
    Day 5 takes the floor half, day 20 the remainder, so both halves sum to the amount.
    """
    first = amount // 2
    return first if day == QUINCENA_DAYS[0] else amount - first


def quincena_dates(
    start_day: int,
    start_month: int,
    start_year: int,
    count: int,
) -> List[PeriodMarker]:
    """
    Generate `count` consecutive pay dates starting at the given quincena.
    Day 5 steps to day 20 of the same month; day 20 steps to day 5 of the next
    month, rolling the year after December.
    """
    if start_day not in QUINCENA_DAYS:
        raise ValueError(f"start_day must be one of {QUINCENA_DAYS}, got {start_day}")
    if not 0 <= start_month <= 11:
        raise ValueError(f"start_month must be in 0..11, got {start_month}")
    if count < 0:
        raise ValueError(f"count must be non-negative, got {count}")

    if count == 0:
        return []

    current = date(start_year, start_month + 1, start_day)
    markers = [PeriodMarker(current.year, current.month - 1, current.day)]
    for _ in range(count - 1):
        if current.day == QUINCENA_DAYS[0]:
            current = current.replace(day=QUINCENA_DAYS[1])
        else:
            current = (current + relativedelta(months=1)).replace(day=QUINCENA_DAYS[0])
        markers.append(PeriodMarker(current.year, current.month - 1, current.day))
    return markers


def last_quincena_year(start_day: int, start_month: int, start_year: int, count: int) -> int:
    """Calendar year of the final pay date in a run of `count` quincenas (count >= 1)."""
    offset = start_month * 2 + QUINCENA_DAYS.index(start_day) + count - 1
    return start_year + offset // 24
