from __future__ import annotations

import datetime
from typing import List, Optional

from dateutil.relativedelta import relativedelta


def year_of_period(period: int) -> int:
    """1-based projection year for a 1-based monthly period (1..12 -> 1)."""
    return (period - 1) // 12 + 1


def ramp_in_fraction(
    period: int,
    start_month: int,
    full_implementation_month: Optional[int] = None,
    ramp_up_months: int = 0,
) -> float:
    """
    Linear phase-in of a benefit.

    0 before start_month, 1.0 from the full-implementation month onwards,
    evenly stepped in between so the first active month already counts.
    The full month defaults to start_month + ramp_up_months.
    """
    full = full_implementation_month
    if full is None:
        full = start_month + max(ramp_up_months, 0)
    if period < start_month:
        return 0.0
    if period >= full:
        return 1.0
    return (period - start_month + 1) / (full - start_month + 1)


def period_dates(start: datetime.date, n_periods: int) -> List[datetime.date]:
    """Calendar date for each monthly period; period 1 falls on `start`."""
    return [start + relativedelta(months=k) for k in range(n_periods)]
