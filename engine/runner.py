"""
Projection runner — iterates the period aggregator over the whole horizon.

The loop never exits early: break-even is recorded when the running cumulative
cash flow first turns positive, but every period up to meta.periods is still
computed because the metrics need the full series.

Everything here is a pure function of the record. Call it again after every
edit or overlay; nothing is cached.
"""

from __future__ import annotations

import datetime
import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from analytics.metrics import MetricsBundle, compute_metrics
from core.config import DEFAULT_CONFIG, EngineConfig
from core.schema import BusinessRecord
from core.utils import period_dates

from .cashflow import PeriodResult, aggregate_period

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Projection:
    periods: Tuple[PeriodResult, ...]
    cumulative_cash_flow: Tuple[float, ...]
    break_even_period: Optional[int]
    start_date: Optional[datetime.date] = None

    @property
    def n_periods(self) -> int:
        return len(self.periods)

    @property
    def net_cash_flows(self) -> List[float]:
        return [p.net_cash_flow for p in self.periods]

    @property
    def segment_ids(self) -> List[str]:
        return list(self.periods[0].volume_by_segment) if self.periods else []

    @property
    def period_dates(self) -> Optional[List[datetime.date]]:
        if self.start_date is None:
            return None
        return period_dates(self.start_date, self.n_periods)


def project(record: BusinessRecord) -> Projection:
    """Cash-flow projection for periods 1..meta.periods."""
    rows: List[PeriodResult] = []
    cumulative_series: List[float] = []
    break_even: Optional[int] = None

    cumulative = 0.0
    for period in range(1, record.meta.periods + 1):
        row = aggregate_period(record, period)
        cumulative += row.net_cash_flow
        rows.append(row)
        cumulative_series.append(cumulative)
        if break_even is None and cumulative > 0:
            break_even = period

    logger.debug(
        "Projected %r: %d periods, break-even=%s",
        record.meta.title, len(rows), break_even,
    )
    return Projection(
        periods=tuple(rows),
        cumulative_cash_flow=tuple(cumulative_series),
        break_even_period=break_even,
        start_date=record.meta.start_date,
    )


def resolve_discount_rate(
    record: BusinessRecord,
    annual_discount_rate: Optional[float] = None,
    config: EngineConfig = DEFAULT_CONFIG,
) -> float:
    """Explicit rate, else the record's financial.interest_rate, else the config default."""
    if annual_discount_rate is not None:
        return float(annual_discount_rate)
    rate = record.discount_rate
    return rate if rate is not None else config.default_discount_rate


@dataclass(frozen=True)
class Evaluation:
    record: BusinessRecord
    projection: Projection
    metrics: MetricsBundle


def evaluate(
    record: BusinessRecord,
    annual_discount_rate: Optional[float] = None,
    *,
    config: EngineConfig = DEFAULT_CONFIG,
) -> Evaluation:
    """Projection plus metrics for one record."""
    projection = project(record)
    rate = resolve_discount_rate(record, annual_discount_rate, config)
    metrics = compute_metrics(projection, rate, config)
    return Evaluation(record=record, projection=projection, metrics=metrics)
