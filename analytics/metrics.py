"""
Investment metrics computed on a finished projection.

Works from the projection only (never the raw record):
  NPV      = sum_t cf[t] / (1 + annual / 12) ** t,  t = 1..N
  IRR      = see analytics.irr
  Payback  = break-even period of the projection (None if never)
  Peak funding = lowest point of the cumulative cash flow, capped at 0
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, Optional, Sequence

import numpy as np

from core.config import DEFAULT_CONFIG, EngineConfig

from .irr import IrrResult, solve_irr

if TYPE_CHECKING:
    from engine.runner import Projection


def discount_factors(rate: float, periods: int) -> np.ndarray:
    """Return [1/(1+r)^1, ..., 1/(1+r)^periods]."""
    t = np.arange(1, periods + 1, dtype=float)
    return 1.0 / (1.0 + rate) ** t


def present_value(cashflows: Iterable[float], rate: float) -> float:
    """PV at a per-period rate; the first cash flow is discounted one period."""
    cf = np.asarray(list(cashflows), dtype=float)
    if len(cf) == 0:
        return 0.0
    return float(np.sum(cf * discount_factors(rate, len(cf))))


def monthly_rate(annual_rate: float) -> float:
    return annual_rate / 12.0


def npv(cashflows: Iterable[float], annual_discount_rate: float) -> float:
    return present_value(cashflows, monthly_rate(annual_discount_rate))


def peak_funding(cumulative: Sequence[float]) -> float:
    """Deepest cumulative deficit (<= 0); 0.0 if the business never dips below zero."""
    if len(cumulative) == 0:
        return 0.0
    return min(float(min(cumulative)), 0.0)


@dataclass(frozen=True)
class MetricsBundle:
    """Scalar results of one evaluation. IRR may carry a failure status."""

    annual_discount_rate: float
    npv: float
    irr: IrrResult
    payback_period: Optional[int]
    peak_funding_required: float

    total_revenue: float = 0.0
    total_costs: float = 0.0
    net_profit: float = 0.0
    return_on_investment: float = 0.0

    def to_dict(self) -> dict:
        out = {
            "annual_discount_rate": self.annual_discount_rate,
            "npv": self.npv,
            "payback_period": self.payback_period,
            "peak_funding_required": self.peak_funding_required,
            "total_revenue": self.total_revenue,
            "total_costs": self.total_costs,
            "net_profit": self.net_profit,
            "return_on_investment": self.return_on_investment,
        }
        out.update(self.irr.to_dict())
        return out


def compute_metrics(
    projection: "Projection",
    annual_discount_rate: float,
    config: EngineConfig = DEFAULT_CONFIG,
) -> MetricsBundle:
    cashflows = projection.net_cash_flows
    peak = peak_funding(projection.cumulative_cash_flow)

    total_revenue = sum((p.revenue_or_benefit for p in projection.periods), 0.0)
    total_costs = sum((p.total_costs for p in projection.periods), 0.0)
    net_profit = total_revenue - total_costs

    return MetricsBundle(
        annual_discount_rate=annual_discount_rate,
        npv=npv(cashflows, annual_discount_rate),
        irr=solve_irr(cashflows, config),
        payback_period=projection.break_even_period,
        peak_funding_required=peak,
        total_revenue=total_revenue,
        total_costs=total_costs,
        net_profit=net_profit,
        return_on_investment=net_profit / abs(peak) if peak < 0 else 0.0,
    )
