"""
Monthly benefit of a cost-savings business case.

Two sources, each phased in by its implementation timeline:
  baseline costs:   current_monthly_cost * savings_potential_pct
  efficiency gains: (improved_value - baseline_value) * value_per_unit
"""

from __future__ import annotations

from typing import Optional

from core.schema import CostSavings, ImplementationTimeline
from core.utils import ramp_in_fraction


def timeline_fraction(timeline: Optional[ImplementationTimeline], period: int) -> float:
    """Share of the full effect reached in `period`; no timeline means full effect."""
    if timeline is None:
        return 1.0
    return ramp_in_fraction(
        period,
        timeline.start_month,
        full_implementation_month=timeline.full_implementation_month,
        ramp_up_months=timeline.ramp_up_months,
    )


def cost_savings_benefit(cost_savings: Optional[CostSavings], period: int) -> float:
    if cost_savings is None:
        return 0.0
    total = 0.0
    for item in cost_savings.baseline_costs:
        full = item.current_monthly_cost.value * item.savings_potential_pct.value
        total += full * timeline_fraction(item.implementation_timeline, period)
    return total


def efficiency_benefit(cost_savings: Optional[CostSavings], period: int) -> float:
    if cost_savings is None:
        return 0.0
    total = 0.0
    for gain in cost_savings.efficiency_gains:
        full = (gain.improved_value.value - gain.baseline_value.value) * gain.value_per_unit.value
        total += full * timeline_fraction(gain.implementation_timeline, period)
    return total
