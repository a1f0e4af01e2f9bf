"""
Period aggregation — one month of the cash-flow table.

Key rules:
  1. Revenue models: revenue = total volume * effective unit price; COGS is a
     share of revenue.
  2. Cost-savings model: the monthly "revenue" is the phased-in benefit and
     there is no COGS.
  3. Opex = fixed + rate * revenue_or_benefit + rate * total volume, per item.
  4. Capex is a point event on the period it is scheduled for.
  5. Full float precision; nothing is rounded here.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Optional

from core.schema import BusinessRecord, CapexItem, OpexItem, Pricing
from core.utils import year_of_period
from core.values import value_of
from volumes import volume_at

from .savings import cost_savings_benefit, efficiency_benefit


@dataclass(frozen=True)
class PeriodResult:
    """Cash-flow row for a single 1-based period."""

    period: int
    volume_by_segment: Dict[str, float] = field(default_factory=dict)
    total_volume: float = 0.0
    unit_price: float = 0.0
    revenue_or_benefit: float = 0.0
    cost_savings_benefit: float = 0.0
    efficiency_benefit: float = 0.0
    cogs: float = 0.0
    opex: float = 0.0
    capex: float = 0.0
    net_cash_flow: float = 0.0

    @property
    def gross_profit(self) -> float:
        return self.revenue_or_benefit - self.cogs

    @property
    def total_costs(self) -> float:
        return self.cogs + self.opex + self.capex


def effective_price(pricing: Optional[Pricing], period: int) -> float:
    """
    Unit price in `period`.

    A per-period override wins outright. Otherwise the average unit price, net
    of the average discount, times every pricing factor for the period's year.
    """
    if pricing is None:
        return 0.0

    adjustments = pricing.yearly_adjustments
    if adjustments is not None:
        override = None
        for o in adjustments.price_overrides:
            if o.period == period:
                override = o.price
        if override is not None:
            return float(override)

    price = value_of(pricing.avg_unit_price) * (1.0 - value_of(pricing.discount_pct))
    if adjustments is not None:
        year = year_of_period(period)
        for f in adjustments.pricing_factors:
            if f.year == year:
                price *= f.factor
    return price


def opex_item_amount(item: OpexItem, revenue_or_benefit: float, total_volume: float) -> float:
    fixed = item.fixed_component if item.fixed_component is not None else item.value
    return (
        value_of(fixed)
        + value_of(item.variable_revenue_rate) * revenue_or_benefit
        + value_of(item.variable_volume_rate) * total_volume
    )


def opex_for_period(
    items: Iterable[OpexItem], revenue_or_benefit: float, total_volume: float
) -> float:
    return sum((opex_item_amount(i, revenue_or_benefit, total_volume) for i in items), 0.0)


def capex_for_period(items: Iterable[CapexItem], period: int) -> float:
    total = 0.0
    for item in items:
        if item.timeline is None:
            continue
        for point in item.timeline.series:
            if point.period == period:
                total += point.value
    return total


def aggregate_period(record: BusinessRecord, period: int) -> PeriodResult:
    """Compute one period's revenue/benefit, costs and net cash flow."""
    a = record.assumptions

    volume_by_segment = {s.id: volume_at(s.volume, period) for s in record.segments}
    total_volume = sum(volume_by_segment.values())

    savings = 0.0
    efficiency = 0.0
    if record.is_cost_savings:
        unit_price = 0.0
        savings = cost_savings_benefit(a.cost_savings, period)
        efficiency = efficiency_benefit(a.cost_savings, period)
        revenue_or_benefit = savings + efficiency
        cogs = 0.0
    else:
        unit_price = effective_price(a.pricing, period)
        revenue_or_benefit = total_volume * unit_price
        cogs_pct = value_of(a.unit_economics.cogs_pct) if a.unit_economics is not None else 0.0
        cogs = revenue_or_benefit * cogs_pct

    opex = opex_for_period(a.opex, revenue_or_benefit, total_volume)
    capex = capex_for_period(a.capex, period)

    return PeriodResult(
        period=period,
        volume_by_segment=volume_by_segment,
        total_volume=total_volume,
        unit_price=unit_price,
        revenue_or_benefit=revenue_or_benefit,
        cost_savings_benefit=savings,
        efficiency_benefit=efficiency,
        cogs=cogs,
        opex=opex,
        capex=capex,
        net_cash_flow=revenue_or_benefit - cogs - opex - capex,
    )
