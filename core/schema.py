"""
BusinessRecord — the structured business description the engine consumes.

Layout follows the business-case JSON documents:

    {"meta": {...}, "assumptions": {...}, "drivers": [...]}

Models are frozen and collections are tuples, so a built record cannot change.
Range checks (percentages in 0..1, positive prices, ...) belong to the schema
validator upstream; only structure is enforced here.
"""

from __future__ import annotations

import datetime
from enum import Enum
from typing import List, Optional, Tuple

from pydantic import Field, field_validator

from volumes import VolumeSpec

from .values import FrozenModel, SeriesPoint, ValueWithRationale


class BusinessModel(str, Enum):
    RECURRING = "recurring"
    UNIT_SALES = "unit_sales"
    COST_SAVINGS = "cost_savings"


class Meta(FrozenModel):
    title: str = ""
    description: str = ""
    business_model: BusinessModel = BusinessModel.UNIT_SALES
    archetype: Optional[str] = None
    currency: str = "EUR"
    periods: int = Field(ge=1)
    frequency: str = "monthly"
    start_date: Optional[datetime.date] = None


# ----- pricing -----


class PricingFactor(FrozenModel):
    year: int  # 1-based projection year
    factor: float
    rationale: str = ""


class PriceOverride(FrozenModel):
    period: int
    price: float
    rationale: str = ""


class PricingAdjustments(FrozenModel):
    pricing_factors: Tuple[PricingFactor, ...] = ()
    price_overrides: Tuple[PriceOverride, ...] = ()


class Pricing(FrozenModel):
    avg_unit_price: Optional[ValueWithRationale] = None
    discount_pct: Optional[ValueWithRationale] = None
    yearly_adjustments: Optional[PricingAdjustments] = None


class Financial(FrozenModel):
    interest_rate: Optional[ValueWithRationale] = None


# ----- customers -----


class Segment(FrozenModel):
    id: str
    label: str = ""
    rationale: str = ""
    volume: Optional[VolumeSpec] = None


class Customers(FrozenModel):
    churn_pct: Optional[ValueWithRationale] = None
    segments: Tuple[Segment, ...] = ()

    @field_validator("segments")
    @classmethod
    def _unique_ids(cls, segments: Tuple[Segment, ...]) -> Tuple[Segment, ...]:
        seen: set = set()
        dupes: List[str] = []
        for s in segments:
            if s.id in seen:
                dupes.append(s.id)
            seen.add(s.id)
        if dupes:
            raise ValueError(f"Duplicate segment ids: {dupes}")
        return segments


class UnitEconomics(FrozenModel):
    cogs_pct: Optional[ValueWithRationale] = None
    cac: Optional[ValueWithRationale] = None  # informational only


# ----- costs -----


class OpexItem(FrozenModel):
    """
    Operating expense line.

    `value` is a flat per-period amount. `fixed_component` takes its place when
    both are given; the variable rates scale with revenue/benefit and with
    total volume (customers or units) respectively.
    """

    name: str
    value: Optional[ValueWithRationale] = None
    fixed_component: Optional[ValueWithRationale] = None
    variable_revenue_rate: Optional[ValueWithRationale] = None
    variable_volume_rate: Optional[ValueWithRationale] = None


class CapexTimeline(FrozenModel):
    type: Optional[str] = "time_series"
    series: Tuple[SeriesPoint, ...] = ()


class CapexItem(FrozenModel):
    name: str
    timeline: Optional[CapexTimeline] = None


# ----- cost savings -----


class ImplementationTimeline(FrozenModel):
    start_month: int = 1
    ramp_up_months: int = 0
    full_implementation_month: Optional[int] = None


class BaselineCost(FrozenModel):
    id: str
    label: str = ""
    category: str = "other"
    current_monthly_cost: ValueWithRationale
    savings_potential_pct: ValueWithRationale
    implementation_timeline: Optional[ImplementationTimeline] = None


class EfficiencyGain(FrozenModel):
    id: str
    label: str = ""
    metric: str = ""
    baseline_value: ValueWithRationale
    improved_value: ValueWithRationale
    value_per_unit: ValueWithRationale
    implementation_timeline: Optional[ImplementationTimeline] = None


class CostSavings(FrozenModel):
    baseline_costs: Tuple[BaselineCost, ...] = ()
    efficiency_gains: Tuple[EfficiencyGain, ...] = ()


class Assumptions(FrozenModel):
    pricing: Optional[Pricing] = None
    financial: Optional[Financial] = None
    customers: Optional[Customers] = None
    unit_economics: Optional[UnitEconomics] = None
    opex: Tuple[OpexItem, ...] = ()
    capex: Tuple[CapexItem, ...] = ()
    cost_savings: Optional[CostSavings] = None


# ----- drivers -----


class Driver(FrozenModel):
    """A path-addressed assumption swept over candidate values."""

    key: str
    path: str
    range: Tuple[float, ...] = ()
    rationale: str = ""

    def candidates(self, steps: Optional[int] = None) -> List[float]:
        """
        Candidate values for a sweep.

        Without `steps` the range is used as given. With `steps`, the range's
        min..max is split into evenly spaced values (slider semantics).
        """
        values = [float(v) for v in self.range]
        if steps is None or not values:
            return values
        low, high = min(values), max(values)
        if steps <= 1 or low == high:
            return [low]
        step_size = (high - low) / (steps - 1)
        return [low + i * step_size for i in range(steps)]


class BusinessRecord(FrozenModel):
    schema_version: Optional[str] = None
    meta: Meta
    assumptions: Assumptions = Assumptions()
    drivers: Tuple[Driver, ...] = ()

    @field_validator("drivers")
    @classmethod
    def _unique_keys(cls, drivers: Tuple[Driver, ...]) -> Tuple[Driver, ...]:
        seen: set = set()
        dupes: List[str] = []
        for d in drivers:
            if d.key in seen:
                dupes.append(d.key)
            seen.add(d.key)
        if dupes:
            raise ValueError(f"Duplicate driver keys: {dupes}")
        return drivers

    @property
    def is_cost_savings(self) -> bool:
        return self.meta.business_model == BusinessModel.COST_SAVINGS

    @property
    def segments(self) -> Tuple[Segment, ...]:
        customers = self.assumptions.customers
        return customers.segments if customers is not None else ()

    @property
    def discount_rate(self) -> Optional[float]:
        """Annual discount rate from financial.interest_rate, if present."""
        financial = self.assumptions.financial
        if financial is None or financial.interest_rate is None:
            return None
        return float(financial.interest_rate.value)
