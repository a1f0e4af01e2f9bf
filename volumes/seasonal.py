"""
SeasonalGrowth — annual total spread over calendar months by a 12-entry index.

    year          = (period - 1) // 12
    month_in_year = (period - 1) % 12
    volume        = base_year_total / 12 * index[month_in_year] * (1 + yoy) ** year

An index averaging 1.0 makes the twelve months of year 1 sum to the annual
total. Months missing from a short index count as 1.0.
"""

from __future__ import annotations

from typing import Optional, Tuple

from pydantic import field_validator

from core.values import ValueWithRationale, value_of

from .base import VolumePattern


class SeasonalGrowth(VolumePattern):
    pattern_type: str = "seasonal_growth"
    seasonality_index_12: Optional[Tuple[float, ...]] = None
    base_year_total: Optional[ValueWithRationale] = None
    yoy_growth: Optional[ValueWithRationale] = None

    @field_validator("seasonality_index_12", mode="before")
    @classmethod
    def _unwrap_index(cls, v):
        # growth settings store the index as {"value": [...], "unit": ..., ...}
        if isinstance(v, dict):
            return v.get("value")
        return v

    def base_volume(self, period: int) -> float:
        if self.base_year_total is None or not self.seasonality_index_12:
            return 0.0

        year = (period - 1) // 12
        month_in_year = (period - 1) % 12
        index = self.seasonality_index_12
        seasonal_factor = index[month_in_year] if month_in_year < len(index) else 1.0

        monthly_base = value_of(self.base_year_total) / 12.0
        return monthly_base * seasonal_factor * (1.0 + value_of(self.yoy_growth)) ** year
