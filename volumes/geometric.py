"""
GeometricGrowth — compounding volume: start * (1 + g) ** (period - 1).
"""

from __future__ import annotations

from typing import Optional

from pydantic import AliasChoices, Field

from core.values import ValueWithRationale, value_of

from .base import VolumePattern


class GeometricGrowth(VolumePattern):
    """Volume equals `start` at period 1 and compounds by a constant ratio."""

    pattern_type: str = "geom_growth"
    start: Optional[ValueWithRationale] = None
    monthly_growth: Optional[ValueWithRationale] = Field(
        default=None,
        validation_alias=AliasChoices("monthly_growth", "monthly_growth_rate"),
    )

    def base_volume(self, period: int) -> float:
        base = value_of(self.start)
        growth = value_of(self.monthly_growth)
        return base * (1.0 + growth) ** (period - 1)
