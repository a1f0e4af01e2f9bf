from __future__ import annotations

from typing import Optional

from core.values import ValueWithRationale, value_of

from .base import VolumePattern


class LinearGrowth(VolumePattern):
    """Constant monthly increment on top of `start`; never below zero."""

    pattern_type: str = "linear_growth"
    start: Optional[ValueWithRationale] = None
    monthly_flat_increase: Optional[ValueWithRationale] = None

    def base_volume(self, period: int) -> float:
        volume = value_of(self.start) + value_of(self.monthly_flat_increase) * (period - 1)
        return max(volume, 0.0)
