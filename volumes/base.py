"""
Base classes for volume patterns.
Every pattern evaluates one period at a time; the yearly-adjustment overlay is
shared by all of them.
"""

from __future__ import annotations

from typing import Optional, Tuple

from core.utils import year_of_period
from core.values import FrozenModel


class VolumeFactor(FrozenModel):
    year: int  # 1-based projection year
    factor: float
    rationale: str = ""


class VolumeOverride(FrozenModel):
    period: int
    volume: float
    rationale: str = ""


class VolumeAdjustments(FrozenModel):
    """
    Post-pattern overlay.

    Factors for the period's year multiply the pattern value first; an override
    for the exact period then replaces whatever was computed.
    """

    volume_factors: Tuple[VolumeFactor, ...] = ()
    volume_overrides: Tuple[VolumeOverride, ...] = ()

    def apply(self, volume: float, period: int) -> float:
        year = year_of_period(period)
        for f in self.volume_factors:
            if f.year == year:
                volume *= f.factor
        for o in self.volume_overrides:
            if o.period == period:
                volume = o.volume
        return volume


class VolumePattern(FrozenModel):
    """Interface for per-period segment volume (amount per period)."""

    type: Optional[str] = "pattern"
    yearly_adjustments: Optional[VolumeAdjustments] = None

    def base_volume(self, period: int) -> float:
        raise NotImplementedError

    def volume_at(self, period: int) -> float:
        volume = float(self.base_volume(period))
        if self.yearly_adjustments is not None:
            volume = self.yearly_adjustments.apply(volume, period)
        return volume
