"""
Explicit per-period volumes, and the catch-all for specs the engine does not
recognise. Neither ever fails: a period with no data has zero volume.
"""

from __future__ import annotations

from typing import Optional, Tuple

from core.values import SeriesPoint

from .base import VolumePattern


class TimeSeriesVolume(VolumePattern):
    type: str = "time_series"
    series: Tuple[SeriesPoint, ...] = ()

    def base_volume(self, period: int) -> float:
        volume = 0.0
        for point in self.series:
            if point.period == period:
                volume = point.value
        return volume


class UnrecognizedVolume(VolumePattern):
    """No known pattern and no series: contributes nothing."""

    pattern_type: Optional[str] = None

    def base_volume(self, period: int) -> float:
        return 0.0

    def volume_at(self, period: int) -> float:
        return 0.0
