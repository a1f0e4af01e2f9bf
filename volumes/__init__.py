"""
Volume patterns — turn a segment's volume specification into per-period volume.
"""

from .base import VolumeAdjustments, VolumeFactor, VolumeOverride, VolumePattern
from .geometric import GeometricGrowth
from .linear import LinearGrowth
from .seasonal import SeasonalGrowth
from .series import TimeSeriesVolume, UnrecognizedVolume
from .spec import VolumeSpec, volume_at, volume_kind

__all__ = [
    "VolumeAdjustments",
    "VolumeFactor",
    "VolumeOverride",
    "VolumePattern",
    "GeometricGrowth",
    "LinearGrowth",
    "SeasonalGrowth",
    "TimeSeriesVolume",
    "UnrecognizedVolume",
    "VolumeSpec",
    "volume_at",
    "volume_kind",
]
