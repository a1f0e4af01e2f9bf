"""
VolumeSpec — tagged union over the volume patterns.

The tag is derived from the record's `type` / `pattern_type` pair. Every input
resolves to exactly one variant; anything unknown becomes UnrecognizedVolume
so an odd segment contributes zero instead of aborting the run.
"""

from __future__ import annotations

from typing import Annotated, Any, Dict, Optional, Union

from pydantic import Discriminator, Tag

from .geometric import GeometricGrowth
from .linear import LinearGrowth
from .seasonal import SeasonalGrowth
from .series import TimeSeriesVolume, UnrecognizedVolume

GEOMETRIC = "geometric_growth"
LINEAR = "linear_growth"
SEASONAL = "seasonal_growth"
TIME_SERIES = "time_series"
UNRECOGNIZED = "unrecognized"

_PATTERN_TAGS: Dict[str, str] = {
    "geom_growth": GEOMETRIC,
    "geometric_growth": GEOMETRIC,
    "linear_growth": LINEAR,
    "seasonal_growth": SEASONAL,
}


def volume_kind(spec: Any) -> str:
    """Variant tag for a raw dict (validation) or a built pattern (serialization)."""
    if isinstance(spec, dict):
        series_type = spec.get("type")
        pattern_type = spec.get("pattern_type")
    else:
        series_type = getattr(spec, "type", None)
        pattern_type = getattr(spec, "pattern_type", None)

    if series_type == TIME_SERIES:
        return TIME_SERIES
    return _PATTERN_TAGS.get(pattern_type or "", UNRECOGNIZED)


VolumeSpec = Annotated[
    Union[
        Annotated[GeometricGrowth, Tag(GEOMETRIC)],
        Annotated[LinearGrowth, Tag(LINEAR)],
        Annotated[SeasonalGrowth, Tag(SEASONAL)],
        Annotated[TimeSeriesVolume, Tag(TIME_SERIES)],
        Annotated[UnrecognizedVolume, Tag(UNRECOGNIZED)],
    ],
    Discriminator(volume_kind),
]


def volume_at(spec: Optional[VolumeSpec], period: int) -> float:
    """Volume for a 1-based period; a segment without a spec has none."""
    if spec is None:
        return 0.0
    return spec.volume_at(period)
