"""
Shared building blocks for BusinessRecord models.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict


class FrozenModel(BaseModel):
    """Immutable record node. Unknown keys in the input JSON are dropped."""

    model_config = ConfigDict(frozen=True, extra="ignore")


class ValueWithRationale(FrozenModel):
    """A number plus its unit and free-text justification (never computed on)."""

    value: float
    unit: str = ""
    rationale: str = ""


class SeriesPoint(FrozenModel):
    period: int
    value: float
    unit: str = ""
    rationale: str = ""


def value_of(item: Optional[ValueWithRationale], default: float = 0.0) -> float:
    """Numeric value of an optional assumption; absent means `default`."""
    if item is None:
        return default
    return float(item.value)
