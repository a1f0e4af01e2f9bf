"""
Core package — record models plus shared configuration and helpers.
No business logic lives here. Record models are in core.schema.
"""

from .config import DEFAULT_CONFIG, EngineConfig
from .errors import EngineError, ErrorCode, InvalidValueError, PathNotFoundError
from .utils import period_dates, ramp_in_fraction, year_of_period
from .values import FrozenModel, SeriesPoint, ValueWithRationale, value_of

__all__ = [
    "DEFAULT_CONFIG",
    "EngineConfig",
    "EngineError",
    "ErrorCode",
    "InvalidValueError",
    "PathNotFoundError",
    "period_dates",
    "ramp_in_fraction",
    "year_of_period",
    "FrozenModel",
    "SeriesPoint",
    "ValueWithRationale",
    "value_of",
]
