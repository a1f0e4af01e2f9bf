"""
Cash-flow projection engine — deterministic monthly aggregation + projection runner.
"""

from .cashflow import PeriodResult, aggregate_period, effective_price
from .runner import Evaluation, Projection, evaluate, project

__all__ = [
    "PeriodResult",
    "aggregate_period",
    "effective_price",
    "Evaluation",
    "Projection",
    "evaluate",
    "project",
]
