"""
Analytics — investment metrics, IRR solver and tabular views.
"""

from .irr import IrrResult, IrrStatus, solve_irr
from .metrics import MetricsBundle, compute_metrics, npv, peak_funding, present_value
from .tables import metrics_table, projection_table, sensitivity_table, tornado_table

__all__ = [
    "IrrResult",
    "IrrStatus",
    "solve_irr",
    "MetricsBundle",
    "compute_metrics",
    "npv",
    "peak_funding",
    "present_value",
    "metrics_table",
    "projection_table",
    "sensitivity_table",
    "tornado_table",
]
