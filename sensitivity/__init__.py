"""
Sensitivity analysis — path-addressed overlays and driver sweeps.
"""

from .overlay import OverlayResult, get_path, overlay, parse_path
from .runner import SensitivityPoint, evaluate_candidate, run_sensitivity

__all__ = [
    "OverlayResult",
    "get_path",
    "overlay",
    "parse_path",
    "SensitivityPoint",
    "evaluate_candidate",
    "run_sensitivity",
]
