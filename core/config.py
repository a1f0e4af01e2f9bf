"""
Engine configuration.
IRR search settings and sweep defaults. Record contents never live here.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class EngineConfig:
    # IRR search range, expressed as a MONTHLY rate
    irr_lower_bound: float = -0.99
    irr_upper_bound: float = 10.0

    # grid used to locate sign-change brackets before brentq refines them
    irr_scan_points: int = 401
    irr_tolerance: float = 1e-10
    irr_max_iterations: int = 200

    # used when a record carries no financial.interest_rate
    default_discount_rate: float = 0.10

    # sensitivity sweeps run sequentially unless > 1
    sweep_max_workers: Optional[int] = None


DEFAULT_CONFIG = EngineConfig()
