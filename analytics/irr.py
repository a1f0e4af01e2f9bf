"""
Internal rate of return for a monthly cash-flow series.

Solves  sum_t cf[t] / (1 + r) ** t = 0,  t = 1..N,  for the monthly rate r.

Method:
  1. Reject series that never change sign (IRR undefined).
  2. Evaluate NPV on a grid over [irr_lower_bound, irr_upper_bound]. The grid
     is dense around 0 where realistic monthly rates sit; points where NPV
     overflows are skipped.
  3. Among the sign-change brackets, take the one closest to 0 and refine it
     with scipy's brentq.

Failures come back as an IrrResult status, never as an exception or NaN.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Tuple

import numpy as np
from scipy.optimize import brentq

from core.config import DEFAULT_CONFIG, EngineConfig

logger = logging.getLogger(__name__)


class IrrStatus(str, Enum):
    CONVERGED = "CONVERGED"
    NO_SIGN_CHANGE = "IRR_NO_SIGN_CHANGE"
    NO_CONVERGENCE = "IRR_NO_CONVERGENCE"


@dataclass(frozen=True)
class IrrResult:
    status: IrrStatus
    monthly_rate: Optional[float] = None
    rate: Optional[float] = None  # annualised: (1 + monthly) ** 12 - 1
    iterations: int = 0
    detail: str = ""

    @property
    def ok(self) -> bool:
        return self.status == IrrStatus.CONVERGED

    def to_dict(self) -> dict:
        return {
            "irr": self.rate,
            "irr_monthly": self.monthly_rate,
            "irr_status": self.status.value,
        }


def annualize(monthly_rate: float) -> float:
    return (1.0 + monthly_rate) ** 12 - 1.0


def has_sign_change(cashflows: Sequence[float]) -> bool:
    values = np.asarray(cashflows, dtype=float)
    return bool((values > 0).any() and (values < 0).any())


def npv_curve(cashflows: np.ndarray, rates: np.ndarray) -> np.ndarray:
    """NPV at each rate (vectorised). Non-finite where discounting overflows."""
    t = np.arange(1, len(cashflows) + 1, dtype=float)
    with np.errstate(over="ignore", divide="ignore", invalid="ignore"):
        factors = np.power(1.0 + rates[:, np.newaxis], -t[np.newaxis, :])
        return (cashflows[np.newaxis, :] * factors).sum(axis=1)


def scan_grid(lower: float, upper: float, n_points: int) -> np.ndarray:
    """Grid on [lower, upper] that always contains 0 and is cubic-dense near it."""
    u = np.linspace(-1.0, 1.0, max(n_points, 3))
    grid = np.where(u < 0, -lower * u ** 3, upper * u ** 3)
    grid = grid[(grid >= lower) & (grid <= upper)]
    return np.unique(np.concatenate([grid, [0.0]]))


def _closest_bracket(rates: np.ndarray, values: np.ndarray) -> Optional[Tuple[float, float]]:
    finite = np.isfinite(values)
    rates, values = rates[finite], values[finite]
    if len(rates) < 2:
        return None

    crossings = np.nonzero(np.sign(values[:-1]) * np.sign(values[1:]) < 0)[0]
    if len(crossings) == 0:
        return None

    mids = np.abs((rates[crossings] + rates[crossings + 1]) / 2.0)
    i = int(crossings[int(np.argmin(mids))])
    return float(rates[i]), float(rates[i + 1])


def solve_irr(
    cashflows: Sequence[float],
    config: EngineConfig = DEFAULT_CONFIG,
) -> IrrResult:
    """Monthly IRR of `cashflows` (period 1 first), with its annualised form."""
    cf = np.asarray(cashflows, dtype=float)

    if not has_sign_change(cf):
        return IrrResult(
            status=IrrStatus.NO_SIGN_CHANGE,
            detail="cash flows never change sign",
        )

    grid = scan_grid(config.irr_lower_bound, config.irr_upper_bound, config.irr_scan_points)
    curve = npv_curve(cf, grid)

    exact = np.nonzero(np.isfinite(curve) & (curve == 0.0))[0]
    if len(exact):
        r = float(grid[exact[np.argmin(np.abs(grid[exact]))]])
        return IrrResult(status=IrrStatus.CONVERGED, monthly_rate=r, rate=annualize(r))

    bracket = _closest_bracket(grid, curve)
    if bracket is None:
        logger.debug(
            "IRR: no NPV sign change on [%s, %s]", config.irr_lower_bound, config.irr_upper_bound
        )
        return IrrResult(
            status=IrrStatus.NO_CONVERGENCE,
            detail=(
                f"no root within monthly rate range "
                f"[{config.irr_lower_bound}, {config.irr_upper_bound}]"
            ),
        )

    t = np.arange(1, len(cf) + 1, dtype=float)

    def npv_at(rate: float) -> float:
        return float(np.sum(cf / (1.0 + rate) ** t))

    root, info = brentq(
        npv_at,
        bracket[0],
        bracket[1],
        xtol=config.irr_tolerance,
        maxiter=config.irr_max_iterations,
        full_output=True,
        disp=False,
    )
    if not info.converged:
        logger.debug("IRR: brentq stopped after %d iterations (%s)", info.iterations, info.flag)
        return IrrResult(
            status=IrrStatus.NO_CONVERGENCE,
            iterations=int(info.iterations),
            detail=f"iteration budget of {config.irr_max_iterations} exhausted",
        )

    r = float(root)
    return IrrResult(
        status=IrrStatus.CONVERGED,
        monthly_rate=r,
        rate=annualize(r),
        iterations=int(info.iterations),
    )
