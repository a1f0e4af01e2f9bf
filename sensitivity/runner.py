"""
Sensitivity runner + sweep engine.

For each driver, for each candidate value:
    1. Overlay the value onto the base record (new record, base untouched)
    2. Project the overlaid record
    3. Compute metrics
    4. Collect (value, metrics) as a point

Every (driver, candidate) evaluation is independent, so candidates may be
spread over a thread pool. Output order always follows the driver list and each
driver's candidate order. A bad driver path, a value the field rejects or a
failed evaluation fails only that point; the sweep carries on.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from analytics.metrics import MetricsBundle
from core.config import DEFAULT_CONFIG, EngineConfig
from core.errors import ErrorCode
from core.schema import BusinessRecord, Driver
from engine.runner import evaluate

from .overlay import get_path, overlay

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SensitivityPoint:
    driver_key: str
    path: str
    value: float
    metrics: Optional[MetricsBundle] = None
    error: Optional[ErrorCode] = None
    detail: str = ""
    is_base: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict:
        row = {
            "driver": self.driver_key,
            "path": self.path,
            "value": self.value,
            "is_base": self.is_base,
            "error": self.error.value if self.error is not None else None,
        }
        if self.metrics is not None:
            row.update(self.metrics.to_dict())
        return row


def _base_value(record: BusinessRecord, path: str) -> Optional[float]:
    current = get_path(record, path, default=None)
    if isinstance(current, (int, float)) and not isinstance(current, bool):
        return float(current)
    return None


def evaluate_candidate(
    record: BusinessRecord,
    driver: Driver,
    value: float,
    annual_discount_rate: Optional[float] = None,
    config: EngineConfig = DEFAULT_CONFIG,
) -> SensitivityPoint:
    """One sweep point. `annual_discount_rate=None` uses the overlaid record's own rate."""
    result = overlay(record, driver.path, value)
    if not result.ok:
        logger.warning("Driver %r: %s (%s)", driver.key, result.error.value, result.detail)
        return SensitivityPoint(
            driver_key=driver.key,
            path=driver.path,
            value=value,
            error=result.error,
            detail=result.detail,
        )

    base = _base_value(record, driver.path)
    try:
        evaluation = evaluate(result.record, annual_discount_rate, config=config)
    except Exception as exc:
        logger.warning("Driver %r = %r: evaluation failed", driver.key, value, exc_info=True)
        return SensitivityPoint(
            driver_key=driver.key,
            path=driver.path,
            value=value,
            error=ErrorCode.EVALUATION_FAILED,
            detail=f"{type(exc).__name__}: {exc}",
        )
    return SensitivityPoint(
        driver_key=driver.key,
        path=driver.path,
        value=value,
        metrics=evaluation.metrics,
        is_base=base is not None and abs(value - base) < 1e-10,
    )


def run_sensitivity(
    record: BusinessRecord,
    drivers: Optional[Sequence[Driver]] = None,
    annual_discount_rate: Optional[float] = None,
    *,
    config: EngineConfig = DEFAULT_CONFIG,
    max_workers: Optional[int] = None,
    steps: Optional[int] = None,
    cancel: Optional[threading.Event] = None,
) -> Dict[str, List[SensitivityPoint]]:
    """
    Sweep every driver over its candidates (one driver at a time, not a grid).

    drivers defaults to the record's own drivers. `steps` expands each range's
    min..max into evenly spaced candidates. With `max_workers` > 1 the
    candidates run on a thread pool. Setting `cancel` stops scheduling the
    remaining candidates; points already computed (or running) are returned.

    Raises ValueError if two drivers share a key.
    """
    if drivers is None:
        drivers = record.drivers
    keys = [d.key for d in drivers]
    duplicates = sorted({k for k in keys if keys.count(k) > 1})
    if duplicates:
        raise ValueError(f"Duplicate driver keys: {duplicates}")
    if max_workers is None:
        max_workers = config.sweep_max_workers

    tasks: List[Tuple[Driver, float]] = [
        (d, v) for d in drivers for v in d.candidates(steps)
    ]
    results: Dict[str, List[SensitivityPoint]] = {d.key: [] for d in drivers}

    def cancelled() -> bool:
        return cancel is not None and cancel.is_set()

    if not max_workers or max_workers <= 1:
        for driver, value in tasks:
            if cancelled():
                break
            point = evaluate_candidate(record, driver, value, annual_discount_rate, config)
            results[driver.key].append(point)
    else:
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            futures: List[Future] = [
                pool.submit(evaluate_candidate, record, d, v, annual_discount_rate, config)
                for d, v in tasks
            ]
            stopped = False
            for future in futures:
                if not stopped and cancelled():
                    # only futures that have not started can be cancelled
                    stopped = True
                    for pending in futures:
                        pending.cancel()
                if future.cancelled():
                    continue
                point = future.result()
                results[point.driver_key].append(point)

    logger.debug(
        "Sensitivity sweep: %d drivers, %d points",
        len(results), sum(len(v) for v in results.values()),
    )
    return results
