"""
Flat pandas views of projections, metrics and sensitivity sweeps.

These are read-only renderings for notebooks, exports and UIs; nothing here
feeds back into the engine.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, List, Optional, Sequence

import numpy as np
import pandas as pd

from .metrics import MetricsBundle

if TYPE_CHECKING:
    from engine.runner import Projection
    from sensitivity.runner import SensitivityPoint


def projection_table(projection: "Projection") -> pd.DataFrame:
    """
    One row per period.

    Columns: period, date (only when the record has a start date),
    volume_<segment id> per segment, total_volume, unit_price,
    revenue_or_benefit, cost_savings_benefit, efficiency_benefit, cogs,
    gross_profit, opex, capex, net_cash_flow, cumulative_cash_flow.
    """
    dates = projection.period_dates
    rows = []
    for i, p in enumerate(projection.periods):
        row: dict = {"period": p.period}
        if dates is not None:
            row["date"] = dates[i]
        for seg_id, volume in p.volume_by_segment.items():
            row[f"volume_{seg_id}"] = volume
        row.update({
            "total_volume": p.total_volume,
            "unit_price": p.unit_price,
            "revenue_or_benefit": p.revenue_or_benefit,
            "cost_savings_benefit": p.cost_savings_benefit,
            "efficiency_benefit": p.efficiency_benefit,
            "cogs": p.cogs,
            "gross_profit": p.gross_profit,
            "opex": p.opex,
            "capex": p.capex,
            "net_cash_flow": p.net_cash_flow,
            "cumulative_cash_flow": projection.cumulative_cash_flow[i],
        })
        rows.append(row)
    return pd.DataFrame(rows)


def metrics_table(metrics: MetricsBundle) -> pd.DataFrame:
    """Metric / Value rows. A failed IRR shows its status code as the value."""
    irr = metrics.irr
    rows = [
        ("Discount Rate (annual)", metrics.annual_discount_rate),
        ("NPV", metrics.npv),
        ("IRR (annual)", irr.rate if irr.ok else irr.status.value),
        ("IRR (monthly)", irr.monthly_rate if irr.ok else irr.status.value),
        ("Payback Period", metrics.payback_period),
        ("Peak Funding Required", metrics.peak_funding_required),
        ("Total Revenue", metrics.total_revenue),
        ("Total Costs", metrics.total_costs),
        ("Net Profit", metrics.net_profit),
        ("Return on Investment", metrics.return_on_investment),
    ]
    return pd.DataFrame(rows, columns=["Metric", "Value"])


def sensitivity_table(results: Dict[str, Sequence["SensitivityPoint"]]) -> pd.DataFrame:
    """Long format: one row per (driver, candidate value), failed points included."""
    rows: List[dict] = [
        point.to_dict() for points in results.values() for point in points
    ]
    return pd.DataFrame(rows)


def tornado_table(
    results: Dict[str, Sequence["SensitivityPoint"]],
    base_metrics: Optional[MetricsBundle] = None,
    metric: str = "npv",
) -> pd.DataFrame:
    """
    Low / high / swing of one metric per driver, largest swing first.

    low and high are the metric at the driver's smallest and largest candidate
    value. Failed points and points where the metric is missing are skipped;
    drivers with no usable point are left out.
    """
    base = base_metrics.to_dict().get(metric) if base_metrics is not None else None

    rows = []
    for key, points in results.items():
        usable = [
            (p.value, p.metrics.to_dict().get(metric))
            for p in points
            if p.ok and p.metrics is not None
        ]
        usable = [(v, m) for v, m in usable if m is not None]
        if not usable:
            continue
        usable.sort(key=lambda vm: vm[0])
        low, high = float(usable[0][1]), float(usable[-1][1])
        rows.append({
            "driver": key,
            "low_value": usable[0][0],
            "high_value": usable[-1][0],
            "low": low,
            "high": high,
            "base": base,
            "swing": float(np.abs(high - low)),
        })

    columns = ["driver", "low_value", "high_value", "low", "high", "base", "swing"]
    if not rows:
        return pd.DataFrame(columns=columns)
    return (
        pd.DataFrame(rows, columns=columns)
        .sort_values("swing", ascending=False, kind="stable")
        .reset_index(drop=True)
    )
