"""
Tests for the pandas table views.
"""

import pandas as pd
import pytest

from analytics.tables import metrics_table, projection_table, sensitivity_table, tornado_table
from engine import evaluate, project
from sensitivity import run_sensitivity


def test_projection_table(rich_record) -> None:
    projection = project(rich_record)
    df = projection_table(projection)

    assert len(df) == 24
    assert list(df.columns[:4]) == ["period", "date", "volume_retail", "volume_wholesale"]
    assert df["cumulative_cash_flow"].tolist() == pytest.approx(list(projection.cumulative_cash_flow))
    assert (df["gross_profit"] == df["revenue_or_benefit"] - df["cogs"]).all()


def test_projection_table_without_dates(simple_record) -> None:
    df = projection_table(project(simple_record))
    assert "date" not in df.columns
    assert df["net_cash_flow"].tolist() == pytest.approx([800.0, 840.0, 882.0])


def test_metrics_table_shows_irr_status(simple_record) -> None:
    df = metrics_table(evaluate(simple_record).metrics)
    values = dict(zip(df["Metric"], df["Value"]))
    assert values["IRR (annual)"] == "IRR_NO_SIGN_CHANGE"
    assert values["Payback Period"] == 1


def test_sensitivity_table_long_format(rich_record) -> None:
    df = sensitivity_table(run_sensitivity(rich_record))
    assert len(df) == 3 + 3 + 2 + 2
    assert set(df["driver"]) == {"price", "growth", "team_cost", "broken"}
    assert df.loc[df["driver"] == "broken", "error"].eq("PATH_NOT_FOUND").all()


def test_tornado_table_sorted_by_swing(rich_record) -> None:
    results = run_sensitivity(rich_record)
    base = evaluate(rich_record).metrics
    df = tornado_table(results, base)

    assert df["swing"].is_monotonic_decreasing
    assert set(df["driver"]) == {"price", "growth", "team_cost"}
    assert "broken" not in set(df["driver"])
    assert (df["base"] == base.npv).all()
    price = df.set_index("driver").loc["price"]
    assert price["low_value"] == 50.0 and price["high_value"] == 70.0
    assert price["swing"] == pytest.approx(abs(price["high"] - price["low"]))


def test_tornado_table_empty() -> None:
    df = tornado_table({})
    assert isinstance(df, pd.DataFrame)
    assert df.empty
    assert "swing" in df.columns
