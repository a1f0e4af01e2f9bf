"""
Shared fixtures: business case payloads in the JSON document layout, and the
BusinessRecords built from them.

  simple_payload        3 months, one geometric segment, no opex/capex
  rich_payload          24 months, two segments, pricing adjustments, opex,
                        up-front capex, interest rate and four drivers
                        (one with a bad path)
  cost_savings_payload  12 months, one phased baseline cost + one efficiency gain
"""

from typing import Any, Dict

import pytest

from core.schema import BusinessRecord


def vwr(value: float, unit: str = "", rationale: str = "") -> Dict[str, Any]:
    return {"value": value, "unit": unit, "rationale": rationale}


@pytest.fixture
def simple_payload() -> Dict[str, Any]:
    return {
        "schema_version": "1.0",
        "meta": {"title": "Simple", "business_model": "unit_sales", "periods": 3},
        "assumptions": {
            "pricing": {"avg_unit_price": vwr(10.0, "EUR")},
            "unit_economics": {"cogs_pct": vwr(0.2, "ratio")},
            "customers": {
                "segments": [
                    {
                        "id": "core",
                        "label": "Core",
                        "volume": {
                            "type": "pattern",
                            "pattern_type": "geom_growth",
                            "start": vwr(100, "units"),
                            "monthly_growth": vwr(0.05, "ratio"),
                        },
                    }
                ]
            },
        },
    }


@pytest.fixture
def simple_record(simple_payload) -> BusinessRecord:
    return BusinessRecord.model_validate(simple_payload)


@pytest.fixture
def rich_payload() -> Dict[str, Any]:
    return {
        "schema_version": "1.0",
        "meta": {
            "title": "Rich",
            "business_model": "unit_sales",
            "currency": "EUR",
            "periods": 24,
            "frequency": "monthly",
            "start_date": "2025-01-31",
        },
        "assumptions": {
            "pricing": {
                "avg_unit_price": vwr(60.0, "EUR"),
                "discount_pct": vwr(0.1, "ratio"),
                "yearly_adjustments": {
                    "pricing_factors": [{"year": 2, "factor": 1.05, "rationale": "indexation"}],
                    "price_overrides": [],
                },
            },
            "financial": {"interest_rate": vwr(0.10, "ratio")},
            "unit_economics": {"cogs_pct": vwr(0.3, "ratio"), "cac": vwr(25.0, "EUR")},
            "customers": {
                "churn_pct": vwr(0.02, "ratio"),
                "segments": [
                    {
                        "id": "retail",
                        "label": "Retail",
                        "volume": {
                            "type": "pattern",
                            "pattern_type": "geom_growth",
                            "start": vwr(50, "units"),
                            "monthly_growth": vwr(0.03, "ratio"),
                        },
                    },
                    {
                        "id": "wholesale",
                        "label": "Wholesale",
                        "volume": {
                            "type": "pattern",
                            "pattern_type": "linear_growth",
                            "start": vwr(20, "units"),
                            "monthly_flat_increase": vwr(2, "units"),
                        },
                    },
                ],
            },
            "opex": [
                {"name": "Team", "value": vwr(1500.0, "EUR")},
                {
                    "name": "Hosting",
                    "fixed_component": vwr(200.0, "EUR"),
                    "variable_volume_rate": vwr(0.5, "EUR/unit"),
                },
            ],
            "capex": [
                {
                    "name": "Launch",
                    "timeline": {
                        "type": "time_series",
                        "series": [{"period": 1, "value": 20000.0, "unit": "EUR"}],
                    },
                }
            ],
        },
        "drivers": [
            {"key": "price", "path": "assumptions.pricing.avg_unit_price.value", "range": [50, 60, 70]},
            {
                "key": "growth",
                "path": "assumptions.customers.segments[0].volume.monthly_growth.value",
                "range": [0.01, 0.03, 0.05],
            },
            {"key": "team_cost", "path": "opex[0].value.value", "range": [1000, 2000]},
            {"key": "broken", "path": "assumptions.pricing.list_price.value", "range": [1, 2]},
        ],
    }


@pytest.fixture
def rich_record(rich_payload) -> BusinessRecord:
    return BusinessRecord.model_validate(rich_payload)


@pytest.fixture
def cost_savings_payload() -> Dict[str, Any]:
    return {
        "meta": {"title": "Automation", "business_model": "cost_savings", "periods": 12},
        "assumptions": {
            "financial": {"interest_rate": vwr(0.08, "ratio")},
            "opex": [{"name": "Licences", "value": vwr(300.0, "EUR")}],
            "capex": [
                {
                    "name": "Implementation",
                    "timeline": {"series": [{"period": 1, "value": 5000.0}]},
                }
            ],
            "cost_savings": {
                "baseline_costs": [
                    {
                        "id": "manual_processing",
                        "label": "Manual processing",
                        "category": "labor",
                        "current_monthly_cost": vwr(10000.0, "EUR"),
                        "savings_potential_pct": vwr(0.2, "ratio"),
                        "implementation_timeline": {"start_month": 1, "ramp_up_months": 3},
                    }
                ],
                "efficiency_gains": [
                    {
                        "id": "throughput",
                        "label": "Orders per hour",
                        "metric": "orders/hour",
                        "baseline_value": vwr(10.0),
                        "improved_value": vwr(12.0),
                        "value_per_unit": vwr(500.0, "EUR"),
                    }
                ],
            },
        },
    }


@pytest.fixture
def cost_savings_record(cost_savings_payload) -> BusinessRecord:
    return BusinessRecord.model_validate(cost_savings_payload)
