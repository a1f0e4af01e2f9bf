"""
Tests for path-addressed overlays on a BusinessRecord.
"""

import pytest

from core.errors import ErrorCode, InvalidValueError, PathNotFoundError
from engine import evaluate
from sensitivity.overlay import get_path, overlay, parse_path

PRICE = "assumptions.pricing.avg_unit_price.value"


class TestParsePath:
    def test_fields_and_indices(self) -> None:
        assert parse_path("assumptions.customers.segments[1].volume.start.value") == [
            "assumptions", "customers", "segments", 1, "volume", "start", "value",
        ]

    def test_nested_indices(self) -> None:
        assert parse_path("a[0][2].b") == ["a", 0, 2, "b"]


class TestOverlay:
    def test_replaces_leaf_and_keeps_input(self, rich_record) -> None:
        result = overlay(rich_record, PRICE, 75.0)
        assert result.ok
        assert get_path(result.record, PRICE) == 75.0
        assert get_path(rich_record, PRICE) == 60.0

    def test_keeps_metadata_beside_the_value(self, rich_record) -> None:
        new = overlay(rich_record, PRICE, 75.0).unwrap()
        assert new.assumptions.pricing.avg_unit_price.unit == "EUR"

    def test_untouched_subtrees_are_shared(self, rich_record) -> None:
        new = overlay(rich_record, PRICE, 75.0).unwrap()
        assert new.meta is rich_record.meta
        assert new.assumptions.customers is rich_record.assumptions.customers
        assert new.assumptions.opex is rich_record.assumptions.opex
        assert new.assumptions.pricing.yearly_adjustments is rich_record.assumptions.pricing.yearly_adjustments

    def test_current_value_gives_identical_results(self, rich_record) -> None:
        new = overlay(rich_record, PRICE, 60.0).unwrap()
        assert new == rich_record
        assert evaluate(new).metrics == evaluate(rich_record).metrics

    def test_path_relative_to_assumptions(self, rich_record) -> None:
        new = overlay(rich_record, "opex[0].value.value", 1800.0).unwrap()
        assert new.assumptions.opex[0].value.value == 1800.0
        assert new.assumptions.opex[1] is rich_record.assumptions.opex[1]

    def test_list_element_inside_volume_spec(self, rich_record) -> None:
        path = "assumptions.customers.segments[0].volume.monthly_growth.value"
        new = overlay(rich_record, path, 0.07).unwrap()
        assert new.segments[0].volume.monthly_growth.value == 0.07
        assert new.segments[1] is rich_record.segments[1]

    def test_capex_series_point(self, rich_record) -> None:
        new = overlay(rich_record, "assumptions.capex[0].timeline.series[0].value", 5000).unwrap()
        assert new.assumptions.capex[0].timeline.series[0].value == 5000.0
        assert isinstance(new.assumptions.capex[0].timeline.series[0].value, float)

    def test_integer_leaf_keeps_integer(self, rich_record) -> None:
        new = overlay(rich_record, "meta.periods", 12.0).unwrap()
        assert new.meta.periods == 12
        assert isinstance(new.meta.periods, int)

    def test_creates_absent_optional_value(self, rich_record) -> None:
        new = overlay(rich_record, "opex[0].variable_revenue_rate.value", 0.02).unwrap()
        assert new.assumptions.opex[0].variable_revenue_rate.value == 0.02
        assert rich_record.assumptions.opex[0].variable_revenue_rate is None


class TestPathNotFound:
    @pytest.mark.parametrize(
        "path",
        [
            "assumptions.pricing.list_price.value",
            "assumptions.customers.segments[5].volume.start.value",
            "assumptions.pricing[0].avg_unit_price.value",
            "assumptions.pricing.avg_unit_price",
            "assumptions.opex",
            "nonsense.value",
            "assumptions..pricing",
            "",
        ],
    )
    def test_unresolvable(self, rich_record, path: str) -> None:
        result = overlay(rich_record, path, 1.0)
        assert not result.ok
        assert result.error == ErrorCode.PATH_NOT_FOUND
        assert result.record is None
        assert result.detail

    def test_absent_parent_is_not_created(self, simple_record) -> None:
        result = overlay(simple_record, "assumptions.financial.interest_rate.value", 0.1)
        assert result.error == ErrorCode.PATH_NOT_FOUND

    def test_absent_model_field_is_not_a_value(self, simple_record) -> None:
        result = overlay(simple_record, "pricing.discount_pct", 0.1)
        assert result.error == ErrorCode.PATH_NOT_FOUND
        assert "is not a value" in result.detail

    @pytest.mark.parametrize("path", ["financial", "unit_economics.cac", "customers.segments[0].volume"])
    def test_structure_paths_are_not_values(self, simple_record, path: str) -> None:
        assert overlay(simple_record, path, 0.1).error == ErrorCode.PATH_NOT_FOUND

    def test_unwrap_raises(self, rich_record) -> None:
        with pytest.raises(PathNotFoundError) as exc_info:
            overlay(rich_record, "assumptions.pricing.list_price.value", 1.0).unwrap()
        assert exc_info.value.code == ErrorCode.PATH_NOT_FOUND
        assert exc_info.value.path == "assumptions.pricing.list_price.value"


class TestGetPath:
    def test_reads_value(self, rich_record) -> None:
        assert get_path(rich_record, "customers.segments[1].id") == "wholesale"

    def test_default(self, rich_record) -> None:
        assert get_path(rich_record, "pricing.list_price.value", default=None) is None

    def test_raises_without_default(self, rich_record) -> None:
        with pytest.raises(LookupError):
            get_path(rich_record, "pricing.list_price.value")


class TestLeafValidation:
    def test_fractional_period_count_rejected(self, rich_record) -> None:
        result = overlay(rich_record, "meta.periods", 16.5)
        assert result.error == ErrorCode.INVALID_VALUE
        assert result.record is None
        with pytest.raises(InvalidValueError):
            result.unwrap()

    def test_field_constraints_apply(self, rich_record) -> None:
        assert overlay(rich_record, "meta.periods", 0).error == ErrorCode.INVALID_VALUE

    def test_non_numeric_value_rejected(self, rich_record) -> None:
        assert overlay(rich_record, PRICE, "cheap").error == ErrorCode.INVALID_VALUE
        assert overlay(rich_record, "opex[1].variable_revenue_rate.value", "x").error == ErrorCode.INVALID_VALUE

    def test_list_element_validated(self, rich_record) -> None:
        new = overlay(rich_record, "drivers[0].range[1]", 65).unwrap()
        assert new.drivers[0].range == (50.0, 65.0, 70.0)
        assert overlay(rich_record, "drivers[0].range[1]", "x").error == ErrorCode.INVALID_VALUE

    def test_created_value_field_projects(self, simple_record) -> None:
        new = overlay(simple_record, "pricing.discount_pct.value", 0.1).unwrap()
        assert new.assumptions.pricing.discount_pct.value == 0.1
        assert evaluate(new).projection.periods[0].unit_price == pytest.approx(9.0)
