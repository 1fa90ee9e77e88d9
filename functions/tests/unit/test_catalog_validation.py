"""
Unit Tests for Catalog Validation

The bundled dimension tables and catalog must pass cleanly; each rule is
then checked against a deliberately broken fixture.
"""

import pytest

from shared.catalog import MeasurableCatalog
from shared.catalog_validation import (
    CatalogValidationResult,
    validate_catalog,
    validate_dimensions,
    validate_measurables,
)
from shared.dimensions import DIMENSIONS
from shared.models import Dimension, Unit
from shared.unit_service import UnitService
from tests.conftest import make_measurable


def _errors_for(*measurables):
    catalog = MeasurableCatalog.from_measurables(measurables)
    return validate_measurables(catalog, UnitService()).errors


@pytest.mark.unit
class TestBundledData:

    def test_bundled_catalog_is_valid(self):
        result = validate_catalog(MeasurableCatalog.load())
        assert result.errors == []
        assert result.is_valid

    def test_bundled_dimensions_are_valid(self):
        assert validate_dimensions(list(DIMENSIONS.values())).errors == []

    def test_unused_units_are_warnings(self):
        result = validate_catalog(MeasurableCatalog.load())
        assert any("unused unit" in w for w in result.warnings)


@pytest.mark.unit
class TestDimensionRules:

    def test_missing_base_unit(self):
        dimension = Dimension(id="x", name="X", base_unit="meter",
                              units=[Unit(id="foot", symbol="ft", to_base=0.3048)])
        errors = validate_dimensions([dimension]).errors
        assert any("not in its units" in e for e in errors)

    def test_base_unit_factor_must_be_one(self):
        dimension = Dimension(id="x", name="X", base_unit="meter",
                              units=[Unit(id="meter", symbol="m", to_base=2)])
        assert any("must be 1" in e for e in validate_dimensions([dimension]).errors)

    def test_non_positive_factor(self):
        dimension = Dimension(id="x", name="X", base_unit="meter", units=[
            Unit(id="meter", symbol="m", to_base=1),
            Unit(id="anti-meter", symbol="am", to_base=-1),
        ])
        assert any("non-positive" in e for e in validate_dimensions([dimension]).errors)

    def test_non_finite_factor(self):
        dimension = Dimension(id="x", name="X", base_unit="meter", units=[
            Unit(id="meter", symbol="m", to_base=1),
            Unit(id="big", symbol="B", to_base=float("inf")),
        ])
        assert any("invalid to_base" in e for e in validate_dimensions([dimension]).errors)

    def test_duplicate_ids_and_symbols(self):
        dimension = Dimension(id="x", name="X", base_unit="meter", units=[
            Unit(id="meter", symbol="m", to_base=1),
            Unit(id="meter", symbol="mm", to_base=1),
            Unit(id="metre", symbol="m", to_base=1),
        ])
        errors = validate_dimensions([dimension]).errors
        assert any("duplicate unit ID 'meter'" in e for e in errors)
        assert any("duplicate symbol 'm'" in e for e in errors)


@pytest.mark.unit
class TestMeasurableRules:

    def test_valid_measurable(self):
        assert _errors_for(make_measurable("door-height", 2, "meter")) == []

    def test_unknown_unit(self):
        errors = _errors_for(make_measurable("bad", 1, "furlong"))
        assert any("unknown unit 'furlong'" in e for e in errors)

    def test_unknown_dimension(self):
        errors = _errors_for(make_measurable("bad", 1, "meter", dimension="luminosity"))
        assert any("luminosity" in e for e in errors)

    def test_section_mismatch(self):
        catalog = MeasurableCatalog({"mass": [make_measurable("door-height", 2, "meter")]})
        errors = validate_measurables(catalog, UnitService()).errors
        assert any("is in 'mass' section" in e for e in errors)

    def test_tag_rules(self):
        assert any("no tags" in e for e in _errors_for(make_measurable("a", 1, "meter", tags=[])))
        assert any("duplicate tags" in e for e in _errors_for(make_measurable("b", 1, "meter", tags=["x", "x"])))
        assert any("invalid tag" in e for e in _errors_for(make_measurable("c", 1, "meter", tags=["Not_Kebab"])))

    def test_rating_range(self):
        errors = _errors_for(make_measurable("a", 1, "meter", relatability=0, accuracy=11))
        assert any("invalid relatability" in e for e in errors)
        assert any("invalid accuracy" in e for e in errors)

    def test_non_positive_value(self):
        assert any("non-positive value" in e for e in _errors_for(make_measurable("a", 0, "meter")))

    def test_temperature_may_be_zero_or_negative(self):
        errors = _errors_for(
            make_measurable("freezing", 0, "celsius", dimension="temperature"),
            make_measurable("antarctic", -89.2, "celsius", dimension="temperature"),
        )
        assert errors == []

    def test_range_checks(self):
        errors = _errors_for(make_measurable("a", 5, "meter", value_min=6, value_max=4))
        assert any("< value_min" in e for e in errors)
        assert any("> value_max" in e for e in errors)
        assert any("value_min 6.0 > value_max 4.0" in e for e in errors)

    def test_duplicate_ids_across_dimensions(self):
        errors = _errors_for(
            make_measurable("twin", 1, "meter"),
            make_measurable("twin", 1, "kilogram", dimension="mass"),
        )
        assert any("'twin' is used 2 times" in e for e in errors)


@pytest.mark.unit
class TestValidationResult:

    def test_extend(self):
        result = CatalogValidationResult(errors=["a"])
        result.extend(CatalogValidationResult(errors=["b"], warnings=["w"]))
        assert result.errors == ["a", "b"]
        assert result.warnings == ["w"]
        assert not result.is_valid
