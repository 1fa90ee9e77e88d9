"""
Catalog Validation
==================

Integrity checks for the static reference data. These run before deployment
(``validate_catalog.py``) and in the test suite; the comparison engine itself
assumes the data has passed them.

Checks
------
Dimensions
    base unit present with to_base == 1, positive finite factors,
    unique unit ids and symbols
Measurables
    known dimension and unit, section matches declared dimension,
    required fields and tags, kebab-case tags without duplicates,
    relatability/accuracy in [1, 10], positive values (temperature exempt),
    value inside [value_min, value_max], globally unique ids

Units no measurable uses are reported as warnings, never errors.
"""

import math
import re
import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .catalog import MeasurableCatalog, get_catalog
from .dimensions import DimensionId
from .models import Dimension, Measurable
from .unit_service import UnitService, get_unit_service

logger = logging.getLogger(__name__)

TAG_PATTERN = re.compile(r"^[a-z0-9]+(-[a-z0-9]+)*$")
SCORE_MIN = 1
SCORE_MAX = 10

# Dimensions where zero and negative values are meaningful
SIGNED_DIMENSIONS = {DimensionId.TEMPERATURE}


@dataclass
class CatalogValidationResult:
    """Result of validating the dimension tables and the measurable catalog."""
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def extend(self, other: "CatalogValidationResult"):
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)


def validate_dimensions(dimensions: List[Dimension]) -> CatalogValidationResult:
    """Check the unit tables of every dimension."""
    result = CatalogValidationResult()

    for dimension in dimensions:
        base = dimension.find_unit(dimension.base_unit)
        if base is None:
            result.errors.append(
                f"Dimension '{dimension.id}' has base_unit '{dimension.base_unit}' which is not in its units"
            )
        elif base.to_base != 1:
            result.errors.append(
                f"Dimension '{dimension.id}' base unit '{dimension.base_unit}' has to_base = {base.to_base} (must be 1)"
            )

        for unit in dimension.units:
            if not math.isfinite(unit.to_base):
                result.errors.append(
                    f"Dimension '{dimension.id}' unit '{unit.id}' has invalid to_base value: {unit.to_base}"
                )
            elif unit.to_base <= 0:
                result.errors.append(
                    f"Dimension '{dimension.id}' unit '{unit.id}' has non-positive to_base value: {unit.to_base}"
                )

        for unit_id, count in Counter(u.id for u in dimension.units).items():
            if count > 1:
                result.errors.append(
                    f"Dimension '{dimension.id}' has duplicate unit ID '{unit_id}' ({count} times)"
                )

        symbols: Dict[str, List[str]] = {}
        for unit in dimension.units:
            symbols.setdefault(unit.symbol, []).append(unit.id)
        for symbol, unit_ids in symbols.items():
            if len(unit_ids) > 1:
                result.errors.append(
                    f"Dimension '{dimension.id}' has duplicate symbol '{symbol}' for units: {', '.join(unit_ids)}"
                )

    return result


def _validate_measurable(measurable: Measurable, unit_service: UnitService) -> List[str]:
    errors = []
    mid = measurable.id or "(no id)"

    missing = [name for name in ("id", "name", "dimension", "unit") if not getattr(measurable, name)]
    if missing:
        errors.append(f"Measurable '{mid}' missing fields: {', '.join(missing)}")

    dimension = unit_service.get_dimension(measurable.dimension)
    if dimension is None:
        errors.append(f"Measurable '{mid}' references non-existent dimension '{measurable.dimension}'")
    elif dimension.find_unit(measurable.unit) is None:
        errors.append(
            f"Measurable '{mid}' ({measurable.name}) uses unknown unit '{measurable.unit}' "
            f"in dimension '{measurable.dimension}'"
        )

    if not measurable.tags:
        errors.append(f"Measurable '{mid}' has no tags")
    duplicates = sorted(tag for tag, count in Counter(measurable.tags).items() if count > 1)
    if duplicates:
        errors.append(f"Measurable '{mid}' has duplicate tags: {', '.join(duplicates)}")
    for tag in measurable.tags:
        if not TAG_PATTERN.match(tag):
            errors.append(f"Measurable '{mid}' has invalid tag '{tag}' (must be lowercase kebab-case)")

    if not SCORE_MIN <= measurable.relatability <= SCORE_MAX:
        errors.append(f"Measurable '{mid}' has invalid relatability {measurable.relatability} (must be 1-10)")
    if not SCORE_MIN <= measurable.accuracy <= SCORE_MAX:
        errors.append(f"Measurable '{mid}' has invalid accuracy {measurable.accuracy} (must be 1-10)")

    if measurable.dimension not in SIGNED_DIMENSIONS:
        if measurable.value <= 0:
            errors.append(f"Measurable '{mid}' has non-positive value {measurable.value}")
        if measurable.value_min is not None and measurable.value_min <= 0:
            errors.append(f"Measurable '{mid}' has non-positive value_min {measurable.value_min}")
        if measurable.value_max is not None and measurable.value_max <= 0:
            errors.append(f"Measurable '{mid}' has non-positive value_max {measurable.value_max}")

    if measurable.value_min is not None and measurable.value < measurable.value_min:
        errors.append(f"Measurable '{mid}' has value {measurable.value} < value_min {measurable.value_min}")
    if measurable.value_max is not None and measurable.value > measurable.value_max:
        errors.append(f"Measurable '{mid}' has value {measurable.value} > value_max {measurable.value_max}")
    if (measurable.value_min is not None and measurable.value_max is not None
            and measurable.value_min > measurable.value_max):
        errors.append(
            f"Measurable '{mid}' has value_min {measurable.value_min} > value_max {measurable.value_max}"
        )

    return errors


def validate_measurables(catalog: MeasurableCatalog, unit_service: UnitService) -> CatalogValidationResult:
    """Check every measurable against the dimension tables and the catalog rules."""
    result = CatalogValidationResult()

    for dimension_id, measurables in catalog.measurables_by_dimension.items():
        if unit_service.get_dimension(dimension_id) is None:
            result.errors.append(f"Dimension '{dimension_id}' not found in dimensions registry")

        for measurable in measurables:
            if measurable.dimension != dimension_id:
                result.errors.append(
                    f"Measurable '{measurable.id}' is in '{dimension_id}' section "
                    f"but declares dimension '{measurable.dimension}'"
                )
            result.errors.extend(_validate_measurable(measurable, unit_service))

    by_id: Dict[str, List[str]] = {}
    for measurable in catalog.all_measurables:
        by_id.setdefault(measurable.id, []).append(measurable.dimension)
    for measurable_id, dimension_ids in by_id.items():
        if len(dimension_ids) > 1:
            result.errors.append(
                f"ID '{measurable_id}' is used {len(dimension_ids)} times (in dimensions: {', '.join(dimension_ids)})"
            )

    used_units: Dict[str, set] = {}
    for measurable in catalog.all_measurables:
        used_units.setdefault(measurable.dimension, set()).add(measurable.unit)
    for dimension in unit_service.list_dimensions():
        used = used_units.get(dimension.id, set())
        for unit in dimension.units:
            if unit.id not in used:
                result.warnings.append(f"Dimension '{dimension.id}' has unused unit '{unit.id}' ({unit.symbol})")

    return result


def validate_catalog(
    catalog: Optional[MeasurableCatalog] = None,
    unit_service: Optional[UnitService] = None,
) -> CatalogValidationResult:
    """
    Validate the dimension tables and the measurable catalog together.

    Args:
        catalog: Catalog to check (defaults to the loaded singleton)
        unit_service: Registry to check against (defaults to the static tables)

    Returns:
        CatalogValidationResult with all errors and warnings found
    """
    catalog = catalog or get_catalog()
    unit_service = unit_service or get_unit_service()

    result = validate_dimensions(unit_service.list_dimensions())
    result.extend(validate_measurables(catalog, unit_service))

    if result.errors:
        logger.error(f"Catalog validation found {len(result.errors)} error(s)")
    else:
        logger.info(f"Catalog validation passed with {len(result.warnings)} warning(s)")
    return result
