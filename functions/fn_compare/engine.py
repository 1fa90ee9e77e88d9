"""
Comparison Engine
=================

Finds catalogued reference quantities of comparable magnitude to a query and
ranks them.

Pipeline (stateless, single pass):
1. Resolve dimension and unit (unknown -> UnknownDimensionError / UnknownUnitError)
2. Convert the query value to base units
3. Fetch the dimension's measurables and apply tag filters
4. Score each measurable (ratio, closeness, composite)
5. Sort by composite score, descending
6. Apply the cutoff policy

Usage:
    engine = ComparisonEngine()
    response = engine.compare(ComparisonQuery(value=70, unit="micrometer", dimension="length"))
"""

import logging
from typing import Any, Dict, List, Optional, Union

from shared.catalog import MeasurableCatalog, get_catalog
from shared.models import (
    ComparisonFilters,
    ComparisonQuery,
    ComparisonResponse,
    ComparisonResult,
    Measurable,
    ScoringWeights,
)
from shared.unit_service import UnitService, get_unit_service

from .cutoff import apply_cutoff
from .scoring import calculate_closeness_score, calculate_composite_score, calculate_ratio

logger = logging.getLogger(__name__)


class ComparisonError(Exception):
    """Base class for comparison failures."""
    pass


class UnknownDimensionError(ComparisonError):
    """Raised when a query names a dimension the registry doesn't have."""

    def __init__(self, dimension_id: str):
        self.dimension_id = dimension_id
        super().__init__(f"Unknown dimension: {dimension_id}")


class UnknownUnitError(ComparisonError):
    """Raised when a query's unit is not part of its dimension."""

    def __init__(self, unit_id: str, dimension_id: str):
        self.unit_id = unit_id
        self.dimension_id = dimension_id
        super().__init__(f"Unknown unit '{unit_id}' in dimension '{dimension_id}'")


class DataIntegrityError(ComparisonError):
    """
    Raised when a catalogued measurable references a unit missing from its
    dimension. This is a static-data bug that validation should have caught.
    """

    def __init__(self, measurable_id: str, unit_id: str, dimension_id: str):
        self.measurable_id = measurable_id
        self.unit_id = unit_id
        self.dimension_id = dimension_id
        super().__init__(
            f"Unknown unit '{unit_id}' for measurable '{measurable_id}' in dimension '{dimension_id}'"
        )


def _filter_by_tags(measurables: List[Measurable], filters: Optional[ComparisonFilters]) -> List[Measurable]:
    if filters is None:
        return measurables

    if filters.include_tags:
        required = filters.include_tags
        measurables = [m for m in measurables if all(tag in m.tags for tag in required)]

    if filters.exclude_tags:
        excluded = filters.exclude_tags
        measurables = [m for m in measurables if not any(tag in m.tags for tag in excluded)]

    return measurables


class ComparisonEngine:
    """
    Ranks catalogued measurables against a query.

    Holds only read-only references to the registry and catalog, so one
    instance can serve any number of callers.
    """

    def __init__(self, unit_service: Optional[UnitService] = None,
                 catalog: Optional[MeasurableCatalog] = None):
        self._unit_service = unit_service if unit_service is not None else get_unit_service()
        self._catalog = catalog if catalog is not None else get_catalog()

    def compare(self, query: Union[ComparisonQuery, Dict[str, Any]]) -> ComparisonResponse:
        """
        Find and rank comparisons for a query.

        Raises:
            UnknownDimensionError: dimension not in the registry
            UnknownUnitError: unit not in the dimension
            DataIntegrityError: a catalogued measurable has an unknown unit
        """
        if isinstance(query, dict):
            query = ComparisonQuery.model_validate(query)

        dimension = self._unit_service.get_dimension(query.dimension)
        if dimension is None:
            raise UnknownDimensionError(query.dimension)

        unit = self._unit_service.get_unit_in_dimension(query.dimension, query.unit)
        if unit is None:
            raise UnknownUnitError(query.unit, query.dimension)

        query_base = query.value * unit.to_base

        candidates = self._catalog.get_measurables_by_dimension(dimension.id)
        candidates = _filter_by_tags(candidates, query.filters)

        results = [self._score(measurable, dimension.id, query_base, query.weights) for measurable in candidates]
        results.sort(key=lambda r: r.composite_score, reverse=True)

        surfaced = apply_cutoff(results, query.cutoff)

        logger.debug(
            f"Compared {query.value} {query.unit} ({dimension.id}): "
            f"{len(candidates)} candidates, {len(surfaced)} surfaced"
        )

        return ComparisonResponse(
            query=query,
            query_value_in_base_units=query_base,
            results=surfaced,
        )

    def _score(self, measurable: Measurable, dimension_id: str, query_base: float,
               weights: Optional[ScoringWeights]) -> ComparisonResult:
        measurable_base = self._to_base_units(measurable, dimension_id)
        ratio = calculate_ratio(query_base, measurable_base)
        closeness = calculate_closeness_score(ratio)
        composite = calculate_composite_score(closeness, measurable.relatability, measurable.accuracy, weights)

        return ComparisonResult(
            measurable=measurable,
            ratio=ratio,
            closeness_score=closeness,
            composite_score=composite,
        )

    def _to_base_units(self, measurable: Measurable, dimension_id: str) -> float:
        unit = self._unit_service.get_unit_in_dimension(dimension_id, measurable.unit)
        if unit is None:
            logger.error(f"Catalog integrity error: measurable '{measurable.id}' uses unknown unit '{measurable.unit}'")
            raise DataIntegrityError(measurable.id, measurable.unit, dimension_id)
        return measurable.value * unit.to_base


def compare(query: Union[ComparisonQuery, Dict[str, Any]]) -> ComparisonResponse:
    """Convenience wrapper: run a comparison with the default registry and catalog."""
    return ComparisonEngine().compare(query)
