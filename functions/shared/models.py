"""
Shared Data Models
==================

This module defines the Pydantic models used for the static reference data
(dimensions, units, measurables) and for the comparison request/response
contract.

Design Principles
-----------------
- **Pydantic v2** for validation and serialization
- **Type hints** for all fields
- **Frozen** reference data (Unit, Dimension, Measurable are never mutated)
- **Optional fields** mean "not given"; defaults are applied where the value
  is used (scoring, cutoff), never here

Model Categories
----------------
Reference Data
    Unit, Dimension, Measurable

Query Options
    ComparisonFilters, ScoringWeights, ResultCutoff

Request/Response Models
    ComparisonQuery, ComparisonResult, ComparisonResponse

Usage Examples
--------------
Creating a query:
    >>> query = ComparisonQuery(
    ...     value=70,
    ...     unit="micrometer",
    ...     dimension="length",
    ...     filters=ComparisonFilters(exclude_tags=["american"]),
    ... )

Validating data:
    >>> try:
    ...     query = ComparisonQuery(**invalid_data)
    ... except ValidationError as e:
    ...     print(e.errors())

Serializing to JSON:
    >>> response.model_dump_json()
"""

from typing import Optional, List
from pydantic import BaseModel, ConfigDict, Field


# ============== Reference Data ==============

class Unit(BaseModel):
    """A named scale within a dimension, linear to the base unit."""
    model_config = ConfigDict(frozen=True)

    id: str
    symbol: str
    to_base: float  # value_in_unit * to_base = value in base unit


class Dimension(BaseModel):
    """A category of physical quantity with one designated base unit."""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    base_unit: str
    units: List[Unit]

    def find_unit(self, unit_id: str) -> Optional[Unit]:
        """Return the unit with the given id, or None."""
        for unit in self.units:
            if unit.id == unit_id:
                return unit
        return None


class Measurable(BaseModel):
    """
    A catalogued real-world reference fact.

    Only the shape is enforced here. Cross-references (unit exists in the
    dimension) and value ranges are checked by catalog validation.
    """
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: Optional[str] = None
    dimension: str
    value: float
    unit: str
    value_min: Optional[float] = None
    value_max: Optional[float] = None
    tags: List[str]
    relatability: float = Field(..., description="How universally understood (1-10)")
    accuracy: float = Field(..., description="How precise/consistent the value is (1-10)")
    sources: Optional[List[str]] = None


# ============== Query Options ==============

class ComparisonFilters(BaseModel):
    """Tag filters applied before scoring."""
    include_tags: Optional[List[str]] = None  # keep if ALL present
    exclude_tags: Optional[List[str]] = None  # drop if ANY present


class ScoringWeights(BaseModel):
    """Composite score weights. Missing fields take the defaults; the triple is rescaled to sum to 1."""
    closeness: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    relatability: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    accuracy: Optional[float] = Field(None, ge=0, allow_inf_nan=False)


class ResultCutoff(BaseModel):
    """Result-count cutoff overrides. An explicit 0 is a real value, not 'unset'."""
    min_score: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    min_relative_score: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    min_results: Optional[int] = Field(None, ge=0)
    max_results: Optional[int] = Field(None, ge=0)


# ============== Request/Response Models ==============

class ComparisonQuery(BaseModel):
    """Request payload for a comparison."""
    value: float = Field(..., allow_inf_nan=False)
    unit: str
    dimension: str
    filters: Optional[ComparisonFilters] = None
    weights: Optional[ScoringWeights] = None
    cutoff: Optional[ResultCutoff] = None


class ComparisonResult(BaseModel):
    """One ranked match. `measurable` is the catalog's own instance."""
    measurable: Measurable
    ratio: float  # > 1: query is larger, < 1: query is smaller
    closeness_score: float
    composite_score: float


class ComparisonResponse(BaseModel):
    """Response payload for a comparison."""
    query: ComparisonQuery
    query_value_in_base_units: float
    results: List[ComparisonResult] = Field(default_factory=list)
