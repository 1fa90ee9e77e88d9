"""
Shared Library for Azure Functions
===================================

This module provides the reference data, models and services shared by the
comparison functions.

Modules
-------
models
    Pydantic models for reference data and the comparison request/response
dimensions
    Static dimension and unit tables (conversion factors)
unit_service
    Dimension lookup and unit conversion
catalog
    Read-only catalog of measurables, loaded from JSON
catalog_validation
    Integrity checks for the dimension tables and the catalog
config
    File-based engine configuration
helpers
    Trace IDs and numeric expression parsing

Quick Start
-----------
>>> from shared import get_catalog, get_unit_service, generate_trace_id
>>>
>>> catalog = get_catalog()
>>> hair = catalog.get_measurable("human-hair-thickness")
>>> meters = get_unit_service().convert(hair.value, hair.unit, "meter")  # ~7e-05

Validation
----------
>>> from shared import validate_catalog
>>> result = validate_catalog()
>>> result.is_valid
True
"""

# Data models
from .models import (
    Unit,
    Dimension,
    Measurable,
    ComparisonFilters,
    ScoringWeights,
    ResultCutoff,
    ComparisonQuery,
    ComparisonResult,
    ComparisonResponse,
)

# Reference tables
from .dimensions import DIMENSIONS, DimensionId

# Unit conversion
from .unit_service import UnitService, get_unit_service, reset_unit_service

# Catalog
from .catalog import (
    MeasurableCatalog,
    CatalogError,
    CatalogNotFoundError,
    CatalogFormatError,
    get_catalog,
    reset_catalog,
)

# Validation
from .catalog_validation import (
    CatalogValidationResult,
    validate_catalog,
    validate_dimensions,
    validate_measurables,
)

# Configuration
from .config import (
    load_engine_config,
    get_cutoff_defaults,
    get_catalog_path,
    get_log_level,
)

# Helpers
from .helpers import (
    generate_trace_id,
    parse_float_safe,
    parse_numeric_expression,
    safe_get,
)


__all__ = [
    # Models
    "Unit",
    "Dimension",
    "Measurable",
    "ComparisonFilters",
    "ScoringWeights",
    "ResultCutoff",
    "ComparisonQuery",
    "ComparisonResult",
    "ComparisonResponse",

    # Reference tables
    "DIMENSIONS",
    "DimensionId",

    # Unit conversion
    "UnitService",
    "get_unit_service",
    "reset_unit_service",

    # Catalog
    "MeasurableCatalog",
    "CatalogError",
    "CatalogNotFoundError",
    "CatalogFormatError",
    "get_catalog",
    "reset_catalog",

    # Validation
    "CatalogValidationResult",
    "validate_catalog",
    "validate_dimensions",
    "validate_measurables",

    # Configuration
    "load_engine_config",
    "get_cutoff_defaults",
    "get_catalog_path",
    "get_log_level",

    # Helpers
    "generate_trace_id",
    "parse_float_safe",
    "parse_numeric_expression",
    "safe_get",
]
