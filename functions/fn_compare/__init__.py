"""
Quantity Comparison Function
============================

HTTP trigger that ranks catalogued reference quantities against a query.

Endpoint: POST /api/compare

Request:
{
    "value": 70,                       // number, or expression string ("2^10", "1.5k", "3e8")
    "unit": "micrometer",
    "dimension": "length",
    "filters": {                       // optional
        "include_tags": ["body"],
        "exclude_tags": ["science"]
    },
    "weights": {"closeness": 0.6},     // optional, missing weights use defaults
    "cutoff": {"max_results": 10}      // optional, missing fields use defaults
}

Response (success):
{
    "query": {...},
    "query_value_in_base_units": 7e-05,
    "results": [
        {
            "measurable": {"id": "human-hair-thickness", ...},
            "ratio": 1.0,
            "closeness_score": 1.0,
            "composite_score": 0.86
        },
        ...
    ],
    "trace_id": "trace-..."
}

Response (error):
{
    "success": false,
    "error": "Unknown dimension: speed",
    "trace_id": "trace-..."
}
"""

import json
import logging
import azure.functions as func
from pydantic import ValidationError

# Import shared modules
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from shared.config import get_log_level
from shared.helpers import generate_trace_id, parse_numeric_expression
from shared.models import ComparisonQuery

from .engine import (
    ComparisonEngine,
    ComparisonError,
    DataIntegrityError,
    UnknownDimensionError,
    UnknownUnitError,
    compare,
)

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

__all__ = [
    "main",
    "compare",
    "ComparisonEngine",
    "ComparisonError",
    "UnknownDimensionError",
    "UnknownUnitError",
    "DataIntegrityError",
]


def main(req: func.HttpRequest) -> func.HttpResponse:
    """
    HTTP trigger for quantity comparison.

    POST /api/compare
    """
    trace_id = req.headers.get("X-Trace-ID") or generate_trace_id()

    try:
        logging.getLogger().setLevel(get_log_level())
        logger.info(f"[{trace_id}] Comparison request received")

        # Parse request body
        try:
            body = req.get_json()
        except ValueError:
            return _error_response("Invalid JSON in request body", trace_id, status_code=400)

        if not isinstance(body, dict):
            return _error_response("Request body must be a JSON object", trace_id, status_code=400)

        # Numeric expressions are accepted for the value
        raw_value = body.get("value")
        if isinstance(raw_value, str):
            parsed = parse_numeric_expression(raw_value)
            if parsed is None:
                return _error_response(f"Could not parse value: {raw_value}", trace_id, status_code=400)
            body = {**body, "value": parsed}

        try:
            query = ComparisonQuery.model_validate(body)
        except ValidationError as e:
            logger.warning(f"[{trace_id}] Invalid comparison query: {e.error_count()} error(s)")
            return _error_response(f"Invalid query: {e}", trace_id, status_code=400)

        response = compare(query)

        logger.info(
            f"[{trace_id}] Comparison complete: {query.value} {query.unit} ({query.dimension}), "
            f"{len(response.results)} results"
        )

        # model_dump_json renders non-finite ratios as null
        response_data = json.loads(response.model_dump_json())
        response_data["trace_id"] = trace_id

        return func.HttpResponse(
            body=json.dumps(response_data),
            status_code=200,
            mimetype="application/json",
            headers={"X-Trace-ID": trace_id}
        )

    except (UnknownDimensionError, UnknownUnitError) as e:
        logger.warning(f"[{trace_id}] {e}")
        return _error_response(str(e), trace_id, status_code=404)

    except DataIntegrityError as e:
        logger.error(f"[{trace_id}] Catalog data integrity error: {e}")
        return _error_response(str(e), trace_id, status_code=500)

    except Exception as e:
        logger.exception(f"[{trace_id}] Error in comparison: {e}")
        return _error_response(f"Internal server error: {str(e)}", trace_id, status_code=500)


def _error_response(message: str, trace_id: str, status_code: int = 500) -> func.HttpResponse:
    """Build error response."""
    response_data = {
        "success": False,
        "error": message,
        "trace_id": trace_id,
    }

    return func.HttpResponse(
        body=json.dumps(response_data),
        status_code=status_code,
        mimetype="application/json",
        headers={"X-Trace-ID": trace_id}
    )
