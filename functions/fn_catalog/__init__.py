"""
Catalog Browse Function
=======================

HTTP trigger for browsing the dimension registry and the measurable catalog.

Endpoint: GET /api/catalog

Query parameters (at most one is used, in this order):
    id=<measurable id>      -> {"measurable": {...}}
    dimension=<dimension>   -> {"dimension": {...}, "measurables": [...]}
    (none)                  -> {"dimensions": [...], "tags": [...]}

Unknown ids and dimensions return 404.
"""

import json
import logging
import azure.functions as func

# Import shared modules
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from shared.catalog import get_catalog
from shared.helpers import generate_trace_id
from shared.unit_service import get_unit_service

logger = logging.getLogger(__name__)


def main(req: func.HttpRequest) -> func.HttpResponse:
    """
    HTTP trigger for catalog browsing.

    GET /api/catalog
    """
    trace_id = req.headers.get("X-Trace-ID") or generate_trace_id()

    measurable_id = req.params.get("id")
    dimension_id = req.params.get("dimension")

    logger.info(f"[{trace_id}] Catalog request: id={measurable_id}, dimension={dimension_id}")

    try:
        catalog = get_catalog()
        unit_service = get_unit_service()

        if measurable_id:
            measurable = catalog.get_measurable(measurable_id)
            if measurable is None:
                return _error_response(f"Unknown measurable: {measurable_id}", trace_id, status_code=404)
            response_data = {"measurable": measurable.model_dump(mode="json")}

        elif dimension_id:
            dimension = unit_service.get_dimension(dimension_id)
            if dimension is None:
                return _error_response(f"Unknown dimension: {dimension_id}", trace_id, status_code=404)
            response_data = {
                "dimension": _dimension_summary(dimension),
                "measurables": [
                    m.model_dump(mode="json") for m in catalog.get_measurables_by_dimension(dimension_id)
                ],
            }

        else:
            response_data = {
                "dimensions": [_dimension_summary(d) for d in unit_service.list_dimensions()],
                "tags": catalog.get_all_tags(),
            }

        response_data["trace_id"] = trace_id

        return func.HttpResponse(
            body=json.dumps(response_data),
            status_code=200,
            mimetype="application/json",
            headers={"X-Trace-ID": trace_id}
        )

    except Exception as e:
        logger.exception(f"[{trace_id}] Error in catalog browse: {e}")
        return _error_response(f"Internal server error: {str(e)}", trace_id, status_code=500)


def _dimension_summary(dimension) -> dict:
    return {
        "id": dimension.id,
        "name": dimension.name,
        "base_unit": dimension.base_unit,
        "units": [unit.id for unit in dimension.units],
    }


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
