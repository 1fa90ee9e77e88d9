"""
Integration Tests for the Compare HTTP Function

Tests POST /api/compare end to end:
- Happy path with the bundled catalog
- Trace ID propagation
- Numeric expression values
- 400 / 404 / 500 error mapping
"""

import json
import logging
import pytest
from unittest.mock import patch

from fn_compare.engine import DataIntegrityError
from tests.conftest import MockHttpRequest


def _body(response):
    return json.loads(response.get_body())


@pytest.mark.integration
class TestCompareHappyPath:
    """Successful comparisons."""

    def test_compare_success(self, mock_http_request):
        from fn_compare import main

        response = main(mock_http_request({"value": 70, "unit": "micrometer", "dimension": "length"}))

        assert response.status_code == 200
        assert response.mimetype == "application/json"
        data = _body(response)
        assert data["results"][0]["measurable"]["id"] == "human-hair-thickness"
        assert data["results"][0]["ratio"] == pytest.approx(1.0)
        assert data["query_value_in_base_units"] == pytest.approx(70e-6)
        assert data["trace_id"].startswith("trace-")
        assert response.headers["X-Trace-ID"] == data["trace_id"]

    def test_trace_id_is_propagated(self, mock_http_request):
        from fn_compare import main

        request = mock_http_request(
            {"value": 1, "unit": "meter", "dimension": "length"},
            headers={"X-Trace-ID": "trace-abc123"},
        )
        response = main(request)

        assert _body(response)["trace_id"] == "trace-abc123"
        assert response.headers["X-Trace-ID"] == "trace-abc123"

    def test_numeric_expression_value(self, mock_http_request):
        from fn_compare import main

        response = main(mock_http_request({"value": "2^10", "unit": "byte", "dimension": "data"}))

        assert response.status_code == 200
        assert _body(response)["query"]["value"] == 1024

    def test_options_are_applied(self, mock_http_request):
        from fn_compare import main

        response = main(mock_http_request({
            "value": 100,
            "unit": "yard",
            "dimension": "length",
            "filters": {"exclude_tags": ["american"]},
            "cutoff": {"max_results": 2},
        }))

        results = _body(response)["results"]
        assert len(results) == 2
        assert all("american" not in r["measurable"]["tags"] for r in results)

    def test_infinite_ratio_serialized_as_null(self, mock_http_request):
        from fn_compare import main

        response = main(mock_http_request({"value": 37, "unit": "celsius", "dimension": "temperature"}))

        assert response.status_code == 200
        results = {r["measurable"]["id"]: r for r in _body(response)["results"]}
        assert results["water-freezing-point"]["ratio"] is None
        assert results["water-freezing-point"]["closeness_score"] == 0.0


@pytest.mark.integration
class TestCompareBadRequests:
    """400 responses."""

    def test_invalid_json(self):
        from fn_compare import main

        response = main(MockHttpRequest(raw_body=b"{not json"))

        assert response.status_code == 400
        data = _body(response)
        assert data["success"] is False
        assert "Invalid JSON" in data["error"]

    def test_body_not_an_object(self, mock_http_request):
        from fn_compare import main

        assert main(mock_http_request([70, "meter"])).status_code == 400

    def test_missing_fields(self, mock_http_request):
        from fn_compare import main

        response = main(mock_http_request({"value": 70}))

        assert response.status_code == 400
        assert "Invalid query" in _body(response)["error"]

    def test_unparsable_value(self, mock_http_request):
        from fn_compare import main

        response = main(mock_http_request({"value": "lots", "unit": "meter", "dimension": "length"}))

        assert response.status_code == 400
        assert "lots" in _body(response)["error"]

    def test_negative_weight(self, mock_http_request):
        from fn_compare import main

        response = main(mock_http_request({
            "value": 1, "unit": "meter", "dimension": "length",
            "weights": {"closeness": -1},
        }))

        assert response.status_code == 400

    def test_infinite_weight(self):
        from fn_compare import main

        raw = b'{"value": 1, "unit": "meter", "dimension": "length", "weights": {"closeness": Infinity}}'
        response = main(MockHttpRequest(raw_body=raw))

        assert response.status_code == 400
        assert "Invalid query" in _body(response)["error"]


@pytest.mark.integration
class TestCompareErrors:
    """404 and 500 responses."""

    def test_unknown_dimension(self, mock_http_request):
        from fn_compare import main

        response = main(mock_http_request({"value": 1, "unit": "meter", "dimension": "speed"}))

        assert response.status_code == 404
        assert "speed" in _body(response)["error"]

    def test_unknown_unit(self, mock_http_request):
        from fn_compare import main

        response = main(mock_http_request({"value": 1, "unit": "furlong", "dimension": "length"}))

        assert response.status_code == 404
        assert "furlong" in _body(response)["error"]

    def test_data_integrity_error(self, mock_http_request):
        from fn_compare import main

        with patch("fn_compare.compare", side_effect=DataIntegrityError("mystery", "furlong", "length")):
            response = main(mock_http_request({"value": 1, "unit": "meter", "dimension": "length"}))

        assert response.status_code == 500
        assert "mystery" in _body(response)["error"]

    def test_unexpected_error(self, mock_http_request):
        from fn_compare import main

        with patch("fn_compare.compare", side_effect=RuntimeError("boom")):
            response = main(mock_http_request({"value": 1, "unit": "meter", "dimension": "length"}))

        assert response.status_code == 500
        data = _body(response)
        assert "boom" in data["error"]
        assert response.headers["X-Trace-ID"] == data["trace_id"]


@pytest.mark.integration
class TestCompareConfiguration:
    """Engine config is read per request, not at import."""

    def test_import_does_not_read_config(self, monkeypatch, tmp_path):
        import importlib
        import fn_compare

        monkeypatch.setenv("SCALE_COMPARE_CONFIG_PATH", str(tmp_path / "missing.json"))
        importlib.reload(fn_compare)

        assert callable(fn_compare.main)

    def test_configured_log_level_applied(self, engine_config_file, mock_http_request):
        from fn_compare import main

        root = logging.getLogger()
        previous = root.level
        engine_config_file({"log_level": "warning"})
        try:
            response = main(mock_http_request({"value": 1, "unit": "meter", "dimension": "length"}))
            assert response.status_code == 200
            assert root.level == logging.WARNING
        finally:
            root.setLevel(previous)

    def test_invalid_config_returns_500(self, engine_config_file, mock_http_request):
        from fn_compare import main

        engine_config_file({"cutoff_defaults": {"max_results": -3}})
        response = main(mock_http_request({"value": 1, "unit": "meter", "dimension": "length"}))

        assert response.status_code == 500
        data = _body(response)
        assert "cutoff_defaults" in data["error"]
        assert response.headers["X-Trace-ID"] == data["trace_id"]
