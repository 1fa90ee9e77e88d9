"""
Pytest Configuration and Fixtures for Comparison Tests

This file provides:
- Custom markers (unit, integration)
- Singleton resets so every test sees fresh registry, catalog and config
- A small in-memory catalog for engine tests
- HTTP request mocking for Azure Functions
- Result factories for cutoff tests
"""

import pytest
import json
from typing import Dict, Any, List, Optional

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from shared.catalog import MeasurableCatalog, reset_catalog
from shared.config import load_engine_config
from shared.models import ComparisonResult, Measurable
from shared.unit_service import reset_unit_service


# ============== Custom Pytest Markers ==============

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests for individual modules")
    config.addinivalue_line("markers", "integration: Integration tests")


# ============== Mock HTTP Request ==============

class MockHttpRequest:
    """Mock Azure Functions HttpRequest."""

    def __init__(self, body: Any = None, params: Dict[str, str] = None,
                 headers: Dict[str, str] = None, raw_body: bytes = None):
        if raw_body is not None:
            self._body = raw_body
        else:
            self._body = json.dumps(body if body is not None else {}).encode()
        self.params = params or {}
        self.headers = headers or {}

    def get_json(self) -> Any:
        try:
            return json.loads(self._body)
        except json.JSONDecodeError as e:
            raise ValueError("HTTP request does not contain valid JSON data") from e

    def get_body(self) -> bytes:
        return self._body


# ============== Test Data Factories ==============

def make_measurable(
    id: str,
    value: float,
    unit: str,
    dimension: str = "length",
    tags: Optional[List[str]] = None,
    relatability: float = 5,
    accuracy: float = 5,
    **extra,
) -> Measurable:
    """Build a measurable with sensible defaults."""
    return Measurable(
        id=id,
        name=extra.pop("name", id.replace("-", " ").title()),
        dimension=dimension,
        value=value,
        unit=unit,
        tags=tags if tags is not None else ["test"],
        relatability=relatability,
        accuracy=accuracy,
        **extra,
    )


def make_result(score: float, id: str = None) -> ComparisonResult:
    """Build a result with a given composite score."""
    return ComparisonResult(
        measurable=make_measurable(id or f"item-{score}", 1, "meter"),
        ratio=1.0,
        closeness_score=score,
        composite_score=score,
    )


SAMPLE_MEASURABLES = [
    make_measurable("human-hair-thickness", 70, "micrometer",
                    tags=["biology", "human-body"], relatability=8, accuracy=6),
    make_measurable("credit-card-width", 85.6, "millimeter",
                    tags=["everyday"], relatability=9, accuracy=10),
    make_measurable("door-height", 2, "meter",
                    tags=["everyday", "architecture"], relatability=9, accuracy=7),
    make_measurable("football-field-length", 100, "yard",
                    tags=["sports", "american"], relatability=8, accuracy=10),
    make_measurable("soccer-field-length", 105, "meter",
                    tags=["sports"], relatability=9, accuracy=7),
    make_measurable("marathon-distance", 42.195, "kilometer",
                    tags=["sports"], relatability=8, accuracy=10),
    make_measurable("adult-human", 70, "kilogram", dimension="mass",
                    tags=["human-body"], relatability=10, accuracy=5),
    make_measurable("water-freezing-point", 0, "celsius", dimension="temperature",
                    tags=["physics", "everyday"], relatability=10, accuracy=10),
    make_measurable("human-body-temperature", 310.15, "kelvin", dimension="temperature",
                    tags=["human-body"], relatability=9, accuracy=8),
]


# ============== Fixtures ==============

@pytest.fixture(autouse=True)
def reset_singletons():
    """Give every test a fresh registry, catalog and engine config."""
    reset_catalog()
    reset_unit_service()
    load_engine_config.cache_clear()
    yield
    reset_catalog()
    reset_unit_service()
    load_engine_config.cache_clear()


@pytest.fixture
def sample_catalog() -> MeasurableCatalog:
    """Small in-memory catalog covering length, mass and temperature."""
    return MeasurableCatalog.from_measurables(SAMPLE_MEASURABLES)


@pytest.fixture
def mock_http_request():
    """Factory for creating mock HTTP requests."""
    def _create(body: Any = None, params: Dict[str, str] = None,
                headers: Dict[str, str] = None) -> MockHttpRequest:
        return MockHttpRequest(body, params=params, headers=headers)
    return _create


@pytest.fixture
def engine_config_file(tmp_path, monkeypatch):
    """Write an engine config to a temp file and point the environment at it."""
    def _write(config: Dict[str, Any]) -> str:
        path = tmp_path / "engine_config.json"
        path.write_text(json.dumps(config), encoding="utf-8")
        monkeypatch.setenv("SCALE_COMPARE_CONFIG_PATH", str(path))
        load_engine_config.cache_clear()
        return str(path)
    return _write
