"""
Measurable Catalog
==================

Read-only catalog of reference facts ("measurables") used as comparison
anchors.

Catalog Rules
-------------
1. **Loaded once** - The catalog is read at first use and never mutated
2. **Grouped by dimension** - Each measurable sits in its dimension's section
3. **Pre-validated** - Integrity is checked by ``validate_catalog.py`` before
   deployment, not at query time

Catalog File Structure::

    {
        "_meta": { "version": "1.0.0", ... },
        "measurables": {
            "length": [
                { "id": "human-hair-thickness", "name": "...", "dimension": "length",
                  "value": 70, "unit": "micrometer", "tags": [...],
                  "relatability": 8, "accuracy": 6 },
                ...
            ],
            ...
        }
    }

Usage
-----
>>> from shared.catalog import get_catalog
>>>
>>> catalog = get_catalog()
>>> hair = catalog.get_measurable("human-hair-thickness")
>>> lengths = catalog.get_measurables_by_dimension("length")
"""

import os
import json
import logging
from typing import Dict, List, Optional, Any, Iterable
from pathlib import Path

from pydantic import ValidationError

from .models import Measurable
from .config import get_catalog_path

logger = logging.getLogger(__name__)


class CatalogError(Exception):
    """Raised when catalog operations fail."""
    pass


class CatalogNotFoundError(CatalogError):
    """Raised when the catalog file doesn't exist."""
    pass


class CatalogFormatError(CatalogError):
    """Raised when the catalog file is not valid JSON or a record is malformed."""
    pass


class MeasurableCatalog:
    """
    Read-only collection of measurables, grouped by dimension id.

    Section order and record order are preserved as loaded; the comparison
    engine relies on this for a stable ordering of equal scores.
    """

    # Bundled catalog, used when nothing else is configured
    DEFAULT_PATH = Path(__file__).parent / "data" / "measurables.json"

    # Environment variable for catalog path override
    ENV_CATALOG_PATH = "SCALE_COMPARE_CATALOG_PATH"

    def __init__(self, measurables_by_dimension: Optional[Dict[str, List[Measurable]]] = None,
                 source_path: Optional[str] = None):
        self._by_dimension: Dict[str, List[Measurable]] = {
            dimension_id: list(items)
            for dimension_id, items in (measurables_by_dimension or {}).items()
        }
        self._all: List[Measurable] = [m for items in self._by_dimension.values() for m in items]
        self._source_path = source_path

    @classmethod
    def from_measurables(cls, measurables: Iterable[Measurable]) -> "MeasurableCatalog":
        """Build a catalog by grouping measurables on their declared dimension."""
        grouped: Dict[str, List[Measurable]] = {}
        for measurable in measurables:
            grouped.setdefault(measurable.dimension, []).append(measurable)
        return cls(grouped)

    @classmethod
    def load(cls, path: Optional[str] = None) -> "MeasurableCatalog":
        """
        Load the catalog from a JSON file.

        Args:
            path: Optional explicit path. If None, uses the environment
                override, then the engine config, then the bundled file.

        Returns:
            Loaded MeasurableCatalog instance

        Raises:
            CatalogNotFoundError: If the catalog file cannot be found
            CatalogFormatError: If the file or one of its records is invalid
        """
        resolved = path or cls._find_catalog_path()

        if not os.path.exists(resolved):
            raise CatalogNotFoundError(f"Measurable catalog not found at: {resolved}")

        try:
            with open(resolved, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise CatalogFormatError(f"Invalid JSON in catalog file {resolved}: {e}")

        catalog = cls(cls._parse_sections(data), source_path=str(resolved))
        logger.info(f"Loaded measurable catalog from: {resolved} ({len(catalog.all_measurables)} measurables)")
        return catalog

    @classmethod
    def _find_catalog_path(cls) -> str:
        env_path = os.environ.get(cls.ENV_CATALOG_PATH)
        if env_path:
            return env_path
        return get_catalog_path() or str(cls.DEFAULT_PATH)

    @staticmethod
    def _parse_sections(data: Any) -> Dict[str, List[Measurable]]:
        if not isinstance(data, dict) or not isinstance(data.get("measurables"), dict):
            raise CatalogFormatError("Catalog file must contain a 'measurables' object keyed by dimension")

        sections: Dict[str, List[Measurable]] = {}
        for dimension_id, records in data["measurables"].items():
            if not isinstance(records, list):
                raise CatalogFormatError(f"Catalog section '{dimension_id}' must be a list")
            parsed = []
            for index, record in enumerate(records):
                try:
                    parsed.append(Measurable.model_validate(record))
                except ValidationError as e:
                    record_id = record.get("id") if isinstance(record, dict) else None
                    raise CatalogFormatError(
                        f"Invalid measurable '{record_id or index}' in section '{dimension_id}': {e}"
                    )
            sections[dimension_id] = parsed
        return sections

    @property
    def source_path(self) -> Optional[str]:
        """Path the catalog was loaded from, if any."""
        return self._source_path

    @property
    def all_measurables(self) -> List[Measurable]:
        """All measurables as a flat list, in catalog order."""
        return list(self._all)

    @property
    def measurables_by_dimension(self) -> Dict[str, List[Measurable]]:
        """Catalog sections as {dimension_id: [measurables]} (copies)."""
        return {dimension_id: list(items) for dimension_id, items in self._by_dimension.items()}

    def dimension_ids(self) -> List[str]:
        """Dimension ids that have a catalog section."""
        return list(self._by_dimension.keys())

    def get_measurables_by_dimension(self, dimension_id: str) -> List[Measurable]:
        """Get all measurables for a dimension. Unknown dimensions give an empty list."""
        return list(self._by_dimension.get(dimension_id, []))

    def get_measurable(self, measurable_id: str) -> Optional[Measurable]:
        """Get a measurable by id."""
        for measurable in self._all:
            if measurable.id == measurable_id:
                return measurable
        return None

    def get_all_tags(self) -> List[str]:
        """All unique tags in use, sorted."""
        return sorted({tag for measurable in self._all for tag in measurable.tags})


# Singleton for easy access
_catalog: Optional[MeasurableCatalog] = None


def get_catalog(force_reload: bool = False) -> MeasurableCatalog:
    """Get the singleton measurable catalog, loading it on first use."""
    global _catalog
    if _catalog is None or force_reload:
        _catalog = MeasurableCatalog.load()
    return _catalog


def reset_catalog():
    """Reset the singleton catalog (useful for testing)."""
    global _catalog
    _catalog = None
