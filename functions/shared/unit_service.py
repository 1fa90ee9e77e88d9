"""
Unit Service
============

Provides centralized dimension lookup and unit conversion.

All conversions are linear: ``base = value * unit.to_base`` and the inverse is
division. Lookups return None rather than raising; callers that need a hard
failure (the comparison engine) raise their own errors.

Usage:
    service = get_unit_service()
    meters = service.convert(3, 'foot', 'meter')  # 0.9144
"""

import logging
from typing import Dict, List, Optional, Tuple

from .dimensions import DIMENSIONS
from .models import Dimension, Unit

logger = logging.getLogger(__name__)


class UnitService:
    """
    Service for dimension lookups and unit conversions.

    Backed by a read-only mapping of dimension id to Dimension. The default
    is the static DIMENSIONS table; tests may pass their own.
    """

    def __init__(self, dimensions: Optional[Dict[str, Dimension]] = None):
        self._dimensions = dimensions if dimensions is not None else DIMENSIONS

    def list_dimensions(self) -> List[Dimension]:
        """All dimensions in table order."""
        return list(self._dimensions.values())

    def get_dimension(self, dimension_id: str) -> Optional[Dimension]:
        """Get a dimension by id."""
        return self._dimensions.get(dimension_id)

    def get_unit_in_dimension(self, dimension_id: str, unit_id: str) -> Optional[Unit]:
        """Get a unit within a specific dimension."""
        dimension = self._dimensions.get(dimension_id)
        if not dimension:
            return None
        return dimension.find_unit(unit_id)

    def get_unit(self, unit_id: str) -> Optional[Tuple[Unit, Dimension]]:
        """
        Find a unit by id across all dimensions.

        Dimensions are scanned in table order and the first match wins. Unit
        ids are not required to be unique across dimensions.

        Returns:
            (unit, dimension) or None if no dimension has the unit
        """
        for dimension in self._dimensions.values():
            unit = dimension.find_unit(unit_id)
            if unit:
                return unit, dimension
        return None

    def to_base_unit(self, value: float, unit_id: str) -> Optional[float]:
        """Convert a value in the given unit to its dimension's base unit."""
        found = self.get_unit(unit_id)
        if not found:
            return None
        unit, _ = found
        return value * unit.to_base

    def from_base_unit(self, value: float, unit_id: str) -> Optional[float]:
        """Convert a value in the base unit to the given unit."""
        found = self.get_unit(unit_id)
        if not found:
            return None
        unit, _ = found
        return value / unit.to_base

    def convert(self, value: float, from_unit_id: str, to_unit_id: str) -> Optional[float]:
        """
        Convert a value between two units of the same dimension.

        Args:
            value: The numerical amount to convert
            from_unit_id: Source unit id (e.g. 'kilometer')
            to_unit_id: Target unit id (e.g. 'mile')

        Returns:
            Converted value, or None if either unit is unknown or the units
            belong to different dimensions.
        """
        source = self.get_unit(from_unit_id)
        target = self.get_unit(to_unit_id)

        if not source or not target:
            logger.debug(f"Unknown unit in conversion {from_unit_id} -> {to_unit_id}")
            return None

        from_unit, from_dimension = source
        to_unit, to_dimension = target

        if from_dimension.id != to_dimension.id:
            logger.debug(
                f"Cannot convert across dimensions: {from_unit_id} ({from_dimension.id}) "
                f"-> {to_unit_id} ({to_dimension.id})"
            )
            return None

        # Identity
        if from_unit.id == to_unit.id:
            return value

        return value * from_unit.to_base / to_unit.to_base


# Singleton for easy access
_unit_service: Optional[UnitService] = None


def get_unit_service() -> UnitService:
    """Get the process-wide unit service backed by the static tables."""
    global _unit_service
    if _unit_service is None:
        _unit_service = UnitService()
    return _unit_service


def reset_unit_service():
    """Reset the singleton unit service (useful for testing)."""
    global _unit_service
    _unit_service = None
