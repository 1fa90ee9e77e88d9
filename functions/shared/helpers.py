"""
Helper utilities for the comparison functions.
Includes trace IDs and safe numeric parsing.

Note: numeric parsing only understands the *number*. Units are always
passed as separate ids and are never parsed out of free text.
"""

import math
import re
import uuid
import logging
from typing import Optional, Any, Dict

logger = logging.getLogger(__name__)


_POWER_PATTERN = re.compile(r"^(-?[\d.]+)\s*\^\s*(-?[\d.]+)$")
_SUFFIX_PATTERN = re.compile(r"^(-?[\d.]+)\s*([kmbtKMBT])$")

SUFFIX_MULTIPLIERS = {
    "k": 1e3,
    "m": 1e6,
    "b": 1e9,
    "t": 1e12,
}


def generate_trace_id() -> str:
    """Generate a unique trace ID for correlation across logs."""
    return f"trace-{uuid.uuid4().hex[:12]}"


def parse_float_safe(value: Any, default: Optional[float] = None) -> Optional[float]:
    """Safely parse a value to float."""
    if value is None:
        return default
    try:
        return float(value)
    except (ValueError, TypeError):
        return default


def _finite_or_none(value: float) -> Optional[float]:
    return value if math.isfinite(value) else None


def parse_numeric_expression(text: Any) -> Optional[float]:
    """
    Parse a human-entered numeric expression.

    Supported forms:
    - Plain and scientific notation: "42", "2.5E6", "1e-3"
    - Thousands separators: "1,000,000"
    - Power notation: "2^10" -> 1024
    - Magnitude suffixes (case-insensitive): "5k", "2.5M", "1B", "3T"

    Returns:
        The parsed value, or None for empty, invalid or non-finite input.

    Example:
        >>> parse_numeric_expression("2.5k")
        2500.0
    """
    if not text or not isinstance(text, str):
        return None

    trimmed = text.strip()
    if trimmed == "":
        return None

    cleaned = trimmed.replace(",", "")

    # Power notation: 2^10
    power_match = _POWER_PATTERN.match(cleaned)
    if power_match:
        base = parse_float_safe(power_match.group(1))
        exponent = parse_float_safe(power_match.group(2))
        if base is not None and exponent is not None:
            try:
                return _finite_or_none(math.pow(base, exponent))
            except (ValueError, OverflowError, ZeroDivisionError):
                return None

    # Suffix notation: 5k, 2.5M
    suffix_match = _SUFFIX_PATTERN.match(cleaned)
    if suffix_match:
        value = parse_float_safe(suffix_match.group(1))
        if value is None:
            return None
        multiplier = SUFFIX_MULTIPLIERS[suffix_match.group(2).lower()]
        return _finite_or_none(value * multiplier)

    parsed = parse_float_safe(cleaned)
    if parsed is None:
        return None
    return _finite_or_none(parsed)


def safe_get(d: Dict, *keys, default=None) -> Any:
    """Safely get nested dictionary values."""
    for key in keys:
        if isinstance(d, dict):
            d = d.get(key)
        else:
            return default
    return d if d is not None else default
