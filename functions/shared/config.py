import json
import os
import logging
from pathlib import Path
from functools import lru_cache
from typing import Dict, Any, Optional

from pydantic import ValidationError

from .helpers import safe_get
from .models import ResultCutoff

logger = logging.getLogger(__name__)

ENV_CONFIG_PATH = "SCALE_COMPARE_CONFIG_PATH"


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Recursively merge two dictionaries.
    Values in 'override' replace those in 'base'.
    """
    result = base.copy()
    for key, value in override.items():
        if isinstance(value, dict) and key in result and isinstance(result[key], dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


@lru_cache(maxsize=1)
def load_engine_config() -> Dict[str, Any]:
    """
    Load engine configuration from JSON file.

    The file beside this module is used unless SCALE_COMPARE_CONFIG_PATH
    names another one. A `cutoff_defaults` section that is not a valid
    ResultCutoff fails the load. The result is cached for the life of the
    process; call load_engine_config.cache_clear() after changing the environment.
    """
    config_path = os.environ.get(ENV_CONFIG_PATH) or str(Path(__file__).parent / "engine_config.json")
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise RuntimeError(f"Failed to load engine config from {config_path}: {e}")

    try:
        ResultCutoff.model_validate(config.get("cutoff_defaults") or {})
    except ValidationError as e:
        raise RuntimeError(f"Invalid cutoff_defaults in {config_path}: {e}")

    logger.debug(f"Loaded engine config from {config_path}")
    return config


def get_cutoff_defaults() -> Dict[str, Any]:
    """Deployment-level cutoff defaults (may be partial)."""
    return safe_get(load_engine_config(), "cutoff_defaults", default={})


def get_catalog_path() -> Optional[str]:
    """Catalog file path from config, resolved against the config file's directory."""
    path = safe_get(load_engine_config(), "catalog_path")
    if not path:
        return None
    if os.path.isabs(path):
        return path
    config_dir = Path(os.environ.get(ENV_CONFIG_PATH) or __file__).parent
    return str(config_dir / path)


def get_log_level() -> str:
    """Log level name for function hosts and scripts."""
    return str(safe_get(load_engine_config(), "log_level", default="INFO")).upper()
