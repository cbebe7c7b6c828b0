"""Configuration management for the budget engine.

This module centralizes configuration values including the taxonomy
location, display defaults, and environment variable overrides.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

# Base package directory - assumes this file is in budget_engine/
PACKAGE_DIR = Path(__file__).parent.resolve()

# Bundled configuration data
DATA_DIR = Path(os.getenv("BUDGET_ENGINE_DATA_DIR", PACKAGE_DIR / "data"))

# Category taxonomy (keywords, icons, colors)
TAXONOMY_PATH = Path(
    os.getenv("BUDGET_ENGINE_TAXONOMY", DATA_DIR / "categories.json")
).resolve()

# Symbol used by the default amount formatter when the caller injects none
CURRENCY_SYMBOL = os.getenv("BUDGET_ENGINE_CURRENCY_SYMBOL", "$")

LOG_LEVEL = os.getenv("BUDGET_ENGINE_LOG_LEVEL", "WARNING")
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def load_config(path: Union[str, Path]) -> Dict[str, Any]:
    """Load a JSON configuration file.

    Args:
        path: Path to the JSON file

    Returns:
        Dictionary containing the configuration

    Raises:
        FileNotFoundError: If the configuration file doesn't exist
        json.JSONDecodeError: If the configuration file is invalid JSON

    Example:
        >>> config = load_config(TAXONOMY_PATH)
        >>> config['categories'][0]['name']
        'Food & Dining'
    """
    config_path = Path(path)

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with config_path.open('r', encoding='utf-8') as f:
        return json.load(f)


def configure_logging(level: Optional[str] = None) -> None:
    """Attach a basic stderr handler. Intended for scripts, not library code."""
    logging.basicConfig(level=(level or LOG_LEVEL).upper(), format=LOG_FORMAT)
