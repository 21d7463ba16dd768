"""Configuration loading for inkpress.

Settings come from an optional ``inkpress.yaml`` in the project root.
Command-line options override anything set there.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from .templates import DEFAULT_FOOTER
from .themes import DEFAULT_THEME

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "inkpress.yaml"

DEFAULT_CONFIG = {
    "theme": DEFAULT_THEME,
    "footer": DEFAULT_FOOTER,
}


def load_config(project_root: Path) -> dict[str, Any]:
    """Load site configuration from inkpress.yaml.

    Args:
        project_root: Directory to look for the configuration file in.

    Returns:
        Dictionary containing configuration values, with defaults applied.
    """
    config_path = Path(project_root) / CONFIG_FILENAME
    config = DEFAULT_CONFIG.copy()
    if config_path.exists():
        with open(config_path, encoding="utf-8") as f:
            loaded = yaml.safe_load(f) or {}
        if isinstance(loaded, dict):
            config.update(loaded)
        else:
            logger.warning("%s should define a mapping; ignoring.", config_path)
    return config
