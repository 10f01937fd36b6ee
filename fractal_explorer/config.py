"""
Settings for the fractal explorer.

Settings are read from settings.json next to this file (or a path given
by the caller). A missing or unreadable file falls back to the defaults.
"""

import json
import logging
import math
import os
from dataclasses import dataclass, fields, replace
from typing import Optional

from .fractals import DEFAULT_FRACTAL, FRACTALS

logger = logging.getLogger(__name__)

SETTINGS_PATH = os.path.join(os.path.dirname(__file__), 'settings.json')


@dataclass(frozen=True)
class Settings:
    size: int = 800
    zoom_scale: float = 0.5
    workers: Optional[int] = None
    fractal: str = DEFAULT_FRACTAL
    save_dir: str = '~/Desktop'
    log_level: str = 'INFO'

    def validate(self):
        """Raise ValueError if any value is out of range."""
        if not isinstance(self.size, int) or self.size <= 0:
            raise ValueError(f"size must be a positive integer, got {self.size!r}")
        if not (isinstance(self.zoom_scale, (int, float))
                and math.isfinite(self.zoom_scale) and self.zoom_scale > 0):
            raise ValueError(f"zoom_scale must be a positive number, got {self.zoom_scale!r}")
        if self.workers is not None and (not isinstance(self.workers, int) or self.workers <= 0):
            raise ValueError(f"workers must be a positive integer or null, got {self.workers!r}")
        if self.fractal not in FRACTALS:
            raise ValueError(f"unknown fractal {self.fractal!r}, expected one of {list(FRACTALS)}")
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ValueError(f"unknown log level {self.log_level!r}")
        return self


def load_settings(path=None):
    """
    Load settings from a JSON file.

    Args:
        path: File to read (default: settings.json in the package)

    Returns:
        A validated Settings instance

    Raises:
        ValueError if the file holds an invalid value
    """
    path = path or SETTINGS_PATH
    try:
        with open(path, 'r') as f:
            data = json.load(f)
    except (FileNotFoundError, json.JSONDecodeError) as e:
        logger.warning("Could not load %s: %s", path, e)
        return Settings()

    if not isinstance(data, dict):
        logger.warning("Ignoring %s: expected a JSON object", path)
        return Settings()

    known = {f.name for f in fields(Settings)}
    for key in sorted(set(data) - known):
        logger.warning("Ignoring unknown setting %r in %s", key, path)

    return replace(Settings(), **{k: v for k, v in data.items() if k in known}).validate()
