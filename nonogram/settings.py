"""
Settings Module for the Nonogram Engine

Display and logging preferences persisted as JSON (config.json in the
working directory unless a path is given). Values read back from disk are
checked against the known keys so a hand-edited file cannot push an
unknown zoom level or log level into the engine.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from nonogram.engine import ZoomLevel

logger = logging.getLogger(__name__)

SETTINGS_FILE = Path("config.json")

DEFAULT_SETTINGS: Dict[str, Any] = {
    "zoom_level": ZoomLevel.SM.value,
    "highlight_mistakes": False,
    "log_level": "INFO",
}

ZOOM_LEVEL_NAMES = {level.value for level in ZoomLevel}
LOG_LEVEL_NAMES = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _accepts(key: str, value: Any) -> bool:
    """Whether a stored value is usable for a known key."""
    if key == "zoom_level":
        return value in ZOOM_LEVEL_NAMES
    if key == "highlight_mistakes":
        return isinstance(value, bool)
    if key == "log_level":
        return isinstance(value, str) and value.upper() in LOG_LEVEL_NAMES
    return False


def merge_settings(stored: Dict[str, Any]) -> Dict[str, Any]:
    """
    Overlay stored preferences on the defaults.

    Unknown keys and unusable values are dropped with a warning; the
    default is kept in their place.

    Args:
        stored: Preferences as read from disk

    Returns:
        A complete settings dictionary
    """
    merged = dict(DEFAULT_SETTINGS)
    for key, value in stored.items():
        if key not in DEFAULT_SETTINGS:
            logger.warning(f"Ignoring unknown setting '{key}'")
        elif not _accepts(key, value):
            logger.warning(f"Ignoring invalid value {value!r} for '{key}', using {merged[key]!r}")
        else:
            merged[key] = value
    return merged


def load_settings(path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Read preferences from disk.

    Args:
        path: Settings file (SETTINGS_FILE if omitted)

    Returns:
        Settings merged over DEFAULT_SETTINGS; the defaults alone when the
        file is missing, unreadable or not a JSON object
    """
    path = path or SETTINGS_FILE
    if not path.exists():
        logger.debug(f"No settings at {path}, using defaults")
        return dict(DEFAULT_SETTINGS)

    try:
        stored = json.loads(path.read_text(encoding='utf-8'))
    except (json.JSONDecodeError, OSError) as e:
        logger.warning(f"Failed to read settings from {path}: {e}, using defaults")
        return dict(DEFAULT_SETTINGS)

    if not isinstance(stored, dict):
        logger.warning(f"Settings in {path} are not a JSON object, using defaults")
        return dict(DEFAULT_SETTINGS)

    settings = merge_settings(stored)
    logger.debug(f"Settings loaded from {path}: {settings}")
    return settings


def save_settings(settings: Dict[str, Any], path: Optional[Path] = None) -> None:
    """
    Write preferences to disk. Failures are logged, not raised.

    Args:
        settings: Settings dictionary to save
        path: Settings file (SETTINGS_FILE if omitted)
    """
    path = path or SETTINGS_FILE
    try:
        path.write_text(json.dumps(settings, indent=2), encoding='utf-8')
        logger.debug(f"Settings saved to {path}")
    except OSError as e:
        logger.error(f"Failed to save settings to {path}: {e}")
