"""User configuration.

The only setting is a colour theme: ``config.json`` in the user config
directory may hold ``{"colours": {"keyword": "magenta", ...}}`` mapping
highlight tag names to blessed formatting names. A missing file means
defaults; a broken file or entry is logged and skipped.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, Optional

import platformdirs

from .constants import EditorConstants
from .highlight import HighlightTag

logger = logging.getLogger(__name__)

CONFIG_FILE = "config.json"
COLOURS_KEY = "colours"


def config_path(config_dir: Optional[Path] = None) -> Path:
    base = config_dir or Path(platformdirs.user_config_dir(EditorConstants.APP_NAME))
    return Path(base) / CONFIG_FILE


def load_colour_overrides(path: Path) -> Dict[HighlightTag, str]:
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except FileNotFoundError:
        return {}
    except (json.JSONDecodeError, OSError) as e:
        logger.warning(f"Could not read config {path}: {e}")
        return {}

    colours = data.get(COLOURS_KEY, {}) if isinstance(data, dict) else None
    if not isinstance(colours, dict):
        logger.warning(f"Config {path} has invalid format, ignoring")
        return {}

    overrides: Dict[HighlightTag, str] = {}
    for name, colour in colours.items():
        try:
            tag = HighlightTag(name)
        except ValueError:
            logger.warning(f"Unknown highlight tag {name!r} in {path}")
            continue
        if not isinstance(colour, str) or not colour:
            logger.warning(f"Colour for {name!r} in {path} must be a non-empty string")
            continue
        overrides[tag] = colour
    return overrides
