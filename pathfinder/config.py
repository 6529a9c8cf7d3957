"""
Configuration management for Pathfinder.

Reads runtime settings:
- Highlight expiry delay
- Initial graph size and random seed
- Server port

Settings come from config.json next to the project root, or next to the
executable when frozen. Environment variables (optionally loaded from a
.env file) take priority.
"""

import json
import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)

DEFAULT_HIGHLIGHT_SECONDS = 15.0
DEFAULT_NODE_COUNT = 50
DEFAULT_PORT = 8081


@dataclass
class Settings:
    """Resolved runtime settings."""
    highlight_seconds: float = DEFAULT_HIGHLIGHT_SECONDS
    node_count: int = DEFAULT_NODE_COUNT
    seed: Optional[int] = None
    port: int = DEFAULT_PORT


def get_config_path() -> Path:
    """config.json beside the executable when frozen, else beside pathfinder/."""
    if getattr(sys, 'frozen', False):
        return Path(sys.executable).parent / "config.json"
    return Path(__file__).parent.parent / "config.json"


def load_config(config_path: Optional[Path] = None) -> dict:
    """Load configuration from config.json."""
    config_path = config_path or get_config_path()
    if config_path.exists():
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, IOError):
            return {}
        return data if isinstance(data, dict) else {}
    return {}


def _resolve(config: dict, env_name: str, key: str, default: Any,
             convert: Callable[[Any], Any], valid: Callable[[Any], bool]) -> Any:
    """
    Look a setting up in the environment first, then config.json.

    Values that fail conversion or validation are logged and replaced by
    the default.
    """
    raw = os.environ.get(env_name)
    source = env_name
    if raw is None or raw == "":
        raw = config.get(key)
        source = f"config.json:{key}"
    if raw is None:
        return default
    try:
        value = convert(raw)
    except (TypeError, ValueError):
        logger.warning(f"Ignoring malformed setting {source}={raw!r}")
        return default
    if not valid(value):
        logger.warning(f"Ignoring out-of-range setting {source}={raw!r}")
        return default
    return value


def get_settings(config_path: Optional[Path] = None) -> Settings:
    """
    Build the effective settings.

    Priority:
    1. Environment variables (PATHFINDER_*)
    2. Stored in config.json
    3. Built-in defaults
    """
    config = load_config(config_path)
    return Settings(
        highlight_seconds=_resolve(
            config, "PATHFINDER_HIGHLIGHT_SECONDS", "highlight_seconds",
            DEFAULT_HIGHLIGHT_SECONDS, float, lambda v: v > 0),
        node_count=_resolve(
            config, "PATHFINDER_NODE_COUNT", "node_count",
            DEFAULT_NODE_COUNT, int, lambda v: v >= 2),
        seed=_resolve(
            config, "PATHFINDER_SEED", "seed", None, int, lambda v: True),
        port=_resolve(
            config, "PATHFINDER_PORT", "port",
            DEFAULT_PORT, int, lambda v: 0 < v < 65536),
    )
