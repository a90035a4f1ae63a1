"""CLI configuration helpers for solver defaults persistence."""
from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "SKIRMISH_CONFIG"
_DEFAULT_MAX_DEPTH = 8
_DEFAULT_LOG_LEVEL = "WARNING"
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def get_user_data_dir() -> Path:
    """Return the per-user data directory."""
    if os.name == "nt":
        base = os.environ.get("APPDATA")
        if base:
            return Path(base) / "Skirmish"
        return Path.home() / "Skirmish"
    return Path.home() / ".config" / "skirmish"


def get_default_config_path() -> Path:
    """Return the config path, honouring the SKIRMISH_CONFIG override."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override)
    return get_user_data_dir() / "config.json"


def default_config() -> Dict[str, Any]:
    return {"max_depth": _DEFAULT_MAX_DEPTH, "prune": True, "log_level": _DEFAULT_LOG_LEVEL}


def normalize_config(raw: object) -> Dict[str, Any]:
    """Keep the known keys with valid values; fall back to defaults for the rest."""
    config = default_config()
    if not isinstance(raw, dict):
        return config

    depth = raw.get("max_depth")
    if isinstance(depth, int) and not isinstance(depth, bool) and depth > 0:
        config["max_depth"] = depth
    prune = raw.get("prune")
    if isinstance(prune, bool):
        config["prune"] = prune
    level = raw.get("log_level")
    if isinstance(level, str) and level.upper() in _LOG_LEVELS:
        config["log_level"] = level.upper()
    return config


def load_config(path: Path | None = None) -> Dict[str, Any]:
    """Load config from disk or return defaults."""
    config_path = path or get_default_config_path()
    try:
        raw = json.loads(config_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return default_config()
    except (OSError, ValueError) as exc:
        logger.warning("Ignoring unreadable config %s: %s", config_path, exc)
        return default_config()
    return normalize_config(raw)


def save_config(config: Dict[str, Any], path: Path | None = None) -> None:
    """Persist config to disk."""
    config_path = path or get_default_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)
    payload = normalize_config(config)
    config_path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")
