from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional

import yaml

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:8001/api"
DEFAULT_USER_ID = "demo-user"
DEFAULT_THEME = "dark"


@dataclass(frozen=True)
class Settings:
    base_url: str = DEFAULT_BASE_URL
    user_id: str = DEFAULT_USER_ID
    theme: str = DEFAULT_THEME


def default_config_path() -> Path:
    return Path.home() / ".vazhi" / "config.yaml"


def _from_file(settings: Settings, path: Path) -> Settings:
    if not path.exists():
        return settings
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (yaml.YAMLError, OSError) as e:
        logger.warning("Could not read config from %s: %s", path, e)
        return settings
    if raw is None:
        return settings
    if not isinstance(raw, dict):
        logger.warning("Ignoring %s: expected a mapping", path)
        return settings
    changes = {}
    for key in ("base_url", "user_id", "theme"):
        value = raw.get(key)
        if value is None:
            continue
        if not isinstance(value, str) or not value.strip():
            logger.warning("Ignoring invalid '%s' in %s", key, path)
            continue
        changes[key] = value.strip()
    return replace(settings, **changes)


def _from_env(settings: Settings) -> Settings:
    changes = {}
    for key, var in (
        ("base_url", "VAZHI_BACKEND_URL"),
        ("user_id", "VAZHI_USER_ID"),
        ("theme", "VAZHI_THEME"),
    ):
        value = os.environ.get(var, "").strip()
        if value:
            changes[key] = value
    return replace(settings, **changes)


def load_settings(config_path: Optional[Path] = None) -> Settings:
    """Defaults, then ~/.vazhi/config.yaml, then VAZHI_* environment variables."""
    settings = _from_env(_from_file(Settings(), config_path or default_config_path()))
    if settings.theme not in ("dark", "light"):
        logger.warning("Unknown theme %r, using %s", settings.theme, DEFAULT_THEME)
        settings = replace(settings, theme=DEFAULT_THEME)
    return settings
