# chunkforge/config/__init__.py
"""
Configuration module for chunking defaults.

A single ChunkingSettings instance is shared by the process. ``configure`` swaps
it for a new validated instance; ``reset_settings`` goes back to what the
environment provides.
"""

import logging
from typing import Any

from pydantic import ValidationError

from chunkforge.chunking.exceptions import ConfigurationError

from .base import ChunkingSettings

logger = logging.getLogger(__name__)

_settings: ChunkingSettings | None = None


def get_settings() -> ChunkingSettings:
    """Return the process-wide settings, loading them on first use."""
    global _settings
    if _settings is None:
        _settings = ChunkingSettings()
    return _settings


def configure(**overrides: Any) -> ChunkingSettings:
    """Install new settings built from the current ones plus ``overrides``.

    Keys are matched case-insensitively against the settings fields.

    Raises:
        ConfigurationError: If a key is unknown or the resulting settings are invalid
    """
    current = get_settings().model_dump()
    for key, value in overrides.items():
        field = key.upper()
        if field not in ChunkingSettings.model_fields:
            raise ConfigurationError(f"Unknown setting: {key}", details={"setting": key})
        current[field] = value

    try:
        new_settings = ChunkingSettings(**current)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid settings: {e}", details={"errors": e.errors()}) from e

    global _settings
    _settings = new_settings
    logger.info(f"Chunking settings updated: {sorted(k.upper() for k in overrides)}")
    return new_settings


def reset_settings() -> ChunkingSettings:
    """Discard overrides and reload settings from the environment."""
    global _settings
    _settings = ChunkingSettings()
    return _settings


__all__ = ["ChunkingSettings", "configure", "get_settings", "reset_settings"]
