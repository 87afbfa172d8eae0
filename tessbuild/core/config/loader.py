"""
Configuration loader — reads tessbuild.yml into a BuildConfig.

It reads YAML, validates against the Pydantic schema, and returns a
typed config. A missing file is not an error for callers that accept
defaults: use ``load_config_or_default``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from tessbuild.core.models.config import BuildConfig

logger = logging.getLogger(__name__)

# Default config filename
CONFIG_FILE = "tessbuild.yml"


class ConfigError(Exception):
    """Raised when build configuration is invalid or unreadable."""


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for tessbuild.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to tessbuild.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def load_config(path: Path) -> BuildConfig:
    """Load and validate build configuration.

    Args:
        path: Path to tessbuild.yml.

    Returns:
        Validated BuildConfig.

    Raises:
        ConfigError: If the file is missing, unreadable or invalid.
    """
    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading build config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    # The YAML may wrap everything under a "build" key or be flat
    build_data = data.get("build", data) if "build" in data else data
    if not isinstance(build_data, dict):
        raise ConfigError(f"Expected 'build' to be a mapping in {path}")

    try:
        config = BuildConfig.model_validate(build_data)
    except Exception as e:
        raise ConfigError(f"Invalid build configuration: {e}") from e

    logger.info("Loaded build config: tesseract %s, prefix %s", config.version, config.prefix)
    return config


def load_config_or_default(path: Path | None = None) -> tuple[BuildConfig, Path | None]:
    """Load the config at *path* (or the auto-detected one), else defaults.

    Returns:
        (config, path actually loaded or None).

    Raises:
        ConfigError: If a config file exists but is invalid.
    """
    if path is None:
        path = find_config_file()
    if path is None:
        logger.debug("No %s found, using defaults", CONFIG_FILE)
        return BuildConfig(), None
    return load_config(path), path


def apply_overrides(config: BuildConfig, **overrides: Any) -> BuildConfig:
    """Return a copy of *config* with the non-None overrides applied.

    Raises:
        ConfigError: If an override fails validation.
    """
    update = {k: v for k, v in overrides.items() if v is not None}
    if not update:
        return config
    try:
        return BuildConfig.model_validate({**config.model_dump(), **update})
    except Exception as e:
        raise ConfigError(f"Invalid option: {e}") from e
