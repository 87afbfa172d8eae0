"""
Config check use case — validate tessbuild.yml and report issues.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from tessbuild.core.config.loader import ConfigError, find_config_file, load_config
from tessbuild.core.models.config import BuildConfig
from tessbuild.core.services.toolchain.detection.tessdata import parse_language_list


@dataclass
class ConfigCheckResult:
    """Result of configuration validation."""

    valid: bool = False
    config: BuildConfig | None = None
    config_path: Path | None = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "config_path": str(self.config_path) if self.config_path else None,
            "errors": self.errors,
            "warnings": self.warnings,
            "version": self.config.version if self.config else None,
            "languages": parse_language_list(self.config.languages) if self.config else [],
            "prefix": self.config.prefix if self.config else None,
        }


def check_config(config_path: Path | None = None) -> ConfigCheckResult:
    """Validate build configuration and report issues.

    Args:
        config_path: Optional explicit path to tessbuild.yml.

    Returns:
        ConfigCheckResult with validation status and any issues.
    """
    result = ConfigCheckResult()

    if config_path is None:
        config_path = find_config_file()

    if config_path is None:
        result.errors.append("No tessbuild.yml found.")
        return result

    result.config_path = config_path

    try:
        config = load_config(config_path)
        result.config = config
    except ConfigError as e:
        result.errors.append(str(e))
        return result

    # Semantic checks
    codes = parse_language_list(config.languages)
    if not codes:
        result.warnings.append("No languages requested; the language step will always pass.")

    dupes = sorted({c for c in codes if codes.count(c) > 1})
    if dupes:
        result.warnings.append(f"Duplicate language codes: {', '.join(dupes)}")

    if config.jobs < 1:
        result.errors.append(f"Invalid number of jobs: {config.jobs}")

    if not Path(config.prefix).is_absolute():
        result.warnings.append(f"Install prefix is not an absolute path: {config.prefix}")

    for family, names in config.requirements.items():
        if not names:
            result.warnings.append(f"Requirement list for '{family}' is empty.")

    result.valid = len(result.errors) == 0
    return result
