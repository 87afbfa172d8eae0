"""
Build configuration model — loaded from tessbuild.yml.

Holds the declared target state (Tesseract version, languages,
install prefix) plus probe tuning. Every field has a default so a
missing config file is a valid configuration.
"""

from __future__ import annotations

import os

from pydantic import BaseModel, Field, field_validator

from tessbuild.core.models.toolchain import PlatformFamily

DEFAULT_VERSION = "5.5.1"
DEFAULT_LANGUAGES = "eng,ara,ell"
DEFAULT_PREFIX = "/usr/local"
DEFAULT_TESSDATA_URL = "https://github.com/tesseract-ocr/tessdata_best/raw/main"


def _default_jobs() -> int:
    return os.cpu_count() or 4


class BuildConfig(BaseModel):
    """Target toolchain state and probe settings."""

    version: str = DEFAULT_VERSION
    languages: str = DEFAULT_LANGUAGES
    prefix: str = DEFAULT_PREFIX
    jobs: int = Field(default_factory=_default_jobs)
    tessdata_url: str = DEFAULT_TESSDATA_URL
    probe_timeout: int = 10
    installer_command: str = "build_tesseract.sh"

    # Per-family overrides of the built-in requirement lists.
    requirements: dict[str, list[str]] = Field(default_factory=dict)

    @field_validator("requirements")
    @classmethod
    def _known_families(cls, value: dict[str, list[str]]) -> dict[str, list[str]]:
        allowed = {f.value for f in PlatformFamily if f is not PlatformFamily.UNKNOWN}
        unknown = sorted(set(value) - allowed)
        if unknown:
            raise ValueError(
                f"unknown platform famil{'y' if len(unknown) == 1 else 'ies'}: "
                f"{', '.join(unknown)} (expected one of: {', '.join(sorted(allowed))})"
            )
        return value

    @field_validator("probe_timeout")
    @classmethod
    def _positive_timeout(cls, value: int) -> int:
        if value < 1:
            raise ValueError("probe_timeout must be at least 1 second")
        return value

    def requirements_for(self, family: PlatformFamily) -> list[str] | None:
        """Configured override for a family, or None to use the defaults."""
        names = self.requirements.get(family.value)
        return list(names) if names is not None else None
