"""
Build plan use case — preview what an install run would do.

Nothing is executed. Given the target config and the skip flags a user
would pass to the installer, this lists the steps that would run, the
commands behind them, and any warnings (nothing to do, sudo needed,
bad job count).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from tessbuild.core.models.config import DEFAULT_PREFIX, BuildConfig
from tessbuild.core.models.toolchain import SkipDirective
from tessbuild.core.services.toolchain.data.requirements import (
    TESSDATA_DIRNAME,
    TRAINEDDATA_SUFFIX,
)
from tessbuild.core.services.toolchain.detection.tessdata import parse_language_list

LEPTONICA_REPO = "https://github.com/DanBloomberg/leptonica.git"
TESSERACT_ARCHIVE = "https://github.com/tesseract-ocr/tesseract/archive/refs/tags/{version}.tar.gz"


@dataclass
class BuildStep:
    """One step of the install sequence."""

    id: str
    label: str
    commands: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "label": self.label, "commands": self.commands}


@dataclass
class BuildPlan:
    """Ordered steps plus validation results."""

    config: BuildConfig
    skips: frozenset[SkipDirective] = frozenset()
    steps: list[BuildStep] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.errors

    def to_dict(self) -> dict[str, Any]:
        return {
            "valid": self.valid,
            "version": self.config.version,
            "languages": parse_language_list(self.config.languages),
            "prefix": self.config.prefix,
            "jobs": self.config.jobs,
            "skips": [d.value for d in SkipDirective if d in self.skips],
            "steps": [s.to_dict() for s in self.steps],
            "warnings": self.warnings,
            "errors": self.errors,
        }


def _dependency_step() -> BuildStep:
    return BuildStep(
        id="dependencies",
        label="Install system dependencies",
        commands=["<package manager> install <requirement list>"],
    )


def _leptonica_step(config: BuildConfig) -> BuildStep:
    return BuildStep(
        id="leptonica",
        label="Build and install Leptonica",
        commands=[
            f"git clone {LEPTONICA_REPO}",
            "./autogen.sh",
            f"./configure --prefix={config.prefix}",
            f"make -j{config.jobs}",
            "make install",
        ],
    )


def _tesseract_step(config: BuildConfig) -> BuildStep:
    prefix = config.prefix
    return BuildStep(
        id="tesseract",
        label=f"Build and install Tesseract {config.version}",
        commands=[
            f"wget {TESSERACT_ARCHIVE.format(version=config.version)}",
            "./autogen.sh",
            f"./configure --prefix={prefix} "
            f"--with-extra-includes={prefix}/include --with-extra-libraries={prefix}/lib",
            f"make -j{config.jobs}",
            "make install",
        ],
    )


def _languages_step(config: BuildConfig) -> BuildStep:
    target = Path(config.prefix) / "share" / TESSDATA_DIRNAME
    base = config.tessdata_url.rstrip("/")
    return BuildStep(
        id="languages",
        label="Download language data files",
        commands=[f"mkdir -p {target}"] + [
            f"wget {base}/{code}{TRAINEDDATA_SUFFIX} -O {target}/{code}{TRAINEDDATA_SUFFIX}"
            for code in parse_language_list(config.languages)
        ],
    )


def build_plan(
    config: BuildConfig,
    skips: frozenset[SkipDirective] | set[SkipDirective] = frozenset(),
    *,
    euid: int | None = None,
) -> BuildPlan:
    """Lay out the install sequence for *config* minus the skipped steps.

    Args:
        config: Target version, languages, prefix and job count.
        skips: Skip directives the installer would be given.
        euid: Effective uid, defaults to the current process's.

    Returns:
        BuildPlan; ``valid`` is False if the job count is unusable.
    """
    skips = frozenset(skips)
    plan = BuildPlan(config=config, skips=skips)

    if config.jobs < 1:
        plan.errors.append(f"Invalid number of jobs: {config.jobs}")

    if SkipDirective.SKIP_DEPENDENCIES not in skips:
        plan.steps.append(_dependency_step())
    if SkipDirective.SKIP_LEPTONICA not in skips:
        plan.steps.append(_leptonica_step(config))
    if SkipDirective.SKIP_TESSERACT not in skips:
        plan.steps.append(_tesseract_step(config))
    if SkipDirective.SKIP_LANGUAGES not in skips:
        plan.steps.append(_languages_step(config))

    if {SkipDirective.SKIP_TESSERACT, SkipDirective.SKIP_LANGUAGES} <= skips:
        plan.warnings.append("Both Tesseract and language installation are skipped. Nothing to do!")

    if euid is None:
        euid = os.geteuid() if hasattr(os, "geteuid") else 0
    builds_native = not {SkipDirective.SKIP_TESSERACT, SkipDirective.SKIP_LEPTONICA} <= skips
    if config.prefix == DEFAULT_PREFIX and euid != 0 and builds_native:
        plan.warnings.append(f"Installing to {config.prefix} may require sudo privileges")

    return plan
