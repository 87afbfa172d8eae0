"""
Toolchain models — typed results of the host probes.

Every probe returns one of these values, never a magic string.
Unresolved states are explicit sentinel types so the plan synthesizer
has to handle them:

    DependencyReport   | DependencyIndeterminate
    InstalledComponent | MissingComponent
    LanguageReport     | NoTessdataDir

All instances are built fresh per status query and discarded after.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path

from pydantic import BaseModel, Field


class PlatformFamily(StrEnum):
    """Package-manager ecosystem detected on the host."""

    DEBIAN = "debian"
    REDHAT = "redhat"
    HOMEBREW = "homebrew"
    UNKNOWN = "unknown"


class SkipDirective(StrEnum):
    """Flag tokens marking a component as already satisfied.

    Declaration order is the canonical rendering order.
    """

    SKIP_DEPENDENCIES = "--skip-dependencies"
    SKIP_LEPTONICA = "--skip-leptonica"
    SKIP_TESSERACT = "--skip-tesseract"
    SKIP_LANGUAGES = "--skip-languages"


UNKNOWN_VERSION = "unknown"


# ── System dependencies ──────────────────────────────────────────────


class DependencyReport(BaseModel):
    """Partition of the declared requirement list into installed/missing."""

    family: PlatformFamily
    installed: list[str] = Field(default_factory=list)
    missing: list[str] = Field(default_factory=list)

    @property
    def installed_count(self) -> int:
        return len(self.installed)

    @property
    def missing_count(self) -> int:
        return len(self.missing)

    @property
    def missing_names(self) -> list[str]:
        return list(self.missing)

    @property
    def total(self) -> int:
        return self.installed_count + self.missing_count


class DependencyIndeterminate(BaseModel):
    """No recognised package manager — counts cannot be produced."""

    reason: str = "no supported package manager found"


DependencyStatus = DependencyReport | DependencyIndeterminate


# ── Components (Leptonica, Tesseract) ────────────────────────────────


class InstalledComponent(BaseModel):
    """A component confirmed present by at least one signal."""

    name: str
    version: str = UNKNOWN_VERSION
    location: str | None = None
    source: str | None = None  # which signal confirmed it


class MissingComponent(BaseModel):
    """No signal confirmed the component."""

    name: str


ComponentStatus = InstalledComponent | MissingComponent


# ── Language data ────────────────────────────────────────────────────


class LanguageReport(BaseModel):
    """Requested languages diffed against a resolved tessdata directory."""

    directory: Path
    available: set[str] = Field(default_factory=set)
    missing: list[str] = Field(default_factory=list)
    requested: list[str] = Field(default_factory=list)


class NoTessdataDir(BaseModel):
    """No tessdata directory could be resolved."""

    searched: list[str] = Field(default_factory=list)


LanguageStatus = LanguageReport | NoTessdataDir


# ── Reconciliation ───────────────────────────────────────────────────


@dataclass(frozen=True)
class ReconciliationPlan:
    """What still needs doing, and the skip flags for what doesn't."""

    needs_dependencies: bool
    needs_library: bool
    needs_engine: bool
    needs_languages: bool
    skip_directives: frozenset[SkipDirective] = field(default_factory=frozenset)

    @property
    def complete(self) -> bool:
        return not (
            self.needs_dependencies
            or self.needs_library
            or self.needs_engine
            or self.needs_languages
        )

    @property
    def skip_flags(self) -> list[str]:
        """Skip directives in canonical order."""
        return [d.value for d in SkipDirective if d in self.skip_directives]

    def suggested_invocation(self, command: str) -> str:
        """Command line that would re-run only the unsatisfied steps."""
        return " ".join([command, *self.skip_flags])

    def to_dict(self) -> dict:
        return {
            "complete": self.complete,
            "needs_dependencies": self.needs_dependencies,
            "needs_library": self.needs_library,
            "needs_engine": self.needs_engine,
            "needs_languages": self.needs_languages,
            "skip_directives": self.skip_flags,
        }
