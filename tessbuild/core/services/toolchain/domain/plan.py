"""
L1 Domain — Reconciliation plan and status report.

Pure functions. No subprocess calls, no filesystem access.
Takes the four already-computed probe results and derives:

    - which components still need work (``needs_*``)
    - the skip directives for the ones that don't
    - a sectioned, line-levelled report for display

Unresolved probe states (indeterminate dependencies, no tessdata
directory) always count as "needs work".
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from tessbuild.core.models.toolchain import (
    ComponentStatus,
    DependencyIndeterminate,
    DependencyStatus,
    InstalledComponent,
    LanguageStatus,
    MissingComponent,
    NoTessdataDir,
    ReconciliationPlan,
    SkipDirective,
)

DEFAULT_COMMAND = "build_tesseract.sh"


class LineLevel(StrEnum):
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"
    STATUS = "status"


@dataclass(frozen=True)
class ReportLine:
    level: LineLevel
    text: str

    def render(self) -> str:
        return f"[{self.level.upper()}] {self.text}"


@dataclass
class ReportSection:
    """One titled block of the status report."""

    key: str
    title: str
    lines: list[ReportLine] = field(default_factory=list)

    def add(self, level: LineLevel, text: str) -> None:
        self.lines.append(ReportLine(level, text))

    def to_dict(self) -> dict[str, Any]:
        return {
            "key": self.key,
            "title": self.title,
            "lines": [{"level": ln.level.value, "text": ln.text} for ln in self.lines],
        }


@dataclass
class StatusReport:
    """Ordered sections: [header], dependencies, leptonica, tesseract, languages, summary."""

    sections: list[ReportSection] = field(default_factory=list)

    def section(self, key: str) -> ReportSection | None:
        for s in self.sections:
            if s.key == key:
                return s
        return None

    def render(self) -> str:
        blocks = []
        for s in self.sections:
            body = "\n".join(ln.render() for ln in s.lines)
            blocks.append(f"=== {s.title} ===\n{body}")
        return "\n\n".join(blocks) + "\n"

    def to_dict(self) -> dict[str, Any]:
        return {"sections": [s.to_dict() for s in self.sections]}


@dataclass(frozen=True)
class HostInfo:
    """Host facts shown in the report header."""

    system: str
    machine: str
    prefix: str


# ── Plan ─────────────────────────────────────────────────────────────


def derive_plan(
    dep: DependencyStatus,
    lib: ComponentStatus,
    engine: ComponentStatus,
    lang: LanguageStatus,
) -> ReconciliationPlan:
    """Needs/skip matrix from the four probe results."""
    needs_dependencies = isinstance(dep, DependencyIndeterminate) or dep.missing_count > 0
    needs_library = isinstance(lib, MissingComponent)
    needs_engine = isinstance(engine, MissingComponent)
    needs_languages = isinstance(lang, NoTessdataDir) or bool(lang.missing)

    skips = set()
    if not needs_dependencies:
        skips.add(SkipDirective.SKIP_DEPENDENCIES)
    if not needs_library:
        skips.add(SkipDirective.SKIP_LEPTONICA)
    if not needs_engine:
        skips.add(SkipDirective.SKIP_TESSERACT)
    if not needs_languages:
        skips.add(SkipDirective.SKIP_LANGUAGES)

    return ReconciliationPlan(
        needs_dependencies=needs_dependencies,
        needs_library=needs_library,
        needs_engine=needs_engine,
        needs_languages=needs_languages,
        skip_directives=frozenset(skips),
    )


# ── Report sections ──────────────────────────────────────────────────


def _header_section(host: HostInfo) -> ReportSection:
    s = ReportSection("header", "TESSERACT INSTALLATION STATUS")
    s.add(LineLevel.STATUS, f"System: {host.system} {host.machine}")
    s.add(LineLevel.STATUS, f"Install Prefix: {host.prefix}")
    return s


def _dependencies_section(dep: DependencyStatus) -> ReportSection:
    s = ReportSection("dependencies", "SYSTEM DEPENDENCIES")
    if isinstance(dep, DependencyIndeterminate):
        s.add(LineLevel.WARNING, f"Cannot determine dependency status: {dep.reason}")
    elif dep.missing_count == 0:
        s.add(
            LineLevel.SUCCESS,
            f"All required dependencies are installed ({dep.installed_count} packages)",
        )
    else:
        s.add(
            LineLevel.WARNING,
            f"{dep.missing_count} dependencies missing, {dep.installed_count} installed",
        )
        s.add(LineLevel.INFO, f"Missing: {' '.join(dep.missing_names)}")
    return s


def _leptonica_section(lib: ComponentStatus) -> ReportSection:
    s = ReportSection("leptonica", "LEPTONICA STATUS")
    if isinstance(lib, InstalledComponent):
        s.add(LineLevel.SUCCESS, f"Leptonica is installed (version: {lib.version})")
        if lib.location:
            s.add(LineLevel.INFO, f"Location: {lib.location}")
    else:
        s.add(LineLevel.ERROR, "Leptonica is not installed")
    return s


def _tesseract_section(engine: ComponentStatus, requested_version: str) -> ReportSection:
    s = ReportSection("tesseract", "TESSERACT STATUS")
    if isinstance(engine, InstalledComponent):
        s.add(LineLevel.SUCCESS, "Tesseract is installed")
        s.add(LineLevel.INFO, f"Version: {engine.version}")
        if engine.location:
            s.add(LineLevel.INFO, f"Location: {engine.location}")
        # Lexical compare only; an advisory, not a need.
        if requested_version != engine.version:
            s.add(
                LineLevel.WARNING,
                f"Requested version ({requested_version}) differs from installed ({engine.version})",
            )
    else:
        s.add(LineLevel.ERROR, "Tesseract is not installed")
    return s


def _languages_section(lang: LanguageStatus) -> ReportSection:
    s = ReportSection("languages", "LANGUAGE DATA STATUS")
    if isinstance(lang, NoTessdataDir):
        s.add(LineLevel.ERROR, "Tessdata directory not found")
        return s

    s.add(LineLevel.INFO, f"Tessdata directory: {lang.directory}")
    if lang.available:
        s.add(LineLevel.SUCCESS, f"Available languages: {' '.join(sorted(lang.available))}")
    else:
        s.add(LineLevel.WARNING, "No language files found")

    if lang.missing:
        s.add(LineLevel.ERROR, f"Missing requested languages: {' '.join(lang.missing)}")
    else:
        s.add(LineLevel.SUCCESS, "All requested languages are available")
    return s


_NEED_MESSAGES = (
    ("needs_dependencies", "System dependencies need installation"),
    ("needs_library", "Leptonica needs installation"),
    ("needs_engine", "Tesseract needs installation"),
    ("needs_languages", "Language files need download"),
)


def _summary_section(plan: ReconciliationPlan, command: str) -> ReportSection:
    s = ReportSection("summary", "SUMMARY")
    if plan.complete:
        s.add(
            LineLevel.SUCCESS,
            "Complete Tesseract installation detected: all components are installed and ready to use",
        )
        return s

    s.add(LineLevel.INFO, "Installation requirements:")
    for attr, message in _NEED_MESSAGES:
        if getattr(plan, attr):
            s.add(LineLevel.WARNING, f"  • {message}")
    s.add(LineLevel.INFO, "Suggested command to complete installation:")
    s.add(LineLevel.STATUS, f"  {plan.suggested_invocation(command)}")
    return s


def synthesize(
    dep: DependencyStatus,
    lib: ComponentStatus,
    engine: ComponentStatus,
    lang: LanguageStatus,
    requested_version: str,
    *,
    host: HostInfo | None = None,
    command: str = DEFAULT_COMMAND,
) -> tuple[StatusReport, ReconciliationPlan]:
    """Build the status report and reconciliation plan.

    Args:
        dep: Dependency probe result.
        lib: Leptonica probe result.
        engine: Tesseract probe result.
        lang: Language probe result.
        requested_version: Target Tesseract version (compared lexically).
        host: Optional host facts for the report header.
        command: Installer command the suggested re-invocation starts with.

    Returns:
        ``(StatusReport, ReconciliationPlan)``.
    """
    plan = derive_plan(dep, lib, engine, lang)

    report = StatusReport()
    if host is not None:
        report.sections.append(_header_section(host))
    report.sections.extend([
        _dependencies_section(dep),
        _leptonica_section(lib),
        _tesseract_section(engine, requested_version),
        _languages_section(lang),
        _summary_section(plan, command),
    ])
    return report, plan
