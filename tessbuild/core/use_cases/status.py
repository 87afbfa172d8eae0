"""
Status use case — probe the host and reconcile against the target config.
"""

from __future__ import annotations

import logging
import platform
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from tessbuild.core.models.config import BuildConfig
from tessbuild.core.models.toolchain import (
    ComponentStatus,
    DependencyIndeterminate,
    DependencyReport,
    DependencyStatus,
    InstalledComponent,
    LanguageReport,
    LanguageStatus,
    MissingComponent,
    NoTessdataDir,
    PlatformFamily,
    ReconciliationPlan,
)
from tessbuild.core.services.toolchain.detection.leptonica import probe_library
from tessbuild.core.services.toolchain.detection.platform import resolve_platform
from tessbuild.core.services.toolchain.detection.system_deps import probe_dependencies
from tessbuild.core.services.toolchain.detection.tessdata import resolve_languages
from tessbuild.core.services.toolchain.detection.tesseract import probe_engine
from tessbuild.core.services.toolchain.domain.plan import HostInfo, StatusReport, synthesize

logger = logging.getLogger(__name__)


@dataclass
class StatusResult:
    """Everything one status query observed and derived."""

    config: BuildConfig
    family: PlatformFamily = PlatformFamily.UNKNOWN
    dependencies: DependencyStatus = field(default_factory=DependencyIndeterminate)
    library: ComponentStatus = field(default_factory=lambda: MissingComponent(name="leptonica"))
    engine: ComponentStatus = field(default_factory=lambda: MissingComponent(name="tesseract"))
    languages: LanguageStatus = field(default_factory=NoTessdataDir)
    report: StatusReport | None = None
    plan: ReconciliationPlan | None = None
    config_path: Path | None = None

    @property
    def suggested_invocation(self) -> str:
        assert self.plan is not None
        return self.plan.suggested_invocation(self.config.installer_command)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        result: dict[str, Any] = {
            "config_path": str(self.config_path) if self.config_path else None,
            "target": {
                "version": self.config.version,
                "languages": self.config.languages,
                "prefix": self.config.prefix,
            },
            "platform": self.family.value,
            "dependencies": _dependencies_dict(self.dependencies),
            "leptonica": _component_dict(self.library),
            "tesseract": _component_dict(self.engine),
            "languages": _languages_dict(self.languages),
        }
        if self.plan is not None:
            result["plan"] = self.plan.to_dict()
            result["suggested_command"] = self.suggested_invocation
        if self.report is not None:
            result["report"] = self.report.to_dict()
        return result


def _dependencies_dict(dep: DependencyStatus) -> dict[str, Any]:
    if isinstance(dep, DependencyReport):
        return {
            "status": "checked",
            "installed_count": dep.installed_count,
            "missing_count": dep.missing_count,
            "missing": dep.missing_names,
        }
    return {"status": "indeterminate", "reason": dep.reason}


def _component_dict(status: ComponentStatus) -> dict[str, Any]:
    if isinstance(status, InstalledComponent):
        return {
            "status": "installed",
            "version": status.version,
            "location": status.location,
            "source": status.source,
        }
    return {"status": "missing"}


def _languages_dict(lang: LanguageStatus) -> dict[str, Any]:
    if isinstance(lang, LanguageReport):
        return {
            "status": "resolved",
            "directory": str(lang.directory),
            "available": sorted(lang.available),
            "missing": lang.missing,
        }
    return {"status": "no_tessdata_dir", "searched": lang.searched}


# ── Probing ──────────────────────────────────────────────────────────


def _probe_dependencies(config: BuildConfig) -> tuple[PlatformFamily, DependencyStatus]:
    family = resolve_platform()
    dep = probe_dependencies(
        family,
        config.requirements_for(family),
        timeout=config.probe_timeout,
    )
    return family, dep


def _fallbacks() -> dict[str, Any]:
    """Conservative result per probe, used if a probe raises."""
    return {
        "dependencies": (PlatformFamily.UNKNOWN, DependencyIndeterminate(reason="probe error")),
        "library": MissingComponent(name="leptonica"),
        "engine": MissingComponent(name="tesseract"),
        "languages": NoTessdataDir(),
    }


def _run_probes(config: BuildConfig, parallel: bool) -> dict[str, Any]:
    probe_fns: dict[str, Callable[[], Any]] = {
        "dependencies": lambda: _probe_dependencies(config),
        "library": lambda: probe_library(config.prefix, timeout=config.probe_timeout),
        "engine": lambda: probe_engine(timeout=config.probe_timeout),
        "languages": lambda: resolve_languages(
            config.languages, config.prefix, timeout=config.probe_timeout,
        ),
    }
    fallbacks = _fallbacks()
    results: dict[str, Any] = {}

    if parallel:
        with ThreadPoolExecutor(max_workers=len(probe_fns)) as pool:
            futures = {name: pool.submit(fn) for name, fn in probe_fns.items()}
            for name, future in futures.items():
                try:
                    results[name] = future.result()
                except Exception:
                    logger.exception("Probe %s failed", name)
                    results[name] = fallbacks[name]
        return results

    for name, fn in probe_fns.items():
        try:
            results[name] = fn()
        except Exception:
            logger.exception("Probe %s failed", name)
            results[name] = fallbacks[name]
    return results


def get_status(
    config: BuildConfig,
    *,
    parallel: bool = False,
    config_path: Path | None = None,
) -> StatusResult:
    """Probe the host and reconcile it against *config*.

    Args:
        config: Target state (version, languages, prefix) and probe settings.
        parallel: Run the four probes on a thread pool.
        config_path: Where *config* came from, for reporting.

    Returns:
        StatusResult with every probe result, the report and the plan.
    """
    probes = _run_probes(config, parallel)
    family, dep = probes["dependencies"]

    result = StatusResult(
        config=config,
        family=family,
        dependencies=dep,
        library=probes["library"],
        engine=probes["engine"],
        languages=probes["languages"],
        config_path=config_path,
    )

    host = HostInfo(
        system=platform.system() or "unknown",
        machine=platform.machine() or "unknown",
        prefix=config.prefix,
    )
    result.report, result.plan = synthesize(
        result.dependencies,
        result.library,
        result.engine,
        result.languages,
        config.version,
        host=host,
        command=config.installer_command,
    )
    return result
