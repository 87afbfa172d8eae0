"""
Domain models — Pydantic types for tessbuild.

All models are re-exported here for convenient access:

    from tessbuild.core.models import BuildConfig, PlatformFamily, ReconciliationPlan
"""

from tessbuild.core.models.config import BuildConfig
from tessbuild.core.models.toolchain import (
    UNKNOWN_VERSION,
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
    SkipDirective,
)

__all__ = [
    # config.py
    "BuildConfig",
    # toolchain.py
    "ComponentStatus",
    "DependencyIndeterminate",
    "DependencyReport",
    "DependencyStatus",
    "InstalledComponent",
    "LanguageReport",
    "LanguageStatus",
    "MissingComponent",
    "NoTessdataDir",
    "PlatformFamily",
    "ReconciliationPlan",
    "SkipDirective",
    "UNKNOWN_VERSION",
]
