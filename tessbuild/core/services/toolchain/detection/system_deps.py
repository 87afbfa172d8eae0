"""
L3 Detection — System dependency inventory.

Read-only probes against the local package database, one query
per requirement name. A failed query counts as "missing"; the
probe itself always completes.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from tessbuild.core.models.toolchain import (
    DependencyIndeterminate,
    DependencyReport,
    DependencyStatus,
    PlatformFamily,
)
from tessbuild.core.services.toolchain.data.requirements import REQUIREMENTS
from tessbuild.core.services.toolchain.detection.query import (
    DEFAULT_TIMEOUT,
    ProbeFailure,
    run_query,
)

logger = logging.getLogger(__name__)

# brew is slow to start; give it more room than the per-probe default.
_BREW_MIN_TIMEOUT = 30


def _is_pkg_installed(pkg: str, family: PlatformFamily, timeout: int = DEFAULT_TIMEOUT) -> bool:
    """Check if a single system package is installed.

    Uses the appropriate checker for the family:
      DEBIAN   → dpkg-query -W -f='${Status}' PKG  ("install ok installed")
      REDHAT   → rpm -q PKG
      HOMEBREW → brew ls --versions PKG

    Args:
        pkg: Exact package name (must match the family's naming).
        family: Resolved platform family (not UNKNOWN).

    Returns:
        True if installed, False if not installed or the check failed.
    """
    if family is PlatformFamily.DEBIAN:
        r = run_query(["dpkg-query", "-W", "-f=${Status}", pkg], timeout=timeout)
        # Known-but-removed packages report "deinstall ok config-files".
        installed = r.ok and "install ok installed" in r.stdout
    elif family is PlatformFamily.REDHAT:
        r = run_query(["rpm", "-q", pkg], timeout=timeout)
        installed = r.ok
    elif family is PlatformFamily.HOMEBREW:
        r = run_query(
            ["brew", "ls", "--versions", pkg],
            timeout=max(timeout, _BREW_MIN_TIMEOUT),
        )
        installed = r.ok
    else:
        return False

    if r.failure is ProbeFailure.TOOL_UNAVAILABLE:
        logger.warning("Package checker not found for %s (checking %s)", family, pkg)
    return installed


def _check_brew_batch(packages: Sequence[str], timeout: int) -> tuple[list[str], list[str]]:
    """Batch-check brew packages in a single call.

    ``brew ls --versions pkg1 pkg2 pkg3`` prints one line per *installed*
    package (e.g. ``pkg1 1.2.3``) and exits non-zero if any is missing.
    Missing packages produce no output line.

    Returns:
        (installed, missing), each in declared order.
    """
    r = run_query(
        ["brew", "ls", "--versions", *packages],
        timeout=max(timeout, _BREW_MIN_TIMEOUT),
    )

    if r.failure in (ProbeFailure.TOOL_UNAVAILABLE, ProbeFailure.TIMEOUT):
        logger.warning("Brew batch check failed (%s). Falling back to individual checks.", r.failure)
        installed = [p for p in packages if _is_pkg_installed(p, PlatformFamily.HOMEBREW, timeout)]
        missing = [p for p in packages if p not in installed]
        return installed, missing

    installed_names = set()
    for line in r.stdout.strip().splitlines():
        parts = line.strip().split()
        if parts:
            installed_names.add(parts[0])

    installed = [p for p in packages if p in installed_names]
    missing = [p for p in packages if p not in installed_names]
    return installed, missing


def probe_dependencies(
    family: PlatformFamily,
    requirements: Sequence[str] | None = None,
    *,
    timeout: int = DEFAULT_TIMEOUT,
) -> DependencyStatus:
    """Partition the family's requirement list into installed/missing.

    Args:
        family: Result of ``resolve_platform()``.
        requirements: Override for the built-in list of this family.
        timeout: Per-query timeout in seconds.

    Returns:
        ``DependencyReport`` with every name in exactly one bucket, or
        ``DependencyIndeterminate`` when the family is UNKNOWN.
    """
    if family is PlatformFamily.UNKNOWN:
        return DependencyIndeterminate()

    packages = list(requirements) if requirements is not None else list(REQUIREMENTS[family])

    if family is PlatformFamily.HOMEBREW and len(packages) > 1:
        installed, missing = _check_brew_batch(packages, timeout)
    else:
        installed = []
        missing = []
        for pkg in packages:
            if _is_pkg_installed(pkg, family, timeout):
                installed.append(pkg)
            else:
                missing.append(pkg)

    logger.info(
        "Dependencies (%s): %d installed, %d missing",
        family, len(installed), len(missing),
    )
    return DependencyReport(family=family, installed=installed, missing=missing)
