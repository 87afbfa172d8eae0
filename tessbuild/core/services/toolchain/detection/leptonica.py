"""
L3 Detection — Leptonica presence and version.

Four signals, tried in order, first match wins:

    1. pkg-config knows the ``lept`` module    → its modversion
    2. the dynamic linker cache lists liblept* → version unknown
    3. <prefix>/lib holds the shared object     → version unknown
    4. nothing                                  → MissingComponent

Each signal is a function returning ``InstalledComponent | None``;
a failing tool just means "no match" and the chain moves on.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from pathlib import Path

from tessbuild.core.models.toolchain import (
    UNKNOWN_VERSION,
    ComponentStatus,
    InstalledComponent,
    MissingComponent,
)
from tessbuild.core.services.toolchain.data.requirements import (
    LEPTONICA_LIB_NAMES,
    LEPTONICA_LINKER_MARKER,
    LEPTONICA_PKGCONFIG_NAME,
    SHARED_LIB_EXTENSIONS,
)
from tessbuild.core.services.toolchain.detection.query import DEFAULT_TIMEOUT, run_query

logger = logging.getLogger(__name__)

COMPONENT = "leptonica"

Signal = Callable[[Path, int], InstalledComponent | None]


def _pkgconfig_env(prefix: Path) -> dict[str, str]:
    """PKG_CONFIG_PATH with the prefix's pkgconfig dir in front."""
    local = str(prefix / "lib" / "pkgconfig")
    existing = os.environ.get("PKG_CONFIG_PATH", "")
    return {"PKG_CONFIG_PATH": f"{local}{os.pathsep}{existing}" if existing else local}


def _signal_pkg_config(prefix: Path, timeout: int) -> InstalledComponent | None:
    env = _pkgconfig_env(prefix)
    exists = run_query(
        ["pkg-config", "--exists", LEPTONICA_PKGCONFIG_NAME],
        timeout=timeout, env_overrides=env,
    )
    if not exists.ok:
        return None

    r = run_query(
        ["pkg-config", "--modversion", LEPTONICA_PKGCONFIG_NAME],
        timeout=timeout, env_overrides=env,
    )
    version = r.stdout.strip() if r.ok else ""
    return InstalledComponent(
        name=COMPONENT,
        version=version or UNKNOWN_VERSION,
        source="pkg-config",
    )


def _signal_ldconfig(prefix: Path, timeout: int) -> InstalledComponent | None:
    r = run_query(["ldconfig", "-p"], timeout=timeout)
    if not r.ok:
        return None

    # Lines look like: "\tliblept.so.5 (libc6,x86-64) => /usr/lib/x86_64-linux-gnu/liblept.so.5"
    for line in r.stdout.splitlines():
        entry = line.strip()
        if not entry.startswith(LEPTONICA_LINKER_MARKER):
            continue
        location = entry.split("=>", 1)[1].strip() if "=>" in entry else None
        return InstalledComponent(
            name=COMPONENT,
            version=UNKNOWN_VERSION,
            location=location,
            source="ldconfig",
        )
    return None


def _signal_prefix_lib(prefix: Path, timeout: int) -> InstalledComponent | None:
    lib_dir = prefix / "lib"
    for name in LEPTONICA_LIB_NAMES:
        for ext in SHARED_LIB_EXTENSIONS:
            candidate = lib_dir / f"{name}{ext}"
            if candidate.is_file():
                return InstalledComponent(
                    name=COMPONENT,
                    version=UNKNOWN_VERSION,
                    location=str(candidate),
                    source="prefix",
                )
    return None


SIGNALS: tuple[Signal, ...] = (
    _signal_pkg_config,
    _signal_ldconfig,
    _signal_prefix_lib,
)


def probe_library(prefix: str | Path, *, timeout: int = DEFAULT_TIMEOUT) -> ComponentStatus:
    """Detect Leptonica through the ordered signal chain.

    Args:
        prefix: Install prefix whose ``lib`` dir is searched last.
        timeout: Per-query timeout in seconds.

    Returns:
        ``InstalledComponent`` from the first matching signal,
        otherwise ``MissingComponent``.
    """
    prefix = Path(prefix)
    for signal in SIGNALS:
        found = signal(prefix, timeout)
        if found is not None:
            logger.debug("Leptonica matched by %s (version %s)", found.source, found.version)
            return found
        logger.debug("Leptonica signal %s: no match", signal.__name__)

    return MissingComponent(name=COMPONENT)
