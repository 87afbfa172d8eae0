"""
L3 Detection — Tesseract binary presence, version and location.
"""

from __future__ import annotations

import logging
import re
import shutil

from tessbuild.core.models.toolchain import (
    UNKNOWN_VERSION,
    ComponentStatus,
    InstalledComponent,
    MissingComponent,
)
from tessbuild.core.services.toolchain.data.requirements import (
    TESSERACT_BINARY,
    TESSERACT_VERSION_PATTERN,
)
from tessbuild.core.services.toolchain.detection.query import DEFAULT_TIMEOUT, run_query

logger = logging.getLogger(__name__)

_VERSION_RE = re.compile(TESSERACT_VERSION_PATTERN)


def parse_version(output: str) -> str:
    """First ``X.Y.Z`` on the first line of ``tesseract --version``.

    >>> parse_version("tesseract 5.3.0\\n leptonica-1.82.0")
    '5.3.0'
    """
    lines = output.strip().splitlines()
    if not lines:
        return UNKNOWN_VERSION
    match = _VERSION_RE.search(lines[0])
    return match.group(0) if match else UNKNOWN_VERSION


def probe_engine(*, timeout: int = DEFAULT_TIMEOUT) -> ComponentStatus:
    """Detect the Tesseract executable on PATH.

    Returns:
        ``InstalledComponent`` with version (or ``"unknown"``) and the
        resolved path, or ``MissingComponent`` when not on PATH.
    """
    path = shutil.which(TESSERACT_BINARY)
    if not path:
        logger.debug("%s not on PATH", TESSERACT_BINARY)
        return MissingComponent(name=TESSERACT_BINARY)

    # Older releases print the banner on stderr.
    r = run_query([path, "--version"], timeout=timeout)
    version = parse_version(r.output) if r.output else UNKNOWN_VERSION
    if r.failure is not None:
        logger.debug("tesseract --version failed (%s); version unknown", r.failure)

    return InstalledComponent(
        name=TESSERACT_BINARY,
        version=version,
        location=path,
        source="path",
    )
