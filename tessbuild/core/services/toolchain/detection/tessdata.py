"""
L3 Detection — Tessdata directory resolution and language diff.

The tessdata directory is found through an ordered fallback chain:

    1. <prefix>/share/tessdata
    2. what the installed tesseract reports (--print-parameters,
       then the --list-langs header)
    3. well-known install locations
    4. none → NoTessdataDir

Once found, every ``*.traineddata`` file directly inside it is an
available language, and the requested codes are diffed against that set.
"""

from __future__ import annotations

import logging
import re
import shutil
from collections.abc import Callable, Iterable
from pathlib import Path

from tessbuild.core.models.toolchain import LanguageReport, LanguageStatus, NoTessdataDir
from tessbuild.core.services.toolchain.data.requirements import (
    TESSDATA_DIRNAME,
    TESSERACT_BINARY,
    TRAINEDDATA_SUFFIX,
    WELL_KNOWN_TESSDATA_DIRS,
)
from tessbuild.core.services.toolchain.detection.query import DEFAULT_TIMEOUT, run_query

logger = logging.getLogger(__name__)

# List of available languages in "/usr/share/tesseract-ocr/5/tessdata/" (3):
_LIST_LANGS_HEADER = re.compile(r'available languages in "([^"]+)"')


def parse_language_list(raw: str) -> list[str]:
    """Split a comma-separated language string into trimmed codes.

    Empty tokens are dropped; order and duplicates are kept.
    """
    return [code.strip() for code in raw.split(",") if code.strip()]


# ── Directory resolution ─────────────────────────────────────────────


def _from_prefix(prefix: Path, timeout: int) -> list[Path]:
    return [prefix / "share" / TESSDATA_DIRNAME]


def _from_parameters(prefix: Path, timeout: int) -> list[Path]:
    """Directories named by ``tesseract --print-parameters``."""
    if not shutil.which(TESSERACT_BINARY):
        return []
    r = run_query([TESSERACT_BINARY, "--print-parameters"], timeout=timeout)
    if not r.ok:
        return []

    candidates = []
    for line in r.stdout.splitlines():
        if TESSDATA_DIRNAME not in line:
            continue
        fields = line.split()
        # tessdata_manager_debug_level and friends also match; keep paths only
        if len(fields) >= 2 and Path(fields[1]).is_absolute():
            candidates.append(Path(fields[1]))
    return candidates


def _from_list_langs(prefix: Path, timeout: int) -> list[Path]:
    """Directory named in the ``tesseract --list-langs`` header."""
    if not shutil.which(TESSERACT_BINARY):
        return []
    r = run_query([TESSERACT_BINARY, "--list-langs"], timeout=timeout)
    match = _LIST_LANGS_HEADER.search(r.output)
    return [Path(match.group(1))] if match else []


def _from_well_known(prefix: Path, timeout: int) -> list[Path]:
    return [Path(d) for d in WELL_KNOWN_TESSDATA_DIRS]


LOCATORS: tuple[Callable[[Path, int], list[Path]], ...] = (
    _from_prefix,
    _from_parameters,
    _from_list_langs,
    _from_well_known,
)


def resolve_tessdata_dir(
    prefix: str | Path,
    *,
    timeout: int = DEFAULT_TIMEOUT,
    searched: list[str] | None = None,
) -> Path | None:
    """Return the first candidate directory that exists, or None.

    Args:
        prefix: Install prefix checked first.
        timeout: Per-query timeout for the tesseract queries.
        searched: If given, every candidate tried is appended to it.
    """
    prefix = Path(prefix)
    for locate in LOCATORS:
        for candidate in locate(prefix, timeout):
            if searched is not None:
                searched.append(str(candidate))
            if candidate.is_dir():
                logger.debug("Tessdata directory %s (via %s)", candidate, locate.__name__)
                return candidate
    return None


# ── Language diff ────────────────────────────────────────────────────


def scan_languages(directory: Path) -> set[str]:
    """Language codes of the ``.traineddata`` files directly in *directory*."""
    try:
        entries = list(directory.iterdir())
    except OSError as exc:
        logger.warning("Cannot list %s: %s", directory, exc)
        return set()

    return {
        entry.name[: -len(TRAINEDDATA_SUFFIX)]
        for entry in entries
        if entry.name.endswith(TRAINEDDATA_SUFFIX) and entry.is_file()
    }


def diff_languages(requested: Iterable[str], available: set[str]) -> list[str]:
    """Requested codes not in *available*, in requested order.

    Not deduplicated: a code requested twice and absent is listed twice.
    """
    return [code for code in (c.strip() for c in requested) if code not in available]


def resolve_languages(
    requested: str | Iterable[str],
    prefix: str | Path,
    *,
    timeout: int = DEFAULT_TIMEOUT,
) -> LanguageStatus:
    """Locate tessdata and split the requested codes into available/missing.

    Args:
        requested: Comma-separated string or sequence of raw codes.
        prefix: Install prefix.
        timeout: Per-query timeout in seconds.

    Returns:
        ``LanguageReport``, or ``NoTessdataDir`` if nothing was found.
    """
    if isinstance(requested, str):
        codes = parse_language_list(requested)
    else:
        codes = [c.strip() for c in requested if c.strip()]

    searched: list[str] = []
    directory = resolve_tessdata_dir(prefix, timeout=timeout, searched=searched)
    if directory is None:
        logger.info("No tessdata directory found (searched %d locations)", len(searched))
        return NoTessdataDir(searched=searched)

    available = scan_languages(directory)
    missing = diff_languages(codes, available)
    return LanguageReport(
        directory=directory,
        available=available,
        missing=missing,
        requested=codes,
    )
