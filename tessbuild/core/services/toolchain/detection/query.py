"""
L3 Detection — Read-only subprocess query runner.

The SINGLE PLACE where ``subprocess.run`` is called for probes.
Never raises: every outcome maps to a ``QueryResult``, and the
caller decides what a failure means for its probe (usually
"signal did not match" or "missing").
"""

from __future__ import annotations

import logging
import os
import subprocess
import time
from dataclasses import dataclass
from enum import StrEnum

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10


class ProbeFailure(StrEnum):
    """Why a query produced no usable answer."""

    TOOL_UNAVAILABLE = "tool_unavailable"  # executable could not be started
    QUERY_FAILED = "query_failed"          # ran, non-zero exit
    TIMEOUT = "timeout"


@dataclass(frozen=True)
class QueryResult:
    """Outcome of one read-only query."""

    ok: bool
    stdout: str = ""
    stderr: str = ""
    returncode: int | None = None
    failure: ProbeFailure | None = None
    elapsed_ms: int = 0

    @property
    def output(self) -> str:
        """stdout followed by stderr (``2>&1`` equivalent)."""
        return (self.stdout or "") + (self.stderr or "")


def run_query(
    cmd: list[str],
    *,
    timeout: int = DEFAULT_TIMEOUT,
    env_overrides: dict[str, str] | None = None,
) -> QueryResult:
    """Run a read-only command and capture its output.

    Args:
        cmd: Command list for ``subprocess.run()``.
        timeout: Seconds before the query counts as failed.
        env_overrides: Extra env vars (e.g. ``PKG_CONFIG_PATH``).

    Returns:
        ``QueryResult``; ``ok`` is True only on exit status 0.
    """
    env = None
    if env_overrides:
        env = os.environ.copy()
        env.update(env_overrides)

    start = time.monotonic()
    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            errors="replace",  # tools may print non-UTF-8 bytes
            timeout=timeout,
            env=env,
        )
    except FileNotFoundError:
        logger.debug("Query tool not found: %s", cmd[0])
        return QueryResult(ok=False, failure=ProbeFailure.TOOL_UNAVAILABLE)
    except subprocess.TimeoutExpired:
        logger.warning("Query timed out after %ss: %s", timeout, " ".join(cmd))
        return QueryResult(ok=False, failure=ProbeFailure.TIMEOUT)
    except OSError as exc:
        logger.warning("OS error running %s: %s", " ".join(cmd), exc)
        return QueryResult(ok=False, failure=ProbeFailure.TOOL_UNAVAILABLE)

    elapsed_ms = int((time.monotonic() - start) * 1000)
    stdout = result.stdout or ""
    stderr = result.stderr or ""

    if result.returncode == 0:
        return QueryResult(
            ok=True,
            stdout=stdout,
            stderr=stderr,
            returncode=0,
            elapsed_ms=elapsed_ms,
        )

    logger.debug("Query exited %d: %s", result.returncode, " ".join(cmd))
    return QueryResult(
        ok=False,
        stdout=stdout,
        stderr=stderr,
        returncode=result.returncode,
        failure=ProbeFailure.QUERY_FAILED,
        elapsed_ms=elapsed_ms,
    )
