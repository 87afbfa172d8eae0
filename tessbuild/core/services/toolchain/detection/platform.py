"""
L3 Detection — Package-manager family resolution.
"""

from __future__ import annotations

import logging
import shutil

from tessbuild.core.models.toolchain import PlatformFamily
from tessbuild.core.services.toolchain.data.requirements import PACKAGE_MANAGER_PRIORITY

logger = logging.getLogger(__name__)


def resolve_platform() -> PlatformFamily:
    """Return the family of the first package manager found on PATH.

    Probes ``apt-get``, ``yum``, ``dnf``, ``brew`` in that order.
    ``UNKNOWN`` when none is present; never raises.
    """
    for executable, family in PACKAGE_MANAGER_PRIORITY:
        if shutil.which(executable):
            logger.debug("Package manager %s found → %s", executable, family)
            return family

    logger.debug("No supported package manager on PATH")
    return PlatformFamily.UNKNOWN
