"""
L3 Detection — ``__init__.py`` re-exports all detection functions.

These functions READ system state but never WRITE.
Subprocess calls, file stats, directory listings — all read-only.
"""

from tessbuild.core.services.toolchain.detection.leptonica import (  # noqa: F401
    probe_library,
)
from tessbuild.core.services.toolchain.detection.platform import (  # noqa: F401
    resolve_platform,
)
from tessbuild.core.services.toolchain.detection.query import (  # noqa: F401
    ProbeFailure,
    QueryResult,
    run_query,
)
from tessbuild.core.services.toolchain.detection.system_deps import (  # noqa: F401
    _is_pkg_installed,
    probe_dependencies,
)
from tessbuild.core.services.toolchain.detection.tessdata import (  # noqa: F401
    diff_languages,
    parse_language_list,
    resolve_languages,
    resolve_tessdata_dir,
    scan_languages,
)
from tessbuild.core.services.toolchain.detection.tesseract import (  # noqa: F401
    parse_version,
    probe_engine,
)
