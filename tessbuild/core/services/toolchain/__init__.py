"""
Toolchain status service — package re-exports.

    from tessbuild.core.services.toolchain import probe_engine, synthesize

Each symbol lives in its single-responsibility module inside the
appropriate layer (data → domain → detection).
"""

# ── L0: Data ──
from tessbuild.core.services.toolchain.data.requirements import (  # noqa: F401
    REQUIREMENTS,
)

# ── L1: Domain ──
from tessbuild.core.services.toolchain.domain.plan import (  # noqa: F401
    HostInfo,
    StatusReport,
    derive_plan,
    synthesize,
)

# ── L3: Detection ──
from tessbuild.core.services.toolchain.detection.leptonica import (  # noqa: F401
    probe_library,
)
from tessbuild.core.services.toolchain.detection.platform import (  # noqa: F401
    resolve_platform,
)
from tessbuild.core.services.toolchain.detection.system_deps import (  # noqa: F401
    probe_dependencies,
)
from tessbuild.core.services.toolchain.detection.tessdata import (  # noqa: F401
    parse_language_list,
    resolve_languages,
    resolve_tessdata_dir,
)
from tessbuild.core.services.toolchain.detection.tesseract import (  # noqa: F401
    probe_engine,
)
