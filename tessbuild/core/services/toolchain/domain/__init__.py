"""
L1 Domain — pure logic over probe results. No I/O.
"""

from tessbuild.core.services.toolchain.domain.plan import (  # noqa: F401
    DEFAULT_COMMAND,
    HostInfo,
    LineLevel,
    ReportLine,
    ReportSection,
    StatusReport,
    derive_plan,
    synthesize,
)
