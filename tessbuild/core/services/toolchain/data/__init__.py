"""
L0 Data — static tables consumed by the detection layer.
"""

from tessbuild.core.services.toolchain.data.requirements import (  # noqa: F401
    LEPTONICA_LIB_NAMES,
    LEPTONICA_LINKER_MARKER,
    LEPTONICA_PKGCONFIG_NAME,
    PACKAGE_MANAGER_PRIORITY,
    REQUIREMENTS,
    SHARED_LIB_EXTENSIONS,
    TESSDATA_DIRNAME,
    TESSERACT_BINARY,
    TESSERACT_VERSION_PATTERN,
    TRAINEDDATA_SUFFIX,
    WELL_KNOWN_TESSDATA_DIRS,
)
