"""
L0 Data — Per-family build requirements and well-known locations.

Pure data. No logic.

Each family's package list is curated independently against that
ecosystem's naming. They are NOT translations of one another
(Homebrew has no compiler meta-package, RHEL splits gcc/gcc-c++, etc.).
"""

from __future__ import annotations

from tessbuild.core.models.toolchain import PlatformFamily

# Package-manager executables in probe priority order.
PACKAGE_MANAGER_PRIORITY: tuple[tuple[str, PlatformFamily], ...] = (
    ("apt-get", PlatformFamily.DEBIAN),
    ("yum", PlatformFamily.REDHAT),
    ("dnf", PlatformFamily.REDHAT),
    ("brew", PlatformFamily.HOMEBREW),
)

REQUIREMENTS: dict[PlatformFamily, tuple[str, ...]] = {
    PlatformFamily.DEBIAN: (
        "build-essential", "cmake", "git", "pkg-config", "libtool",
        "autoconf", "automake",
        "libpng-dev", "libjpeg-dev", "libtiff-dev", "libgif-dev",
        "libwebp-dev", "libopenjp2-7-dev", "zlib1g-dev", "liblcms2-dev",
        "libicu-dev", "libpango1.0-dev", "libcairo2-dev",
        "curl", "wget",
    ),
    PlatformFamily.REDHAT: (
        "gcc", "gcc-c++", "make", "cmake", "git", "pkgconfig", "libtool",
        "autoconf", "automake",
        "libpng-devel", "libjpeg-devel", "libtiff-devel", "giflib-devel",
        "libwebp-devel", "openjpeg2-devel", "zlib-devel", "lcms2-devel",
        "libicu-devel", "pango-devel", "cairo-devel",
        "curl", "wget",
    ),
    PlatformFamily.HOMEBREW: (
        "cmake", "git", "pkg-config", "libtool", "autoconf", "automake",
        "libpng", "jpeg", "libtiff", "giflib", "webp", "openjpeg",
        "zlib", "little-cms2", "icu4c", "pango", "cairo",
    ),
}

# ── Leptonica ────────────────────────────────────────────────────────

LEPTONICA_PKGCONFIG_NAME = "lept"
LEPTONICA_LINKER_MARKER = "liblept"  # matches liblept.so* and libleptonica.so*
LEPTONICA_LIB_NAMES: tuple[str, ...] = ("liblept", "libleptonica")
SHARED_LIB_EXTENSIONS: tuple[str, ...] = (".so", ".dylib")

# ── Tesseract ────────────────────────────────────────────────────────

TESSERACT_BINARY = "tesseract"
TESSERACT_VERSION_PATTERN = r"\d+\.\d+\.\d+"

# ── Language data ────────────────────────────────────────────────────

TESSDATA_DIRNAME = "tessdata"
TRAINEDDATA_SUFFIX = ".traineddata"

WELL_KNOWN_TESSDATA_DIRS: tuple[str, ...] = (
    "/usr/share/tessdata",
    "/usr/local/share/tessdata",
    "/opt/homebrew/share/tessdata",
    "/usr/share/tesseract-ocr/5/tessdata",
    "/usr/share/tesseract-ocr/4.00/tessdata",
)
