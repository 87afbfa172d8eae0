"""tessbuild — Tesseract OCR toolchain status and reconciliation."""

__version__ = "0.1.0"
