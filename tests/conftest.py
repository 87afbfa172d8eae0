"""
Shared test fixtures and configuration.
"""

from pathlib import Path

import pytest


@pytest.fixture
def prefix(tmp_path: Path) -> Path:
    """An empty install prefix."""
    root = tmp_path / "prefix"
    root.mkdir()
    return root


@pytest.fixture
def make_tessdata():
    """Create a tessdata dir holding ``<code>.traineddata`` for each code."""

    def _make(directory: Path, *codes: str) -> Path:
        directory.mkdir(parents=True, exist_ok=True)
        for code in codes:
            (directory / f"{code}.traineddata").write_bytes(b"\0")
        return directory

    return _make
