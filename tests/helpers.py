"""
Test helpers shared across modules.
"""

from pathlib import Path
from unittest.mock import MagicMock


def completed(returncode: int = 0, stdout: str = "", stderr: str = "") -> MagicMock:
    """Stand-in for ``subprocess.CompletedProcess``."""
    return MagicMock(returncode=returncode, stdout=stdout, stderr=stderr)


def fake_tool(directory: Path, name: str, printf_arg: str) -> Path:
    """Write an executable shell script that prints *printf_arg* via printf."""
    directory.mkdir(parents=True, exist_ok=True)
    script = directory / name
    script.write_text(f"#!/bin/sh\nprintf '{printf_arg}'\n")
    script.chmod(0o755)
    return script
