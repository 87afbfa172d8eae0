"""
Tests for Tesseract binary detection.
"""

import subprocess
import sys
from unittest.mock import patch

import pytest

from tessbuild.core.models.toolchain import InstalledComponent, MissingComponent
from tessbuild.core.services.toolchain.detection.tesseract import parse_version, probe_engine
from tests.helpers import completed, fake_tool

_BANNER = (
    "tesseract 5.3.4\n"
    " leptonica-1.84.1\n"
    "  libgif 5.2.1 : libjpeg 8d (libjpeg-turbo 2.1.5) : libpng 1.6.43\n"
)


class TestParseVersion:
    @pytest.mark.parametrize(
        "output,expected",
        [
            (_BANNER, "5.3.4"),
            ("tesseract v5.5.1.20250101\n", "5.5.1"),
            ("tesseract 4.1.1-rc2-22-g08899\n", "4.1.1"),
            ("tesseract unknown build\n leptonica-1.84.1", "unknown"),
            ("", "unknown"),
        ],
    )
    def test_parse(self, output, expected):
        assert parse_version(output) == expected

    def test_only_first_line_considered(self):
        assert parse_version("tesseract\n leptonica-1.84.1") == "unknown"


@patch("shutil.which", return_value="/usr/bin/tesseract")
class TestProbeEngine:
    @patch("subprocess.run")
    def test_installed(self, mock_run, _which):
        mock_run.return_value = completed(0, stdout=_BANNER)
        result = probe_engine()
        assert isinstance(result, InstalledComponent)
        assert result.version == "5.3.4"
        assert result.location == "/usr/bin/tesseract"
        assert mock_run.call_args[0][0] == ["/usr/bin/tesseract", "--version"]

    @patch("subprocess.run")
    def test_banner_on_stderr(self, mock_run, _which):
        mock_run.return_value = completed(0, stderr="tesseract 3.05.02\n")
        assert probe_engine().version == "3.05.02"

    @patch("subprocess.run")
    def test_unparsable_version(self, mock_run, _which):
        mock_run.return_value = completed(0, stdout="tesseract git-abcdef\n")
        result = probe_engine()
        assert isinstance(result, InstalledComponent)
        assert result.version == "unknown"

    @patch("subprocess.run", side_effect=subprocess.TimeoutExpired(cmd="tesseract", timeout=10))
    def test_timeout_still_installed(self, mock_run, _which):
        result = probe_engine()
        assert isinstance(result, InstalledComponent)
        assert result.version == "unknown"


class TestProbeEngineMissing:
    @patch("subprocess.run")
    @patch("shutil.which", return_value=None)
    def test_not_on_path(self, _which, mock_run):
        result = probe_engine()
        assert isinstance(result, MissingComponent)
        assert result.name == "tesseract"
        mock_run.assert_not_called()


@pytest.mark.skipif(sys.platform == "win32", reason="needs a POSIX shell")
class TestProbeEngineRealProcess:
    def test_non_utf8_banner_still_installed(self, tmp_path):
        tool = fake_tool(tmp_path / "bin", "tesseract", "tesseract 5.3.0 \\377\\n")
        with patch("shutil.which", return_value=str(tool)):
            result = probe_engine()
        assert isinstance(result, InstalledComponent)
        assert result.version == "5.3.0"
        assert result.location == str(tool)
