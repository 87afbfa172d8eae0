"""
Tests for tessdata resolution and the language diff.
"""

from unittest.mock import patch

import pytest

from tessbuild.core.models.toolchain import LanguageReport, NoTessdataDir
from tessbuild.core.services.toolchain.detection.tessdata import (
    diff_languages,
    parse_language_list,
    resolve_languages,
    resolve_tessdata_dir,
    scan_languages,
)
from tests.helpers import completed

_WELL_KNOWN = "tessbuild.core.services.toolchain.detection.tessdata.WELL_KNOWN_TESSDATA_DIRS"


@pytest.fixture(autouse=True)
def _isolated_host():
    """No tesseract on PATH and no well-known dirs unless a test says so."""
    with patch("shutil.which", return_value=None), patch(_WELL_KNOWN, ()):
        yield


class TestParseLanguageList:
    def test_whitespace_trimmed(self):
        assert parse_language_list("eng, ara ,ell") == ["eng", "ara", "ell"]

    def test_empty_tokens_dropped(self):
        assert parse_language_list("eng,,ara,") == ["eng", "ara"]
        assert parse_language_list("") == []

    def test_duplicates_kept(self):
        assert parse_language_list("eng,eng") == ["eng", "eng"]


class TestDiff:
    def test_keeps_order(self):
        assert diff_languages(["deu", "eng", "ara"], {"eng"}) == ["deu", "ara"]

    def test_case_sensitive(self):
        assert diff_languages(["ENG"], {"eng"}) == ["ENG"]

    def test_duplicates_reported_twice(self):
        assert diff_languages(["ara", "ara"], {"eng"}) == ["ara", "ara"]


class TestScan:
    def test_only_traineddata_files(self, tmp_path, make_tessdata):
        make_tessdata(tmp_path, "eng", "osd")
        (tmp_path / "configs").mkdir()
        (tmp_path / "pdf.ttf").write_bytes(b"")
        (tmp_path / "fake.traineddata").mkdir()
        assert scan_languages(tmp_path) == {"eng", "osd"}

    def test_not_recursive(self, tmp_path, make_tessdata):
        make_tessdata(tmp_path / "best", "eng")
        assert scan_languages(tmp_path) == set()

    def test_unreadable_dir(self, tmp_path):
        assert scan_languages(tmp_path / "gone") == set()


class TestResolveLanguages:
    def test_prefix_tessdata(self, prefix, make_tessdata):
        make_tessdata(prefix / "share" / "tessdata", "eng", "ell")
        result = resolve_languages("eng, ara, ell", prefix)
        assert isinstance(result, LanguageReport)
        assert result.available == {"eng", "ell"}
        assert result.missing == ["ara"]
        assert result.requested == ["eng", "ara", "ell"]
        assert result.directory == prefix / "share" / "tessdata"

    def test_sequence_request(self, prefix, make_tessdata):
        make_tessdata(prefix / "share" / "tessdata", "eng")
        result = resolve_languages([" eng ", "", "deu"], prefix)
        assert result.missing == ["deu"]

    def test_all_present(self, prefix, make_tessdata):
        make_tessdata(prefix / "share" / "tessdata", "eng", "ara", "ell")
        assert resolve_languages("eng,ara,ell", prefix).missing == []

    def test_empty_directory(self, prefix):
        (prefix / "share" / "tessdata").mkdir(parents=True)
        result = resolve_languages("eng", prefix)
        assert result.available == set()
        assert result.missing == ["eng"]

    def test_no_directory(self, prefix):
        result = resolve_languages("eng", prefix)
        assert isinstance(result, NoTessdataDir)
        assert str(prefix / "share" / "tessdata") in result.searched


class TestLocators:
    def test_print_parameters(self, prefix, make_tessdata, tmp_path):
        reported = tmp_path / "reported"
        make_tessdata(reported, "eng")
        dump = f"tessedit_char_whitelist\t\tWhitelist\ntessdata_dir\t{reported}\tdir\n"
        with patch("shutil.which", return_value="/usr/bin/tesseract"), \
                patch("subprocess.run", return_value=completed(0, stdout=dump)):
            assert resolve_tessdata_dir(prefix) == reported

    def test_print_parameters_skips_non_path_values(self, prefix, tmp_path, monkeypatch):
        # a relative "0" dir in cwd must not be mistaken for tessdata
        (tmp_path / "0").mkdir()
        monkeypatch.chdir(tmp_path)
        dump = "tessdata_manager_debug_level\t0\tDebug level\n"
        with patch("shutil.which", return_value="/usr/bin/tesseract"), \
                patch("subprocess.run", return_value=completed(0, stdout=dump)):
            assert resolve_tessdata_dir(prefix) is None

    def test_list_langs_header(self, prefix, make_tessdata, tmp_path):
        listed = tmp_path / "listed" / "tessdata"
        make_tessdata(listed, "eng")

        def _run(cmd, **kwargs):
            if cmd[-1] == "--list-langs":
                return completed(0, stdout=f'List of available languages in "{listed}/" (1):\neng\n')
            return completed(1)

        with patch("shutil.which", return_value="/usr/bin/tesseract"), \
                patch("subprocess.run", side_effect=_run):
            assert resolve_tessdata_dir(prefix) == listed

    def test_well_known(self, prefix, make_tessdata, tmp_path):
        system = tmp_path / "usr" / "share" / "tessdata"
        make_tessdata(system, "eng", "fra")
        with patch(_WELL_KNOWN, (str(tmp_path / "nope"), str(system))):
            result = resolve_languages("fra", prefix)
        assert result.directory == system
        assert result.missing == []

    def test_prefix_wins(self, prefix, make_tessdata, tmp_path):
        make_tessdata(prefix / "share" / "tessdata", "eng")
        system = tmp_path / "system"
        make_tessdata(system, "eng")
        with patch(_WELL_KNOWN, (str(system),)):
            assert resolve_tessdata_dir(prefix) == prefix / "share" / "tessdata"

    def test_searched_records_all_candidates(self, prefix, tmp_path):
        searched = []
        with patch(_WELL_KNOWN, (str(tmp_path / "a"), str(tmp_path / "b"))):
            assert resolve_tessdata_dir(prefix, searched=searched) is None
        assert searched == [
            str(prefix / "share" / "tessdata"),
            str(tmp_path / "a"),
            str(tmp_path / "b"),
        ]
