"""
Tests for the dependency inventory prober.
"""

import subprocess
from unittest.mock import patch

import pytest

from tessbuild.core.models.toolchain import (
    DependencyIndeterminate,
    DependencyReport,
    PlatformFamily,
)
from tessbuild.core.services.toolchain.data.requirements import REQUIREMENTS
from tessbuild.core.services.toolchain.detection.system_deps import (
    _is_pkg_installed,
    probe_dependencies,
)
from tests.helpers import completed


def _dpkg(installed: set[str]):
    """subprocess.run stand-in answering dpkg-query for *installed*."""
    def _run(cmd, **kwargs):
        pkg = cmd[-1]
        if pkg in installed:
            return completed(0, stdout="install ok installed")
        return completed(1, stderr=f"dpkg-query: no packages found matching {pkg}")
    return _run


class TestRequirementLists:
    def test_lists_are_distinct_per_family(self):
        deb = set(REQUIREMENTS[PlatformFamily.DEBIAN])
        rpm = set(REQUIREMENTS[PlatformFamily.REDHAT])
        brew = set(REQUIREMENTS[PlatformFamily.HOMEBREW])
        assert "build-essential" in deb and "build-essential" not in rpm
        assert "gcc-c++" in rpm
        assert "little-cms2" in brew
        assert deb != rpm != brew

    def test_sizes(self):
        assert len(REQUIREMENTS[PlatformFamily.DEBIAN]) == 20
        assert len(REQUIREMENTS[PlatformFamily.REDHAT]) == 22
        assert len(REQUIREMENTS[PlatformFamily.HOMEBREW]) == 17

    def test_no_duplicates(self):
        for names in REQUIREMENTS.values():
            assert len(names) == len(set(names))


class TestIsPkgInstalled:
    @patch("subprocess.run")
    def test_debian_installed(self, mock_run):
        mock_run.return_value = completed(0, stdout="install ok installed")
        assert _is_pkg_installed("cmake", PlatformFamily.DEBIAN) is True
        assert mock_run.call_args[0][0] == ["dpkg-query", "-W", "-f=${Status}", "cmake"]

    @patch("subprocess.run")
    def test_debian_removed_but_known(self, mock_run):
        mock_run.return_value = completed(0, stdout="deinstall ok config-files")
        assert _is_pkg_installed("cmake", PlatformFamily.DEBIAN) is False

    @patch("subprocess.run")
    def test_redhat(self, mock_run):
        mock_run.return_value = completed(0, stdout="cmake-3.26.5-2.el9.x86_64")
        assert _is_pkg_installed("cmake", PlatformFamily.REDHAT) is True
        assert mock_run.call_args[0][0] == ["rpm", "-q", "cmake"]

    @patch("subprocess.run")
    def test_redhat_not_installed(self, mock_run):
        mock_run.return_value = completed(1, stdout="package cmake is not installed")
        assert _is_pkg_installed("cmake", PlatformFamily.REDHAT) is False

    @patch("subprocess.run")
    def test_homebrew_uses_longer_timeout(self, mock_run):
        mock_run.return_value = completed(0, stdout="cmake 3.29.0")
        assert _is_pkg_installed("cmake", PlatformFamily.HOMEBREW, timeout=5) is True
        assert mock_run.call_args.kwargs["timeout"] >= 30

    @patch("subprocess.run", side_effect=FileNotFoundError("rpm"))
    def test_checker_missing(self, mock_run):
        assert _is_pkg_installed("cmake", PlatformFamily.REDHAT) is False

    @patch("subprocess.run")
    def test_unknown_family(self, mock_run):
        assert _is_pkg_installed("cmake", PlatformFamily.UNKNOWN) is False
        mock_run.assert_not_called()


class TestProbeDependencies:
    @patch("subprocess.run")
    def test_unknown_family_is_indeterminate(self, mock_run):
        result = probe_dependencies(PlatformFamily.UNKNOWN)
        assert isinstance(result, DependencyIndeterminate)
        mock_run.assert_not_called()

    def test_debian_all_installed(self):
        names = set(REQUIREMENTS[PlatformFamily.DEBIAN])
        with patch("subprocess.run", side_effect=_dpkg(names)):
            result = probe_dependencies(PlatformFamily.DEBIAN)
        assert isinstance(result, DependencyReport)
        assert result.installed_count == 20
        assert result.missing_count == 0
        assert result.missing_names == []

    def test_debian_partial_keeps_order(self):
        names = REQUIREMENTS[PlatformFamily.DEBIAN]
        missing = {"libgif-dev", "cmake", "wget"}
        with patch("subprocess.run", side_effect=_dpkg(set(names) - missing)):
            result = probe_dependencies(PlatformFamily.DEBIAN)
        assert result.missing_names == ["cmake", "libgif-dev", "wget"]
        assert result.installed_count == 17

    @patch("subprocess.run", side_effect=subprocess.TimeoutExpired(cmd="dpkg-query", timeout=10))
    def test_timeouts_count_as_missing(self, mock_run):
        result = probe_dependencies(PlatformFamily.DEBIAN)
        assert result.installed_count == 0
        assert result.missing_count == 20

    @patch("subprocess.run", side_effect=FileNotFoundError("rpm"))
    def test_tool_missing_still_completes(self, mock_run):
        result = probe_dependencies(PlatformFamily.REDHAT)
        assert isinstance(result, DependencyReport)
        assert result.missing_count == len(REQUIREMENTS[PlatformFamily.REDHAT])

    @patch("subprocess.run")
    def test_requirements_override(self, mock_run):
        mock_run.return_value = completed(0)
        result = probe_dependencies(PlatformFamily.REDHAT, ["gcc", "make"])
        assert result.installed == ["gcc", "make"]
        assert mock_run.call_count == 2

    @pytest.mark.parametrize(
        "family",
        [PlatformFamily.DEBIAN, PlatformFamily.REDHAT, PlatformFamily.HOMEBREW],
    )
    def test_partition_is_total(self, family):
        names = REQUIREMENTS[family]
        flip = {n for i, n in enumerate(names) if i % 3 == 0}

        def _run(cmd, **kwargs):
            if cmd[:3] == ["brew", "ls", "--versions"] and len(cmd) > 4:
                lines = [f"{n} 1.0" for n in cmd[3:] if n in flip]
                return completed(1, stdout="\n".join(lines))
            if cmd[-1] in flip:
                return completed(0, stdout="install ok installed")
            return completed(1)

        with patch("subprocess.run", side_effect=_run):
            result = probe_dependencies(family)
        assert result.installed_count + result.missing_count == len(names)
        assert set(result.installed) == flip
        assert set(result.installed).isdisjoint(result.missing)


class TestBrewBatch:
    @patch("subprocess.run")
    def test_batch_parses_installed_lines(self, mock_run):
        mock_run.return_value = completed(1, stdout="cmake 3.29.0\ngit 2.44.0 2.43.0\n")
        result = probe_dependencies(PlatformFamily.HOMEBREW, ["git", "cmake", "cairo"])
        assert result.installed == ["git", "cmake"]
        assert result.missing == ["cairo"]
        assert mock_run.call_count == 1
        assert mock_run.call_args[0][0] == ["brew", "ls", "--versions", "git", "cmake", "cairo"]

    @patch("subprocess.run", side_effect=FileNotFoundError("brew"))
    def test_batch_falls_back_to_individual(self, mock_run):
        result = probe_dependencies(PlatformFamily.HOMEBREW, ["git", "cmake"])
        assert result.missing == ["git", "cmake"]
        # one batch attempt + one per package
        assert mock_run.call_count == 3

    @patch("subprocess.run")
    def test_single_package_not_batched(self, mock_run):
        mock_run.return_value = completed(0, stdout="git 2.44.0")
        result = probe_dependencies(PlatformFamily.HOMEBREW, ["git"])
        assert result.installed == ["git"]
        assert mock_run.call_args[0][0] == ["brew", "ls", "--versions", "git"]
