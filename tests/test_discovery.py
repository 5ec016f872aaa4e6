"""Tests for CLI discovery."""

import subprocess
from unittest.mock import patch

import pytest

from op_securenotes.core import discovery
from op_securenotes.core.discovery import (
    CLIInfo,
    clear_cache,
    discover_cli,
    get_cli_path,
    is_supported_version,
)


@pytest.fixture(autouse=True)
def fresh_cache():
    clear_cache()
    yield
    clear_cache()


def version_output(stdout: str, returncode: int = 0) -> subprocess.CompletedProcess:
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr="")


class TestDiscoverCli:
    """Test discover_cli."""

    def test_found_on_path(self):
        with patch("shutil.which", return_value="/usr/bin/op"), patch(
            "subprocess.run", return_value=version_output("2.24.0\n")
        ):
            info = discover_cli("op")

        assert info == CLIInfo(name="op", path="/usr/bin/op", version="2.24.0", available=True)
        assert info.summary() == "+ op: /usr/bin/op (v2.24.0)"

    def test_not_found(self):
        with patch("shutil.which", return_value=None), patch(
            "op_securenotes.core.discovery._get_search_paths", return_value=[]
        ):
            info = discover_cli("op")

        assert not info.available
        assert info.path is None
        assert "not found" in info.error
        assert info.summary() == "- op: not found"

    def test_results_are_cached(self):
        with patch("shutil.which", return_value="/usr/bin/op") as which, patch(
            "subprocess.run", return_value=version_output("2.24.0")
        ):
            discover_cli("op")
            discover_cli("op")
            assert get_cli_path("op") == "/usr/bin/op"
            discover_cli("op", refresh=True)

        assert which.call_count == 2

    def test_version_failure(self):
        with patch("shutil.which", return_value="/usr/bin/op"), patch(
            "subprocess.run", return_value=version_output("", returncode=1)
        ):
            info = discover_cli("op")

        assert info.available
        assert info.version is None

    def test_version_extracted_from_text(self):
        with patch("subprocess.run", return_value=version_output("op version 2.30.3-beta.01\n")):
            assert discovery._get_cli_version("/usr/bin/op") == "2.30.3-beta.01"


class TestIsSupportedVersion:
    """Test version comparison."""

    @pytest.mark.parametrize(
        "version, supported",
        [
            ("2.0.0", True),
            ("2.24.0", True),
            ("1.12.4", False),
            (None, True),
            ("not-a-version", True),
        ],
    )
    def test_against_minimum(self, version, supported):
        assert is_supported_version(version, "2.0.0") is supported
