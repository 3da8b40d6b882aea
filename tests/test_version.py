"""
Tests for version information.
"""
import importlib.metadata
from unittest.mock import patch

import permitlayer_sdk
from permitlayer_sdk import version

NOT_INSTALLED = importlib.metadata.PackageNotFoundError(version.DISTRIBUTION)


def test_version_is_exported():
    assert isinstance(permitlayer_sdk.__version__, str)
    assert permitlayer_sdk.__version__ == version.__version__


def test_installed_metadata_wins(tmp_path):
    with patch("importlib.metadata.version", return_value="9.9.9"):
        assert version.get_version(tmp_path / "missing.toml") == "9.9.9"


def test_falls_back_to_pyproject(tmp_path):
    pyproject = tmp_path / "pyproject.toml"
    pyproject.write_text('[project]\nname = "permitlayer-sdk"\nversion = "1.2.3"\n')
    with patch("importlib.metadata.version", side_effect=NOT_INSTALLED):
        assert version.get_version(pyproject) == "1.2.3"


def test_repository_pyproject_is_read():
    with patch("importlib.metadata.version", side_effect=NOT_INSTALLED):
        assert version.get_version() == "0.1.0"


def test_foreign_or_broken_pyproject_is_ignored(tmp_path):
    foreign = tmp_path / "foreign.toml"
    foreign.write_text('[project]\nname = "other"\nversion = "5.0.0"\n')
    broken = tmp_path / "broken.toml"
    broken.write_text("[project\n")
    with patch("importlib.metadata.version", side_effect=NOT_INSTALLED):
        assert version.get_version(foreign) == version.UNKNOWN_VERSION
        assert version.get_version(broken) == version.UNKNOWN_VERSION
        assert version.get_version(tmp_path / "missing.toml") == version.UNKNOWN_VERSION
