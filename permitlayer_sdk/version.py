"""
Version information for the PermitLayer SDK.

The installed distribution metadata wins; a source checkout reads the
version from the adjacent pyproject.toml.
"""
import importlib.metadata
from pathlib import Path
from typing import Optional

import tomli

DISTRIBUTION = "permitlayer-sdk"
UNKNOWN_VERSION = "0.0.0+unknown"
PYPROJECT = Path(__file__).resolve().parent.parent / "pyproject.toml"


def _pyproject_version(path: Path) -> Optional[str]:
    """Return project.version from a pyproject file, or None if absent"""
    try:
        data = tomli.loads(path.read_text(encoding="utf-8"))
    except (OSError, tomli.TOMLDecodeError):
        return None
    project = data.get("project", {})
    if project.get("name") != DISTRIBUTION:
        return None
    return project.get("version")


def get_version(pyproject: Path = PYPROJECT) -> str:
    try:
        return importlib.metadata.version(DISTRIBUTION)
    except importlib.metadata.PackageNotFoundError:
        return _pyproject_version(pyproject) or UNKNOWN_VERSION


__version__ = get_version()
