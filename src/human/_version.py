"""Version lookup for the human-lang distribution.

A source checkout reports the version in its pyproject.toml so
`human --version` tracks edits without a reinstall; an installed wheel
reports its package metadata.
"""

import tomllib
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _metadata_version
from pathlib import Path

DISTRIBUTION = "human-lang"
UNKNOWN_VERSION = "0.0.0"

_PYPROJECT = Path(__file__).resolve().parents[2] / "pyproject.toml"


def _source_version(pyproject: Path) -> str | None:
    try:
        data = tomllib.loads(pyproject.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError):
        return None
    project = data.get("project", {})
    if project.get("name") != DISTRIBUTION:
        return None
    return project.get("version")


def get_version() -> str:
    """Return the human-lang version, or 0.0.0 when neither source is available."""
    found = _source_version(_PYPROJECT)
    if found:
        return found
    try:
        return _metadata_version(DISTRIBUTION)
    except PackageNotFoundError:
        return UNKNOWN_VERSION
