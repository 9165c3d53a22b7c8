import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from .errors import HumanError

MANIFEST_NAME = "human.toml"
DEFAULT_ENTRY = "app.human"
OUTPUT_FORMATS = ("yaml", "json")


@dataclass
class OutputConfig:
    """Where and how the built IR is written."""

    format: str = "yaml"  # "yaml" | "json"
    path: str | None = None  # None writes to stdout


@dataclass
class ProjectManifest:
    """
    Project manifest loaded from human.toml.

    Every section is optional; a project without a manifest gets the
    defaults below.
    """

    name: str | None = None
    entry: str = DEFAULT_ENTRY
    output: OutputConfig = field(default_factory=OutputConfig)
    project_root: Path = field(default_factory=Path.cwd)

    @property
    def entry_path(self) -> Path:
        return self.project_root / self.entry

    @property
    def output_path(self) -> Path | None:
        if self.output.path is None:
            return None
        return self.project_root / self.output.path


def load_manifest(path: Path) -> ProjectManifest:
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise HumanError(f"Invalid manifest {path}: {e}") from e

    project = data.get("project", {})
    output_data = data.get("output", {})

    output_format = output_data.get("format", "yaml")
    if output_format not in OUTPUT_FORMATS:
        raise HumanError(
            f"Invalid manifest {path}: output format must be one of "
            f"{', '.join(OUTPUT_FORMATS)}, got '{output_format}'"
        )

    return ProjectManifest(
        name=project.get("name"),
        entry=project.get("entry", DEFAULT_ENTRY),
        output=OutputConfig(format=output_format, path=output_data.get("path")),
        project_root=path.parent,
    )


def find_manifest(directory: Path) -> ProjectManifest:
    """Load human.toml from a directory, or return defaults rooted there."""
    path = directory / MANIFEST_NAME
    if path.exists():
        return load_manifest(path)
    return ProjectManifest(project_root=directory)
