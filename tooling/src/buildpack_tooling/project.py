"""Per-run project context: resolved paths, artifact kind, packager variant and tool locations.

Kind and variant are probed from marker files once, when the context is built, and threaded
through the pipelines from there.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from buildpack_tooling.config import project_layout
from buildpack_tooling.models import ArtifactKind, PackagerVariant
from buildpack_tooling.tools import ToolchainLocations


@dataclass(frozen=True)
class ProjectContext:
    project_root: Path
    layout: dict[str, str]
    kind: ArtifactKind
    variant: PackagerVariant
    tools: ToolchainLocations

    @classmethod
    def from_project(cls, project_root: Path, layout: dict[str, Any] | None = None) -> ProjectContext:
        root = project_root.resolve()
        cfg = project_layout(root, layout)
        kind = ArtifactKind.EXTENSION if (root / cfg["extension_toml"]).is_file() else ArtifactKind.BUILDPACK
        variant = (
            PackagerVariant.LIBBUILDPACK
            if (root / cfg["libbuildpack_marker"]).is_file()
            else PackagerVariant.JAM
        )
        return cls(
            project_root=root,
            layout=cfg,
            kind=kind,
            variant=variant,
            tools=ToolchainLocations(bin_dir=root / cfg["bin_dir"]),
        )

    @property
    def build_dir(self) -> Path:
        return self.project_root / self.layout["build_dir"]

    @property
    def binary_dir(self) -> Path:
        """Where the buildpack's pre-package step compiles binaries; reset before each target."""
        return self.project_root / self.layout["binary_dir"]

    @property
    def staging_dir(self) -> Path:
        return self.build_dir / self.layout["staging_dir"]

    @property
    def targets_config(self) -> Path:
        return self.project_root / self.layout["buildpack_toml"]

    @property
    def definition_path(self) -> Path:
        """buildpack.toml or extension.toml, depending on kind."""
        key = "extension_toml" if self.kind is ArtifactKind.EXTENSION else "buildpack_toml"
        return self.project_root / self.layout[key]

    @property
    def default_output(self) -> Path:
        return self.build_dir / self.layout["default_output"]
