"""Value types shared by the package and publish pipelines."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class ArtifactKind(str, Enum):
    BUILDPACK = "buildpack"
    EXTENSION = "extension"


class PackagerVariant(str, Enum):
    """Which toolchain produces the archive: jam (default) or the legacy libbuildpack packager."""

    JAM = "jam"
    LIBBUILDPACK = "packager"


@dataclass(frozen=True)
class Target:
    os: str
    arch: str

    def __str__(self) -> str:
        return f"{self.os}/{self.arch}"


@dataclass(frozen=True)
class Archive:
    path: Path
    target: Target | None = None


@dataclass(frozen=True)
class Buildpackage:
    output_path: Path
    kind: ArtifactKind
    targets: tuple[Target, ...] = ()


@dataclass(frozen=True)
class PublishedImage:
    reference: str
    target: Target | None = None


@dataclass(frozen=True)
class ManifestList:
    reference: str
    members: tuple[str, ...]


@dataclass
class PackageResult:
    archives: list[Archive] = field(default_factory=list)
    buildpackages: list[Buildpackage] = field(default_factory=list)
    primary_output: Path | None = None


@dataclass
class PublishResult:
    images: list[PublishedImage] = field(default_factory=list)
    manifest: ManifestList | None = None
