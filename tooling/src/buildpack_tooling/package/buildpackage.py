"""Wrap an archive into a .cnb buildpackage with `pack buildpack|extension package --format file`."""

from __future__ import annotations

import logging
import shutil
import tarfile
from collections.abc import Sequence
from pathlib import Path

from buildpack_tooling.errors import ArtifactNotFoundError, ExternalToolError
from buildpack_tooling.models import ArtifactKind, Buildpackage, Target
from buildpack_tooling.package.archive import archive_path
from buildpack_tooling.project import ProjectContext
from buildpack_tooling.tools import run_tool

log = logging.getLogger(__name__)


def arch_output_path(output: Path, arch: str) -> Path:
    """build/buildpackage.cnb -> build/buildpackage-<arch>.cnb. Non-.cnb names just get the suffix."""
    name = output.name
    stem = name[: -len(".cnb")] if name.endswith(".cnb") else name
    return output.with_name(f"{stem}-{arch}.cnb")


def resolve_archive(build_dir: Path, targets: Sequence[Target]) -> Path:
    """Exactly one target: its arch archive if present, else the generic one. Otherwise the generic one."""
    if len(targets) == 1:
        candidate = archive_path(build_dir, targets[0])
        if candidate.is_file():
            return candidate
        log.debug("no %s; falling back to %s", candidate.name, archive_path(build_dir).name)
    return archive_path(build_dir)


def target_args(targets: Sequence[Target]) -> list[str]:
    return [x for t in targets for x in ("--target", str(t))]


def stage_extension(archive: Path, staging_dir: Path) -> None:
    """Recreate staging_dir and unpack archive into it. Raises ExternalToolError if extraction fails."""
    shutil.rmtree(staging_dir, ignore_errors=True)
    staging_dir.mkdir(parents=True)
    try:
        with tarfile.open(archive, "r:*") as tf:
            tf.extractall(staging_dir, filter="data")
    except (tarfile.TarError, OSError) as e:
        raise ExternalToolError(["tar", "-xzf", str(archive)], 1, str(e)) from e


def create_buildpackage(
    ctx: ProjectContext,
    output: Path,
    targets: Sequence[Target] = (),
) -> Buildpackage:
    """Package the resolved archive into output, embedding targets. Raises ArtifactNotFoundError or ExternalToolError."""
    output = output.resolve()
    print(f"📦 Packaging {ctx.kind.value}... {output}")

    archive = resolve_archive(ctx.build_dir, targets)
    if not archive.is_file():
        raise ArtifactNotFoundError(archive, "the archive step must run before packaging")

    output.parent.mkdir(parents=True, exist_ok=True)

    if ctx.kind is ArtifactKind.EXTENSION:
        # pack extension package works on a directory, not a .tgz
        stage_extension(archive, ctx.staging_dir)
        cmd = ["pack", "extension", "package", str(output), "--format", "file", *target_args(targets)]
        run_tool(ctx.tools, cmd, cwd=ctx.staging_dir)
    else:
        cmd = [
            "pack",
            "buildpack",
            "package",
            str(output),
            "--path",
            str(archive),
            "--format",
            "file",
            *target_args(targets),
        ]
        run_tool(ctx.tools, cmd, cwd=ctx.project_root)

    return Buildpackage(output_path=output, kind=ctx.kind, targets=tuple(targets))
