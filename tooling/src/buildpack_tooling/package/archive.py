"""Build one buildpack.tgz / buildpack-<arch>.tgz archive via jam (or the legacy libbuildpack packager)."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from buildpack_tooling.models import Archive, PackagerVariant, Target
from buildpack_tooling.project import ProjectContext
from buildpack_tooling.tools import run_tool

log = logging.getLogger(__name__)

GENERIC_ARCHIVE = "buildpack.tgz"


def archive_path(build_dir: Path, target: Target | None = None) -> Path:
    """build_dir/buildpack.tgz, or build_dir/buildpack-<arch>.tgz for a target. OS is not part of the name."""
    if target is None:
        return build_dir / GENERIC_ARCHIVE
    return build_dir / f"buildpack-{target.arch}.tgz"


def reset_binary_dir(ctx: ProjectContext) -> None:
    """Remove and recreate the binary output dir so nothing from a previous target leaks in."""
    shutil.rmtree(ctx.binary_dir, ignore_errors=True)
    ctx.binary_dir.mkdir(parents=True, exist_ok=True)


def build_env(target: Target | None) -> dict[str, str]:
    """GOOS/GOARCH for jam's pre-package script. Empty when untargeted."""
    if target is None:
        return {}
    return {"GOOS": target.os, "GOARCH": target.arch}


def build_archive(ctx: ProjectContext, version: str, target: Target | None = None) -> Archive:
    """Run the packaging toolchain for one target (or untargeted). Raises ExternalToolError on failure."""
    out = archive_path(ctx.build_dir, target)
    print(f"📦 Packaging {ctx.kind.value} into {out}...")

    if target is not None:
        reset_binary_dir(ctx)

    if ctx.variant is PackagerVariant.LIBBUILDPACK:
        # packager names its archive after the output stem, so it always lands on the generic path
        cmd = [
            "packager",
            "--uncached",
            "--archive",
            "--version",
            version,
            str(ctx.build_dir / "buildpack"),
        ]
        out = archive_path(ctx.build_dir)
    else:
        cmd = [
            "jam",
            "pack",
            f"--{ctx.kind.value}",
            str(ctx.definition_path),
            "--version",
            version,
            "--output",
            str(out),
        ]

    run_tool(ctx.tools, cmd, cwd=ctx.project_root, extra_env=build_env(target))
    log.debug("archive for %s at %s", target or "untargeted", out)
    return Archive(path=out, target=target)
