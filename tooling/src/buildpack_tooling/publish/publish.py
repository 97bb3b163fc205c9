"""Publish a packaged buildpack to a registry; multi-target repos get <ref>-<arch> images plus a manifest list."""

from __future__ import annotations

import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from buildpack_tooling.errors import ArtifactNotFoundError, ToolingError
from buildpack_tooling.models import ManifestList, PublishedImage, PublishResult, Target
from buildpack_tooling.package.archive import archive_path
from buildpack_tooling.package.buildpackage import target_args
from buildpack_tooling.project import ProjectContext
from buildpack_tooling.targets import format_targets, read_targets
from buildpack_tooling.tools import run_tool

log = logging.getLogger(__name__)

PACKAGE_HINT = "run `buildpack-tooling package` first"


def resolve_publish_archive(
    build_dir: Path,
    targets: Sequence[Target],
    buildpack_path: Path | None = None,
) -> Path:
    """Explicit path wins; else the first target's arch archive if present; else buildpack.tgz.

    Raises ArtifactNotFoundError if the chosen file does not exist.
    """
    if buildpack_path is not None:
        path = buildpack_path
    elif targets and archive_path(build_dir, targets[0]).is_file():
        path = archive_path(build_dir, targets[0])
        print(f"Info:  Using architecture-specific archive: {path}")
    else:
        path = archive_path(build_dir)
        print(f"Info:  Using default buildpack path: {path}")
    if not path.is_file():
        raise ArtifactNotFoundError(path, PACKAGE_HINT)
    return path


def resolve_arch_archive(
    build_dir: Path,
    target: Target,
    buildpack_path: Path | None = None,
) -> Path:
    """Archive for one target in a multi-arch publish: buildpack-<arch>.tgz, else explicit path, else buildpack.tgz.

    Never falls back to another architecture's archive.
    """
    arch_archive = archive_path(build_dir, target)
    if arch_archive.is_file():
        return arch_archive
    fallback = buildpack_path if buildpack_path is not None else archive_path(build_dir)
    if not fallback.is_file():
        raise ArtifactNotFoundError(arch_archive, PACKAGE_HINT)
    log.warning("no %s for %s; publishing %s under the %s tag", arch_archive.name, target, fallback, target.arch)
    return fallback


def publish_image(ctx: ProjectContext, reference: str, archive: Path, targets: Sequence[Target]) -> None:
    cmd = [
        "pack",
        "buildpack",
        "package",
        reference,
        "--path",
        str(archive),
        *target_args(targets),
        "--format",
        "image",
        "--publish",
    ]
    run_tool(ctx.tools, cmd, cwd=ctx.project_root)


def run_publish(
    project_root: Path,
    image_ref: str,
    buildpack_path: Path | None = None,
    layout: dict[str, Any] | None = None,
) -> PublishResult:
    """Publish image_ref. Fails fast; already-pushed per-arch images are left in place on failure."""
    ctx = ProjectContext.from_project(project_root, layout)
    ctx.tools.bin_dir.mkdir(parents=True, exist_ok=True)
    if buildpack_path is not None:
        buildpack_path = buildpack_path.resolve()

    print(f"🚀 Publishing {ctx.kind.value} to {image_ref}")
    targets = read_targets(ctx.targets_config)
    if targets:
        print(f"Info:  Found {len(targets)} target(s) in {ctx.targets_config.name}: {format_targets(targets)}")

    default_archive = resolve_publish_archive(ctx.build_dir, targets, buildpack_path)
    result = PublishResult()

    if len(targets) <= 1:
        publish_image(ctx, image_ref, default_archive, targets)
        result.images.append(PublishedImage(reference=image_ref, target=targets[0] if targets else None))
        print(f"✅ Published {image_ref}")
        return result

    print(f"Info:  Publishing multi-arch buildpack ({len(targets)} architectures)...")
    # Resolve every archive before the first push so a missing one fails with nothing published.
    plan = [(t, resolve_arch_archive(ctx.build_dir, t, buildpack_path)) for t in targets]

    log.debug("publish state: idle -> per-arch")
    for i, (target, archive) in enumerate(plan):
        ref = f"{image_ref}-{target.arch}"
        log.debug("publish state: per-arch(%d) %s", i, ref)
        print(f"Info:  Publishing {target} as {ref} from {archive.name}...")
        publish_image(ctx, ref, archive, [target])
        result.images.append(PublishedImage(reference=ref, target=target))

    members = tuple(img.reference for img in result.images)
    print(f"🔗 Creating multi-arch manifest for {image_ref}...")
    log.debug("publish state: manifest-create")
    run_tool(ctx.tools, ["docker", "manifest", "create", image_ref, *members], cwd=ctx.project_root)
    log.debug("publish state: manifest-push")
    run_tool(ctx.tools, ["docker", "manifest", "push", image_ref], cwd=ctx.project_root)
    result.manifest = ManifestList(reference=image_ref, members=members)
    log.debug("publish state: done")

    print(f"✅ Successfully published multi-arch buildpack: {image_ref}")
    return result


def run(
    project_root: Path,
    image_ref: str,
    buildpack_path: Path | None = None,
    layout: dict[str, Any] | None = None,
) -> int:
    """run_publish with errors reported on stderr. Returns 0 or 1."""
    try:
        run_publish(project_root, image_ref, buildpack_path=buildpack_path, layout=layout)
    except ToolingError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1
    return 0
