"""Package a buildpack or extension into .cnb file(s): one per [[targets]] entry, or one generic."""

from __future__ import annotations

import shutil
import sys
from pathlib import Path
from typing import Any

from buildpack_tooling.errors import ToolingError
from buildpack_tooling.models import PackageResult
from buildpack_tooling.package.archive import build_archive
from buildpack_tooling.package.buildpackage import arch_output_path, create_buildpackage
from buildpack_tooling.project import ProjectContext
from buildpack_tooling.targets import format_targets, read_targets


def prepare(ctx: ProjectContext) -> None:
    """Wipe the build dir and make sure the tool dir exists."""
    print("🔧 Preparing repo...")
    shutil.rmtree(ctx.build_dir, ignore_errors=True)
    ctx.build_dir.mkdir(parents=True)
    ctx.tools.bin_dir.mkdir(parents=True, exist_ok=True)


def run_package(
    project_root: Path,
    version: str,
    output: Path | None = None,
    layout: dict[str, Any] | None = None,
) -> PackageResult:
    """Build archive(s) and buildpackage(s). Fails fast on the first error (raises ToolingError)."""
    ctx = ProjectContext.from_project(project_root, layout)
    out = output.resolve() if output is not None else ctx.default_output

    targets = read_targets(ctx.targets_config)
    prepare(ctx)
    if targets:
        print(f"Info:  Found {len(targets)} target(s) in {ctx.targets_config.name}: {format_targets(targets)}")

    result = PackageResult()
    if not targets:
        result.archives.append(build_archive(ctx, version))
        result.buildpackages.append(create_buildpackage(ctx, out))
        result.primary_output = out
        print(f"✅ Created {out}")
        return result

    for target in targets:
        print(f"🔨 Building binaries for {target} (arch: {target.arch})...")
        result.archives.append(build_archive(ctx, version, target))
        arch_out = arch_output_path(out, target.arch)
        result.buildpackages.append(create_buildpackage(ctx, arch_out, [target]))

    first = result.buildpackages[0].output_path
    shutil.copyfile(first, out)
    result.primary_output = out

    print("✅ Created architecture-specific packages:")
    for bp in result.buildpackages:
        print(f"  - {bp.output_path}")
    print(f"  - {out} (copy of {first})")
    return result


def run(
    project_root: Path,
    version: str,
    output: Path | None = None,
    layout: dict[str, Any] | None = None,
) -> int:
    """run_package with errors reported on stderr. Returns 0 or 1."""
    try:
        run_package(project_root, version, output=output, layout=layout)
    except ToolingError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1
    return 0
