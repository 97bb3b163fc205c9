"""`buildpack-tooling package`: package a buildpack or extension into .cnb file(s)."""

import logging
import sys
from pathlib import Path

from buildpack_tooling.cli.parse_common import parse_flags, path_resolver
from buildpack_tooling.errors import UnknownArgumentError
from buildpack_tooling.package import run_package_cli

log = logging.getLogger(__name__)

USAGE = """\
buildpack-tooling package --version <version> [OPTIONS]

Packages a buildpack or an extension into a buildpackage .cnb file.

Targets are automatically read from buildpack.toml [[targets]] sections.

OPTIONS
  --help               -h            prints the command usage
  --version <version>  -v <version>  specifies the version number to use when packaging a buildpack or an extension
  --output <output>    -o <output>   location to output the packaged buildpackage or extension artifact (default: build/buildpackage.cnb)
  --token <token>      -t <token>    accepted for compatibility; tools must already be installed
  --project-root <dir>               repository root (default: cwd)
"""


def run_package_argv(argv: list[str] | None = None) -> None:
    """Parse argv and run the package pipeline. argv defaults to sys.argv[2:] when called from main."""
    if argv is None:
        argv = sys.argv[2:] if len(sys.argv) > 2 else []
    try:
        parsed, help_requested = parse_flags(
            argv,
            ("version", ("--version", "-v"), None, None),
            ("output", ("--output", "-o"), None, path_resolver),
            ("token", ("--token", "-t"), "", None),
            ("project_root", ("--project-root",), Path.cwd, path_resolver),
        )
    except UnknownArgumentError as e:
        print(f"❌ {e}", file=sys.stderr)
        sys.exit(1)

    if help_requested:
        print(USAGE)
        sys.exit(0)
    if not parsed["version"]:
        print(USAGE, file=sys.stderr)
        print("❌ --version is required", file=sys.stderr)
        sys.exit(1)
    if parsed["token"]:
        log.debug("--token ignored: tool installation is handled outside buildpack-tooling")

    rc = run_package_cli(parsed["project_root"], parsed["version"], output=parsed["output"])
    sys.exit(rc)
