"""`buildpack-tooling publish`: push the packaged buildpack (multi-arch aware) to a registry."""

import logging
import sys
from pathlib import Path

from buildpack_tooling.cli.parse_common import parse_flags, path_resolver
from buildpack_tooling.errors import UnknownArgumentError
from buildpack_tooling.publish import run_publish_cli

log = logging.getLogger(__name__)

USAGE = """\
buildpack-tooling publish --image-ref <ref> [OPTIONS]

Publishes the buildpack to a registry.

Targets are automatically read from buildpack.toml [[targets]] sections.
With 2+ targets, a target whose build/buildpack-<arch>.tgz is missing is published from
--buildpack-path (or build/buildpack.tgz); another architecture's archive is never used.

OPTIONS
  -i, --image-ref <ref>               Image reference to publish to (required)
  -b, --buildpack-path <filepath>     Path to the buildpack archive (default: auto-detected from build directory)
  -t, --token <token>                 Accepted for compatibility; tools must already be installed
      --project-root <dir>            Repository root (default: cwd)
  -h, --help                          Prints the command usage
"""


def run_publish_argv(argv: list[str] | None = None) -> None:
    """Parse argv and run the publish pipeline. argv defaults to sys.argv[2:] when called from main."""
    if argv is None:
        argv = sys.argv[2:] if len(sys.argv) > 2 else []
    try:
        parsed, help_requested = parse_flags(
            argv,
            ("image_ref", ("--image-ref", "-i"), None, None),
            ("buildpack_path", ("--buildpack-path", "-b"), None, path_resolver),
            ("token", ("--token", "-t"), "", None),
            ("project_root", ("--project-root",), Path.cwd, path_resolver),
        )
    except UnknownArgumentError as e:
        print(f"❌ {e}", file=sys.stderr)
        sys.exit(1)

    if help_requested:
        print(USAGE)
        sys.exit(0)
    if not parsed["image_ref"]:
        print(USAGE, file=sys.stderr)
        print("❌ --image-ref is required", file=sys.stderr)
        sys.exit(1)
    if parsed["token"]:
        log.debug("--token ignored: tool installation is handled outside buildpack-tooling")

    rc = run_publish_cli(
        parsed["project_root"],
        parsed["image_ref"],
        buildpack_path=parsed["buildpack_path"],
    )
    sys.exit(rc)
