"""Main CLI entry point for buildpack tooling."""

import logging
import os
import sys

from buildpack_tooling.cli import package_cmd, publish_cmd


def main() -> None:
    """Main CLI entry point."""
    level = logging.getLevelName(os.environ.get("BUILDPACK_TOOLING_LOG_LEVEL", "WARNING").upper())
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    if len(sys.argv) < 2:
        print("Usage: buildpack-tooling <command> [args...]", file=sys.stderr)
        print("Commands:", file=sys.stderr)
        print(
            "  package  - Package a buildpack or extension into .cnb file(s), one per target",
            file=sys.stderr,
        )
        print(
            "  publish  - Publish the buildpack image; multi-arch manifest for 2+ targets",
            file=sys.stderr,
        )
        sys.exit(1)

    command = sys.argv[1]

    if command == "package":
        package_cmd.run_package_argv()
    elif command == "publish":
        publish_cmd.run_publish_argv()
    else:
        print(f"Error: Unknown command: {command}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
