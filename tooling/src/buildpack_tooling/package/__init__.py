"""Packaging pipeline: archives per target, then .cnb buildpackages. Consumed by the `package` CLI."""

from .archive import archive_path, build_archive
from .buildpackage import arch_output_path, create_buildpackage, resolve_archive
from .pipeline import run as run_package_cli
from .pipeline import run_package

__all__ = [
    "arch_output_path",
    "archive_path",
    "build_archive",
    "create_buildpackage",
    "resolve_archive",
    "run_package",
    "run_package_cli",
]
