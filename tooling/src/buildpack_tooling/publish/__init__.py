"""Publish pipeline: single image or per-arch images plus manifest list."""

from .publish import resolve_arch_archive, resolve_publish_archive, run_publish
from .publish import run as run_publish_cli

__all__ = [
    "resolve_arch_archive",
    "resolve_publish_archive",
    "run_publish",
    "run_publish_cli",
]
