"""Project layout (paths relative to project_root) with optional buildpack-tooling.yaml overrides."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from buildpack_tooling.errors import ConfigError

LAYOUT_FILE = "buildpack-tooling.yaml"

# Paketo-style defaults; override per repo via buildpack-tooling.yaml.
DEFAULT_LAYOUT: dict[str, str] = {
    "build_dir": "build",
    "bin_dir": ".bin",
    "binary_dir": "bin",
    "buildpack_toml": "buildpack.toml",
    "extension_toml": "extension.toml",
    "libbuildpack_marker": ".libbuildpack",
    "staging_dir": "cnbdir",
    "default_output": "buildpackage.cnb",
}


def resolve_layout(layout: dict[str, Any] | None) -> dict[str, str]:
    """Return layout dict with defaults filled. Unknown keys are dropped."""
    if layout is None:
        return dict(DEFAULT_LAYOUT)
    out = dict(DEFAULT_LAYOUT)
    out.update({k: str(v) for k, v in layout.items() if k in out})
    return out


def load_layout_file(project_root: Path) -> dict[str, Any]:
    """Read buildpack-tooling.yaml from project_root. Missing file -> {}. Raises ConfigError if malformed."""
    path = project_root / LAYOUT_FILE
    if not path.is_file():
        return {}
    try:
        with path.open() as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(path, str(e)) from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(path, "expected a mapping at top level")
    return data


def check_layout_dirs(project_root: Path, layout: dict[str, str]) -> None:
    """Directories that get wiped must sit strictly below project_root (staging_dir below build_dir).

    Raises ConfigError naming buildpack-tooling.yaml otherwise.
    """
    root = project_root.resolve()
    build_dir = (root / layout["build_dir"]).resolve()
    checks = [
        ("build_dir", build_dir, root),
        ("binary_dir", (root / layout["binary_dir"]).resolve(), root),
        ("staging_dir", (build_dir / layout["staging_dir"]).resolve(), build_dir),
    ]
    for key, path, parent in checks:
        if path == parent or not path.is_relative_to(parent):
            raise ConfigError(
                root / LAYOUT_FILE,
                f"{key} {layout[key]!r} must be a directory inside {parent}",
            )


def project_layout(project_root: Path, layout: dict[str, Any] | None = None) -> dict[str, str]:
    """Defaults, then buildpack-tooling.yaml, then explicit layout (highest precedence)."""
    merged: dict[str, Any] = dict(load_layout_file(project_root))
    if layout:
        merged.update(layout)
    out = resolve_layout(merged)
    check_layout_dirs(project_root, out)
    return out
