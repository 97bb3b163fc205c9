"""Read [[targets]] from buildpack.toml into an ordered list of Target values."""

from __future__ import annotations

import tomllib
from collections.abc import Iterable
from pathlib import Path

from buildpack_tooling.errors import ConfigError
from buildpack_tooling.models import Target


def read_targets(config_path: Path) -> list[Target]:
    """Parse targets from config_path.

    A missing file, or a file without a ``targets`` array, yields an empty list: build one
    generic artifact. Duplicates are kept and declaration order is preserved. Raises
    ConfigError if the file exists but is not valid TOML or a target entry is malformed.
    """
    if not config_path.is_file():
        return []
    try:
        with config_path.open("rb") as f:
            data = tomllib.load(f)
    except (tomllib.TOMLDecodeError, UnicodeDecodeError) as e:
        raise ConfigError(config_path, str(e)) from e

    raw = data.get("targets")
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise ConfigError(config_path, "targets must be an array of tables")

    targets: list[Target] = []
    for i, entry in enumerate(raw):
        if not isinstance(entry, dict):
            raise ConfigError(config_path, f"targets[{i}] must be a table")
        os_name = entry.get("os")
        arch = entry.get("arch")
        if not isinstance(os_name, str) or not isinstance(arch, str) or not os_name or not arch:
            raise ConfigError(config_path, f"targets[{i}] needs string os and arch")
        targets.append(Target(os=os_name, arch=arch))
    return targets


def format_targets(targets: Iterable[Target]) -> str:
    return ", ".join(str(t) for t in targets)
