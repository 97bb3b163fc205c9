"""Shared CLI option parsing for package/publish (--flag value, short aliases, strict unknowns)."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

from buildpack_tooling.errors import UnknownArgumentError

HELP_FLAGS = ("--help", "-h")


def parse_flags(
    argv: list[str],
    *specs: tuple[str, tuple[str, ...], Any, Callable[[str], Any] | None],
) -> tuple[dict[str, Any], bool]:
    """Parse --flag value options from argv in one pass.

    Each spec is (key, flag_strs, default, converter), e.g.
    ("output", ("--output", "-o"), None, path_resolver). converter can be None for strings.
    Empty arguments are skipped. Returns (dict of key -> value, help_requested).
    Raises UnknownArgumentError for anything unrecognized, or a flag missing its value.
    """
    result: dict[str, Any] = {}
    for key, _flags, default, _converter in specs:
        result[key] = default() if callable(default) else default

    i = 0
    while i < len(argv):
        arg = argv[i]
        if arg == "":
            i += 1
            continue
        if arg in HELP_FLAGS:
            return result, True
        for key, flags, _default, converter in specs:
            if arg in flags:
                if i + 1 >= len(argv):
                    raise UnknownArgumentError(arg, "requires a value")
                result[key] = converter(argv[i + 1]) if converter else argv[i + 1]
                i += 2
                break
        else:
            raise UnknownArgumentError(arg)
    return result, False


def path_resolver(s: str) -> Path:
    """Resolve a path argument to absolute Path (e.g. --project-root, --output)."""
    return Path(s).resolve()
