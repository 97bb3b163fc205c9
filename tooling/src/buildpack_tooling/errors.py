"""Error types for buildpack_tooling. Every error is fatal to the current package or publish run."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path


class ToolingError(Exception):
    """Base for all buildpack_tooling failures."""


class ConfigError(ToolingError):
    """Configuration document present but not parseable as expected."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid configuration in {path}: {reason}")


class ArtifactNotFoundError(ToolingError):
    """Expected archive or packaged output missing at the point of use."""

    def __init__(self, path: Path, hint: str = "") -> None:
        self.path = path
        self.hint = hint
        msg = f"Artifact not found at {path}"
        if hint:
            msg = f"{msg}; {hint}"
        super().__init__(msg)


class ExternalToolError(ToolingError):
    """An invoked external tool exited non-zero (or could not be started)."""

    def __init__(self, cmd: Sequence[str], returncode: int, detail: str = "") -> None:
        self.cmd = list(cmd)
        self.returncode = returncode
        self.detail = detail
        tool = self.cmd[0] if self.cmd else "<none>"
        msg = f"{tool} exited with status {returncode}"
        if detail:
            msg = f"{msg}: {detail}"
        super().__init__(msg)


class UnknownArgumentError(ToolingError):
    """Unrecognized command-line option."""

    def __init__(self, argument: str, reason: str = "") -> None:
        self.argument = argument
        self.reason = reason
        super().__init__(f'"{argument}" {reason}' if reason else f'unknown argument "{argument}"')
