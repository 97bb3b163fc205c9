"""External tool seam: explicit tool search path and a runner that raises ExternalToolError on failure."""

from __future__ import annotations

import logging
import os
import subprocess
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path

from buildpack_tooling.errors import ExternalToolError

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ToolchainLocations:
    """Where pack, jam, packager and friends live. bin_dir is searched before the inherited PATH."""

    bin_dir: Path

    def env(self, extra: Mapping[str, str] | None = None) -> dict[str, str]:
        """Copy of the process environment with bin_dir prepended to PATH, plus extra vars."""
        env = dict(os.environ)
        inherited = env.get("PATH", "")
        env["PATH"] = f"{self.bin_dir}{os.pathsep}{inherited}" if inherited else str(self.bin_dir)
        if extra:
            env.update(extra)
        return env


def run_tool(
    tools: ToolchainLocations,
    cmd: Sequence[str],
    cwd: Path,
    extra_env: Mapping[str, str] | None = None,
) -> None:
    """Run cmd in cwd and wait for it. Output streams to the terminal. Raises ExternalToolError on non-zero exit."""
    cmd = [str(c) for c in cmd]
    log.debug("running %s (cwd=%s, extra_env=%s)", " ".join(cmd), cwd, dict(extra_env or {}))
    try:
        r = subprocess.run(cmd, cwd=str(cwd), env=tools.env(extra_env))
    except FileNotFoundError as e:
        raise ExternalToolError(cmd, 127, f"{cmd[0]} not found on PATH (looked in {tools.bin_dir} first)") from e
    if r.returncode != 0:
        raise ExternalToolError(cmd, r.returncode)
