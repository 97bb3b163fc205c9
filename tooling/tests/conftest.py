"""Pytest fixtures for buildpack tooling tests."""

from __future__ import annotations

import io
import tarfile
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock, patch

import pytest


def write_tgz(path: Path, files: dict[str, str]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with tarfile.open(path, "w:gz") as tf:
        for name, text in files.items():
            data = text.encode()
            info = tarfile.TarInfo(name)
            info.size = len(data)
            tf.addfile(info, io.BytesIO(data))


def _flag(cmd: list[str], name: str) -> str | None:
    return cmd[cmd.index(name) + 1] if name in cmd else None


class FakeTools:
    """Stands in for jam, packager, pack and docker: records calls and writes the files they would."""

    def __init__(self) -> None:
        self.calls: list[dict[str, Any]] = []
        self.fail_when: Callable[[list[str]], bool] | None = None
        self.jam_writes = True

    def commands(self, tool: str | None = None) -> list[list[str]]:
        return [c["cmd"] for c in self.calls if tool is None or c["cmd"][0] == tool]

    def __call__(self, cmd: list[str], cwd: str | None = None, env: dict[str, str] | None = None, **_: Any):
        env = env or {}
        self.calls.append({"cmd": list(cmd), "cwd": cwd, "env": dict(env)})
        if self.fail_when is not None and self.fail_when(cmd):
            return MagicMock(returncode=2)

        tool = cmd[0]
        if tool == "jam" and self.jam_writes:
            arch = env.get("GOARCH", "generic")
            write_tgz(
                Path(_flag(cmd, "--output")),
                {"buildpack.toml": "api = '0.8'\n", f"bin/{arch}": f"binary for {arch}\n"},
            )
        elif tool == "packager":
            write_tgz(Path(cmd[-1] + ".tgz"), {"bin/run": "legacy\n"})
        elif tool == "pack" and _flag(cmd, "--format") == "file":
            out = Path(cmd[3])
            if cmd[1] == "extension":
                content = "\n".join(sorted(p.name for p in Path(cwd).iterdir()))
            else:
                content = Path(_flag(cmd, "--path")).name
            targets = [cmd[i + 1] for i, a in enumerate(cmd) if a == "--target"]
            out.write_text(f"{content}|{','.join(targets)}\n")
        return MagicMock(returncode=0)


@pytest.fixture
def fake_tools() -> Iterator[FakeTools]:
    tools = FakeTools()
    with patch("buildpack_tooling.tools.subprocess.run", side_effect=tools):
        yield tools


@pytest.fixture
def make_project(tmp_path: Path) -> Callable[..., Path]:
    """Create a buildpack repo under tmp_path. targets: list of (os, arch) or None for no [[targets]]."""

    def _make(
        targets: list[tuple[str, str]] | None = None,
        extension: bool = False,
        libbuildpack: bool = False,
    ) -> Path:
        root = tmp_path / "repo"
        root.mkdir(exist_ok=True)
        lines = ['api = "0.8"', "", "[buildpack]", '  id = "acme/test"', ""]
        for os_name, arch in targets or []:
            lines += ["[[targets]]", f'  os = "{os_name}"', f'  arch = "{arch}"', ""]
        (root / "buildpack.toml").write_text("\n".join(lines))
        if extension:
            (root / "extension.toml").write_text('api = "0.8"\n[extension]\n  id = "acme/ext"\n')
        if libbuildpack:
            (root / ".libbuildpack").write_text("")
        return root

    return _make
