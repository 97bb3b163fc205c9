"""Tests for buildpack_tooling.cli (main, package/publish argv parsing)."""

import logging
from pathlib import Path
from unittest.mock import patch

import pytest

from buildpack_tooling.cli.main import main
from buildpack_tooling.cli.package_cmd import run_package_argv
from buildpack_tooling.cli.parse_common import parse_flags
from buildpack_tooling.cli.publish_cmd import run_publish_argv
from buildpack_tooling.errors import UnknownArgumentError

SPECS = (
    ("version", ("--version", "-v"), None, None),
    ("output", ("--output", "-o"), None, Path),
)


class TestParseFlags:
    def test_long_and_short_flags(self) -> None:
        parsed, help_requested = parse_flags(["-v", "1.0.0", "--output", "x.cnb"], *SPECS)
        assert parsed == {"version": "1.0.0", "output": Path("x.cnb")}
        assert help_requested is False

    def test_defaults_and_empty_args_skipped(self) -> None:
        parsed, _ = parse_flags(["", "--version", "2.0.0", ""], *SPECS)
        assert parsed == {"version": "2.0.0", "output": None}

    def test_callable_default(self) -> None:
        parsed, _ = parse_flags([], ("root", ("--root",), lambda: "cwd", None))
        assert parsed["root"] == "cwd"

    def test_help(self) -> None:
        _, help_requested = parse_flags(["--version", "1", "-h"], *SPECS)
        assert help_requested is True

    def test_unknown_argument_raises(self) -> None:
        with pytest.raises(UnknownArgumentError) as exc_info:
            parse_flags(["--version", "1", "--bogus"], *SPECS)
        assert exc_info.value.argument == "--bogus"

    def test_flag_without_value_raises(self) -> None:
        with pytest.raises(UnknownArgumentError) as exc_info:
            parse_flags(["--version"], *SPECS)
        assert str(exc_info.value) == '"--version" requires a value'
        assert "unknown" not in str(exc_info.value)


class TestPackageArgv:
    def test_requires_version(self, capsys) -> None:
        with patch("buildpack_tooling.cli.package_cmd.run_package_cli") as m:
            with pytest.raises(SystemExit) as exc_info:
                run_package_argv([])
        assert exc_info.value.code == 1
        assert "--version is required" in capsys.readouterr().err
        m.assert_not_called()

    def test_unknown_argument_exits_before_running(self, capsys) -> None:
        with patch("buildpack_tooling.cli.package_cmd.run_package_cli") as m:
            with pytest.raises(SystemExit) as exc_info:
                run_package_argv(["--version", "1.0.0", "--arch", "arm64"])
        assert exc_info.value.code == 1
        assert 'unknown argument "--arch"' in capsys.readouterr().err
        m.assert_not_called()

    def test_help_exits_0(self, capsys) -> None:
        with pytest.raises(SystemExit) as exc_info:
            run_package_argv(["--help"])
        assert exc_info.value.code == 0
        assert "buildpack-tooling package --version" in capsys.readouterr().out

    def test_passes_options_through(self, tmp_path: Path) -> None:
        with patch("buildpack_tooling.cli.package_cmd.run_package_cli", return_value=0) as m:
            with pytest.raises(SystemExit) as exc_info:
                run_package_argv(
                    [
                        "-v",
                        "1.2.3",
                        "-o",
                        str(tmp_path / "out.cnb"),
                        "--token",
                        "secret",
                        "--project-root",
                        str(tmp_path),
                    ]
                )
        assert exc_info.value.code == 0
        m.assert_called_once_with(tmp_path.resolve(), "1.2.3", output=(tmp_path / "out.cnb").resolve())


class TestPublishArgv:
    def test_requires_image_ref(self, capsys) -> None:
        with pytest.raises(SystemExit) as exc_info:
            run_publish_argv(["--buildpack-path", "x.tgz"])
        assert exc_info.value.code == 1
        assert "--image-ref is required" in capsys.readouterr().err

    def test_passes_options_through(self, tmp_path: Path) -> None:
        with patch("buildpack_tooling.cli.publish_cmd.run_publish_cli", return_value=1) as m:
            with pytest.raises(SystemExit) as exc_info:
                run_publish_argv(
                    ["-i", "ghcr.io/a/b:1", "-b", str(tmp_path / "bp.tgz"), "--project-root", str(tmp_path)]
                )
        assert exc_info.value.code == 1
        m.assert_called_once_with(
            tmp_path.resolve(),
            "ghcr.io/a/b:1",
            buildpack_path=(tmp_path / "bp.tgz").resolve(),
        )


class TestMain:
    def test_no_command(self) -> None:
        with patch("sys.argv", ["buildpack-tooling"]), patch("sys.stderr"):
            with pytest.raises(SystemExit) as exc_info:
                main()
        assert exc_info.value.code == 1

    def test_unknown_command(self, capsys) -> None:
        with patch("sys.argv", ["buildpack-tooling", "deploy"]):
            with pytest.raises(SystemExit) as exc_info:
                main()
        assert exc_info.value.code == 1
        assert "Unknown command: deploy" in capsys.readouterr().err

    def test_invalid_log_level_falls_back_to_warning(self) -> None:
        with (
            patch.dict("os.environ", {"BUILDPACK_TOOLING_LOG_LEVEL": "verbose"}),
            patch("sys.argv", ["buildpack-tooling", "publish", "-i", "ref"]),
            patch("buildpack_tooling.cli.main.logging.basicConfig") as m_config,
            patch("buildpack_tooling.cli.publish_cmd.run_publish_cli", return_value=0),
        ):
            with pytest.raises(SystemExit) as exc_info:
                main()
        assert exc_info.value.code == 0
        assert m_config.call_args[1]["level"] == logging.WARNING

    def test_log_level_from_env(self) -> None:
        with (
            patch.dict("os.environ", {"BUILDPACK_TOOLING_LOG_LEVEL": "debug"}),
            patch("sys.argv", ["buildpack-tooling"]),
            patch("buildpack_tooling.cli.main.logging.basicConfig") as m_config,
            patch("sys.stderr"),
        ):
            with pytest.raises(SystemExit):
                main()
        assert m_config.call_args[1]["level"] == logging.DEBUG

    def test_dispatches_publish(self) -> None:
        with (
            patch("sys.argv", ["buildpack-tooling", "publish", "-i", "ref"]),
            patch("buildpack_tooling.cli.publish_cmd.run_publish_cli", return_value=0) as m,
        ):
            with pytest.raises(SystemExit) as exc_info:
                main()
        assert exc_info.value.code == 0
        assert m.call_args[0][1] == "ref"

    def test_end_to_end_package(self, make_project, fake_tools) -> None:
        root = make_project([("linux", "amd64"), ("linux", "arm64")])
        with patch("sys.argv", ["buildpack-tooling", "package", "-v", "1.0.0", "--project-root", str(root)]):
            with pytest.raises(SystemExit) as exc_info:
                main()
        assert exc_info.value.code == 0
        assert (root / "build" / "buildpackage.cnb").is_file()
