"""Tests for chanlog.cli and chanlog.commands — argument parsing and dispatch."""

import json
import subprocess
import sys

import pytest

from chanlog.cli import _extract_global_flags, main
from chanlog.commands.demo import FrameClock, build_runtime, run_session
from chanlog.lib.log_lib import Environment, get_runtime


class TestGlobalFlagExtraction:
    """Test the two-pass global flag parsing."""

    def test_env_before_subcommand(self):
        global_args, remaining = _extract_global_flags(["--env", "build", "channels"])
        assert global_args.env == "build"
        assert remaining == ["channels"]

    def test_env_after_subcommand(self):
        global_args, remaining = _extract_global_flags(["channels", "--env", "editor"])
        assert global_args.env == "editor"
        assert remaining == ["channels"]

    def test_config_with_value(self):
        global_args, remaining = _extract_global_flags(
            ["--config", "/tmp/my.json", "reset"])
        assert global_args.config == "/tmp/my.json"
        assert "/tmp/my.json" not in remaining

    def test_no_global_flags(self):
        global_args, remaining = _extract_global_flags(["channel", "audio:off"])
        assert global_args.config is None
        assert global_args.env is None
        assert global_args.no_color is False
        assert remaining == ["channel", "audio:off"]


class TestMain:
    """Dispatch through main()."""

    def test_no_args_prints_help(self, capsys, tmp_config_home):
        assert main([]) == 0
        assert "usage: chanlog" in capsys.readouterr().out

    def test_env_flag_sets_runtime_environment(self, tmp_config_home, capsys):
        main(["--env", "build", "channels"])
        assert get_runtime().environment is Environment.BUILD

    def test_channels_lists(self, capsys, tmp_path):
        settings = tmp_path / "s.json"
        settings.write_text(json.dumps(
            {"channels": {"performance": {"enabled": True, "scope": "editor"}}}))
        assert main(["--config", str(settings), "--env", "build", "channels"]) == 0
        out = capsys.readouterr().out
        assert "environment: build" in out
        assert "performance" in out

    def test_channel_writes_settings(self, tmp_path, capsys):
        settings = tmp_path / "s.json"
        code = main(["channel", "audio:off", "performance::build",
                     "--config", str(settings)])
        assert code == 0
        data = json.loads(settings.read_text())
        assert data["channels"]["audio"]["enabled"] is False
        assert data["channels"]["performance"] == {"enabled": True, "scope": "build"}
        assert "[OK] audio: off" in capsys.readouterr().out

    def test_channel_bad_spec(self, tmp_path, capsys):
        settings = tmp_path / "s.json"
        assert main(["--no-color", "channel", "telemetry",
                     "--config", str(settings)]) == 1
        assert not settings.exists()
        assert "Unknown channel" in capsys.readouterr().err

    def test_channel_default_skipped(self, tmp_path, capsys):
        settings = tmp_path / "s.json"
        assert main(["channel", "default:off", "--config", str(settings)]) == 0
        assert not settings.exists()
        assert "[SKIP]" in capsys.readouterr().out

    def test_reset_writes_defaults(self, tmp_path):
        settings = tmp_path / "s.json"
        settings.write_text(json.dumps({"channels": {"audio": {"enabled": False}}}))
        assert main(["reset", "--config", str(settings)]) == 0
        data = json.loads(settings.read_text())
        assert data["channels"]["audio"]["enabled"] is True
        assert data["channels"]["performance"]["scope"] == "editor"
        assert "default" not in data["channels"]


class TestDemo:
    """The scripted demo session."""

    def test_session_throttles_and_asserts(self, tmp_config_home, capsys):
        clock = FrameClock()
        runtime, history = build_runtime(clock)
        run_session(runtime, clock, frames=180)
        lines = [e.message for e in history.entries]
        throttled = [l for l in lines if "rate-limited" in l]
        # 180 frames at 60 fps = 3 s, 2 s interval: frame 0 and frame 120
        assert len(throttled) == 2
        assert throttled[1].endswith("(suppressed 119x)")
        assert "Gameplay:: [Level Loading > Enemy Spawner] Spawned 5 enemies" in lines
        assert any("ASSERTION FAILED: Health cannot be negative!" in l for l in lines)
        assert any("target cannot be null" in l for l in lines)
        assert runtime.context.depth == 0

    def test_demo_export(self, tmp_path, tmp_config_home, capsys):
        out = tmp_path / "session.txt"
        assert main(["--no-color", "demo", "--frames", "10", "--export", str(out)]) == 0
        text = out.read_text(encoding="utf-8")
        assert text.startswith("chanlog - Log Export")
        assert "Gameplay:: Game started!" in text


@pytest.mark.slow
def test_module_entry_point(tmp_path):
    """python -m chanlog.cli --version runs in a fresh interpreter."""
    result = subprocess.run(
        [sys.executable, "-m", "chanlog.cli", "--version"],
        capture_output=True, text=True, cwd=tmp_path,
    )
    assert result.returncode == 0
    assert result.stdout.startswith("chanlog ")


class TestPrintError:
    """print_error routing."""

    def test_routed_through_runtime(self, capsys):
        from chanlog.lib.log_lib import StreamSink, init_runtime
        from chanlog.output import print_error
        init_runtime(sink=StreamSink(color=False))
        print_error("disk full")
        assert capsys.readouterr().err == "[ERROR] chanlog:: ERROR: disk full\n"

    def test_fallback_when_runtime_disabled(self, capsys):
        from chanlog.lib.log_lib import init_runtime
        from chanlog.output import print_error
        init_runtime(enabled=False)
        print_error("disk full")
        assert capsys.readouterr().err == "  ERROR: disk full\n"
