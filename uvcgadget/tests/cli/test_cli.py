from __future__ import annotations

import argparse

import pytest

import uvcgadget.cli.main as cli_main
from uvcgadget.app.runner import start_run
from uvcgadget.cli.args import config_from_args, parse_args, parse_intervals
from uvcgadget.configfs import MemoryTree

from conftest import FakeControllers, FakeVideoNodes


@pytest.fixture
def env(monkeypatch, context):
    """Run the CLI against one shared in-memory tree."""
    tree = MemoryTree()
    controllers = FakeControllers()

    def fake_start_run(cfg):
        return start_run(
            cfg,
            context=context,
            tree=tree,
            controllers=controllers,
            video_nodes=FakeVideoNodes("/dev/video0"),
        )

    monkeypatch.setattr(cli_main, "start_run", fake_start_run)
    monkeypatch.setattr(cli_main, "configure_logging", lambda **kw: None)
    monkeypatch.setattr("uvcgadget.app.manager.time.sleep", lambda s: None)
    return tree, controllers


def test_status_on_absent(env, capsys) -> None:
    tree, _ = env
    assert cli_main.main(["status"]) == 0
    out = capsys.readouterr().out
    assert "absent (not configured)" in out
    assert tree.journal == []


def test_start_then_status_lists_frames(env, capsys) -> None:
    assert cli_main.main(["start"]) == 0
    assert cli_main.main(["status"]) == 0

    out = capsys.readouterr().out
    assert "State:     enabled" in out
    assert "UDC:       fe980000.usb" in out
    assert "Video:     /dev/video0" in out
    assert "YUY2 (uncompressed/u):" in out
    assert "MJPEG (mjpeg/m):" in out
    assert "480p" in out and "1080p" in out
    assert "30 fps" in out


def test_add_reports_frame_and_state(env, capsys) -> None:
    cli_main.main(["start"])
    capsys.readouterr()

    assert cli_main.main(["add", "720p60", "1280", "720", "166666,333333", "mjpeg"]) == 0
    out = capsys.readouterr().out
    assert "Added 720p60 (MJPEG 1280x720 @ 60 fps)" in out
    assert "State:     enabled" in out


def test_add_before_start_fails_with_hint(env, capsys) -> None:
    assert cli_main.main(["add", "x", "640", "480", "333333", "yuyv"]) == 1
    err = capsys.readouterr().err
    assert err.startswith("ERROR: ")
    assert "Hint: Run 'uvc-gadget start' first." in err


def test_add_unknown_format_fails(env, capsys) -> None:
    cli_main.main(["start"])
    assert cli_main.main(["add", "x", "640", "480", "333333", "h264"]) == 1
    assert "ERROR:" in capsys.readouterr().err


def test_add_usage_error_exits_1(env, capsys) -> None:
    with pytest.raises(SystemExit) as ei:
        cli_main.main(["add", "x", "640"])
    assert ei.value.code == 1
    assert "usage:" in capsys.readouterr().err


def test_non_integer_width_exits_1(env) -> None:
    with pytest.raises(SystemExit) as ei:
        cli_main.main(["add", "x", "wide", "480", "333333", "yuyv"])
    assert ei.value.code == 1


def test_start_without_controller_fails(env, capsys) -> None:
    tree, controllers = env
    controllers.names = []
    assert cli_main.main(["start"]) == 1
    assert "No USB Device Controller" in capsys.readouterr().err


def test_stop_restart_and_unload(env, capsys) -> None:
    tree, _ = env
    assert cli_main.main(["start"]) == 0
    assert cli_main.main(["stop"]) == 0
    assert "State:     configured" in capsys.readouterr().out

    assert cli_main.main(["restart"]) == 0
    assert "State:     enabled" in capsys.readouterr().out

    assert cli_main.main(["unload"]) == 0
    assert "Gadget 'cam' removed" in capsys.readouterr().out
    assert tree.listdir(".") == []


def test_help_and_no_command(capsys) -> None:
    assert cli_main.main(["help"]) == 0
    assert "usage:" in capsys.readouterr().out

    assert cli_main.main([]) == 1
    assert "usage:" in capsys.readouterr().err


def test_version(capsys) -> None:
    assert cli_main.main(["--version"]) == 0
    assert capsys.readouterr().out.startswith("uvc-gadget ")


def test_registry_command_prints_derived_fields(capsys, monkeypatch) -> None:
    monkeypatch.setattr(cli_main, "configure_logging", lambda **kw: None)
    assert cli_main.main(["registry"]) == 0
    out = capsys.readouterr().out
    assert "Gadget:    uvc-camera (0x1d6b:0x0104)" in out
    assert "1080p" in out and "buffer=1036800" in out


def test_registry_with_missing_profile_fails(tmp_path, capsys, monkeypatch) -> None:
    monkeypatch.setattr(cli_main, "configure_logging", lambda **kw: None)
    assert cli_main.main(["--metadata-dir", str(tmp_path), "registry"]) == 1
    assert "ERROR: Failed to load gadget profile." in capsys.readouterr().err


def test_controllers_command(tmp_path, capsys, monkeypatch) -> None:
    monkeypatch.setattr(cli_main, "configure_logging", lambda **kw: None)
    (tmp_path / "fe980000.usb").mkdir()

    assert cli_main.main(["--udc-class-dir", str(tmp_path), "controllers"]) == 0
    assert "fe980000.usb" in capsys.readouterr().out

    assert cli_main.main(["--udc-class-dir", str(tmp_path / "none"), "controllers"]) == 0
    assert "No USB Device Controllers found." in capsys.readouterr().out


def test_global_options_reach_config() -> None:
    args = parse_args(["--udc", "b.usb", "--settle-delay", "0", "status"])
    assert args.cmd == "status"
    assert config_from_args(args).udc == "b.usb"
    assert config_from_args(args).settle_delay_s == 0.0


@pytest.mark.parametrize("raw,expected", [("333333", [333333]), ("333333, 666666", [333333, 666666])])
def test_parse_intervals(raw, expected) -> None:
    assert parse_intervals(raw) == expected


@pytest.mark.parametrize("raw", ["", ",", "30fps"])
def test_parse_intervals_rejects(raw) -> None:
    with pytest.raises(argparse.ArgumentTypeError):
        parse_intervals(raw)
