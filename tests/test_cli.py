"""CLI entry points: argument handling and exit codes."""
from __future__ import annotations

import pytest

from winstep_cycle.catalog import Alignment
from winstep_cycle.geometry import Frame
from winstep_cycle.state import StateStore
from winstep_os import cli


class RecordingNotifier:
    def __init__(self) -> None:
        self.messages = []

    def notify(self, message: str) -> None:
        self.messages.append(message)


@pytest.fixture
def config_path(tmp_path):
    path = tmp_path / "winstep.yaml"
    state_dir = (tmp_path / "state").as_posix()
    path.write_text(f"state:\n  dir: '{state_dir}'\napps: [chrome.exe, Code.exe]\n", encoding="utf-8")
    return path


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


def test_parse_alignment_falls_back_with_warning(caplog) -> None:
    assert cli.parse_alignment("r") is Alignment.RIGHT
    with caplog.at_level("WARNING"):
        assert cli.parse_alignment("diagonal") is Alignment.LEFT
    assert "diagonal" in caplog.text


def test_cycle_resize_defaults_to_left(config_path, desktop, notifier) -> None:
    code = cli.main_cycle_resize(["--config", str(config_path)], desktop=desktop, notifier=notifier)
    assert code == 0
    assert desktop.frames["Code.exe"] == Frame(0, 0, 1280, 1440)
    assert notifier.messages == []


def test_cycle_resize_invalid_alignment_still_runs(config_path, desktop, notifier, tmp_path) -> None:
    code = cli.main_cycle_resize(["zz", "--config", str(config_path)], desktop=desktop, notifier=notifier)
    assert code == 0
    state = StateStore(tmp_path / "state" / "cycle-resize.state").load()
    assert state.alignment is Alignment.LEFT


def test_move_resize_usage_is_a_no_op(config_path, desktop, notifier, tmp_path) -> None:
    code = cli.main_move_resize(["10", "20", "--config", str(config_path)], desktop=desktop, notifier=notifier)
    assert code == 0
    assert notifier.messages == [cli.MOVE_RESIZE_USAGE]
    assert desktop.calls == []
    assert not (tmp_path / "state" / "move-resize.state").exists()


def test_move_resize_rejects_non_numeric(config_path, desktop, notifier) -> None:
    code = cli.main_move_resize(["1", "2", "x", "4", "--config", str(config_path)], desktop=desktop, notifier=notifier)
    assert code == 0
    assert notifier.messages == [cli.MOVE_RESIZE_USAGE]


def test_move_resize_accepts_negative_deltas(config_path, desktop, notifier) -> None:
    code = cli.main_move_resize(["-10", "5", "-100", "0", "--config", str(config_path)], desktop=desktop, notifier=notifier)
    assert code == 0
    assert desktop.frames["Code.exe"] == Frame(90, 55, 700, 600)


def test_handled_failure_notifies_and_exits_zero(config_path, desktop, notifier) -> None:
    desktop.frontmost = None
    code = cli.main_cycle_resize(["t", "--config", str(config_path)], desktop=desktop, notifier=notifier)
    assert code == 0
    assert notifier.messages == ["No frontmost window found"]


def test_unexpected_failure_exits_non_zero(config_path, desktop, notifier) -> None:
    def explode(*args, **kwargs):
        raise KeyError("boom")

    desktop.get_window_geometry = explode
    code = cli.main_cycle_resize(["--config", str(config_path)], desktop=desktop, notifier=notifier)
    assert code == 1
    assert notifier.messages == []


def test_switch_to_app(config_path, desktop, notifier) -> None:
    assert cli.main_switch_to_app(["chrome.exe", "--config", str(config_path)], desktop=desktop, notifier=notifier) == 0
    assert desktop.activated == ["chrome.exe"]


def test_switch_to_app_without_name(config_path, desktop, notifier) -> None:
    assert cli.main_switch_to_app(["--config", str(config_path)], desktop=desktop, notifier=notifier) == 0
    assert desktop.activated == []
    assert len(notifier.messages) == 1


def test_cycle_apps_uses_configured_list(config_path, desktop, notifier) -> None:
    assert cli.main_cycle_apps(["--config", str(config_path)], desktop=desktop, notifier=notifier) == 0
    assert desktop.activated == ["chrome.exe"]


def test_bad_config_exits_non_zero(tmp_path, desktop, notifier) -> None:
    path = tmp_path / "winstep.yaml"
    path.write_text("- just\n- a list\n", encoding="utf-8")
    assert cli.main_cycle_apps(["--config", str(path)], desktop=desktop, notifier=notifier) == 1


def test_cycle_resize_extra_argument_is_a_notice(config_path, desktop, notifier) -> None:
    code = cli.main_cycle_resize(["l", "extra", "--config", str(config_path)], desktop=desktop, notifier=notifier)
    assert code == 0
    assert len(notifier.messages) == 1
    assert notifier.messages[0].startswith("cycle-resize: unrecognized arguments: extra")
    assert desktop.calls == []


def test_move_resize_unknown_option_is_a_notice(config_path, desktop, notifier, tmp_path) -> None:
    code = cli.main_move_resize(["1", "2", "--bogus", "--config", str(config_path)], desktop=desktop, notifier=notifier)
    assert code == 0
    assert notifier.messages[0].startswith("move-resize: unrecognized arguments: --bogus")
    assert desktop.calls == []
    assert not (tmp_path / "state" / "move-resize.state").exists()


def test_invalid_option_value_is_a_notice(config_path, desktop, notifier) -> None:
    code = cli.main_cycle_apps(["--log-level", "LOUD", "--config", str(config_path)], desktop=desktop, notifier=notifier)
    assert code == 0
    assert notifier.messages[0].startswith("cycle-apps: argument --log-level")
    assert desktop.activated == []


@pytest.mark.parametrize("bad", ["nan", "inf", "1e999"])
def test_move_resize_rejects_non_finite_deltas(config_path, desktop, notifier, bad) -> None:
    before = dict(desktop.frames)
    code = cli.main_move_resize([bad, "0", "0", "0", "--config", str(config_path)], desktop=desktop, notifier=notifier)
    assert code == 0
    assert notifier.messages == [cli.MOVE_RESIZE_USAGE]
    assert desktop.frames == before
    assert desktop.set_calls == []


def test_move_resize_rejects_extra_deltas(config_path, desktop, notifier) -> None:
    code = cli.main_move_resize(["1", "2", "3", "4", "5", "--config", str(config_path)], desktop=desktop, notifier=notifier)
    assert code == 0
    assert notifier.messages == [cli.MOVE_RESIZE_USAGE]
    assert desktop.set_calls == []


@pytest.mark.parametrize("content", ["state:\n  reset_after_s: [1]\n", "state: [x]\n", "monitors:\n  membership_slack_px: {a: 1}\n"])
def test_wrong_typed_config_is_reported_not_raised(tmp_path, desktop, notifier, content) -> None:
    path = tmp_path / "winstep.yaml"
    path.write_text(content, encoding="utf-8")
    assert cli.main_cycle_resize(["--config", str(path)], desktop=desktop, notifier=notifier) == 1
    assert desktop.calls == []
