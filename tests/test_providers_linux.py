import io
import os
import time
from unittest.mock import MagicMock, patch

import pytest

from xss_autosuspend.providers.suspend_linux import SuspendTrigger
from xss_autosuspend.providers.xscreensaver import WatcherError, XscreensaverWatcher


def _touch(path, age_seconds: float) -> None:
    path.touch()
    stamp = time.time() - age_seconds
    os.utime(path, (stamp, stamp))


def test_inhibited_missing_marker(tmp_path):
    trigger = SuspendTrigger(inhibit_path=tmp_path / ".no_suspend")
    assert trigger.inhibitor_mtime() is None
    assert trigger.inhibited() is False


def test_inhibited_recent_marker(tmp_path):
    marker = tmp_path / ".no_suspend"
    _touch(marker, 3600)
    assert SuspendTrigger(inhibit_path=marker).inhibited() is True


def test_inhibited_expired_marker(tmp_path):
    marker = tmp_path / ".no_suspend"
    _touch(marker, 9 * 3600)
    assert SuspendTrigger(inhibit_path=marker).inhibited() is False


def test_inhibited_relative_to_given_now(tmp_path):
    marker = tmp_path / ".no_suspend"
    _touch(marker, 0)
    trigger = SuspendTrigger(inhibit_path=marker)

    assert trigger.inhibited(now=time.time() + 7 * 3600) is True
    assert trigger.inhibited(now=time.time() + 9 * 3600) is False


@patch("xss_autosuspend.providers.suspend_linux.subprocess.Popen")
def test_maybe_suspend_spawns_systemctl(mock_popen, tmp_path):
    trigger = SuspendTrigger(inhibit_path=tmp_path / ".no_suspend")

    assert trigger.maybe_suspend() is True
    mock_popen.assert_called_once_with(["/usr/bin/systemctl", "suspend"])
    mock_popen.return_value.wait.assert_not_called()


@patch("xss_autosuspend.providers.suspend_linux.subprocess.Popen")
def test_maybe_suspend_inhibited(mock_popen, tmp_path):
    marker = tmp_path / ".no_suspend"
    _touch(marker, 60)

    assert SuspendTrigger(inhibit_path=marker).maybe_suspend() is False
    mock_popen.assert_not_called()


@patch("xss_autosuspend.providers.suspend_linux.subprocess.Popen")
def test_maybe_suspend_spawn_failure_is_reported(mock_popen, tmp_path, capsys):
    mock_popen.side_effect = FileNotFoundError("systemctl")
    trigger = SuspendTrigger(inhibit_path=tmp_path / ".no_suspend")

    assert trigger.maybe_suspend() is False
    assert "Failed to run /usr/bin/systemctl suspend" in capsys.readouterr().err


@patch("xss_autosuspend.providers.xscreensaver.subprocess.Popen")
def test_watcher_forwards_lines_in_order(mock_popen):
    process = MagicMock()
    process.stdout = io.StringIO("LOCK Mon Oct 19\nUNBLANK Mon Oct 19\nRUN 3\n")
    mock_popen.return_value = process

    watcher = XscreensaverWatcher()
    watcher.start()
    watcher._thread.join(timeout=2.0)

    args, kwargs = mock_popen.call_args
    assert args[0] == ["/usr/bin/xscreensaver-command", "-watch"]
    assert kwargs["text"] is True

    assert watcher.get(timeout=0.1) == "LOCK Mon Oct 19"
    assert watcher.get(timeout=0.1) == "UNBLANK Mon Oct 19"
    assert watcher.get(timeout=0.1) == "RUN 3"
    assert watcher.get(timeout=0.01) is None
    assert watcher.is_alive() is False


@patch("xss_autosuspend.providers.xscreensaver.subprocess.Popen")
def test_watcher_start_is_idempotent(mock_popen):
    process = MagicMock()
    process.stdout = io.StringIO("")
    mock_popen.return_value = process

    watcher = XscreensaverWatcher()
    watcher.start()
    watcher.start()
    assert mock_popen.call_count == 1


@patch("xss_autosuspend.providers.xscreensaver.subprocess.Popen")
def test_watcher_start_failure(mock_popen):
    mock_popen.side_effect = FileNotFoundError("xscreensaver-command")

    with pytest.raises(WatcherError):
        XscreensaverWatcher().start()


def test_inhibited_window_uses_epoch_seconds(tmp_path):
    marker = tmp_path / ".no_suspend"
    _touch(marker, 0)
    trigger = SuspendTrigger(inhibit_path=marker)
    modified = trigger.inhibitor_mtime()

    assert trigger.inhibited(now=modified + 8 * 3600) is True
    assert trigger.inhibited(now=modified + 8 * 3600 + 1) is False
