from __future__ import annotations

import subprocess
import sys
import time
from pathlib import Path

from xss_autosuspend.engine.types import INHIBIT_WINDOW

SYSTEMCTL_COMMAND = "/usr/bin/systemctl"


class SuspendTrigger:
    """Suspend the machine unless the inhibitor marker is fresh.

    The marker is a plain file; its mtime counts, not its contents. The suspend
    command is spawned and never waited on or retried.
    """

    def __init__(self, *, inhibit_path: Path, command: str = SYSTEMCTL_COMMAND):
        self.inhibit_path = inhibit_path
        self._command = command

    def inhibitor_mtime(self) -> float | None:
        """Marker mtime as epoch seconds, or None if it can't be read."""

        try:
            return self.inhibit_path.stat().st_mtime
        except OSError:
            return None

    def inhibited(self, now: float | None = None) -> bool:
        modified = self.inhibitor_mtime()
        if modified is None:
            return False
        if now is None:
            now = time.time()
        return modified >= now - INHIBIT_WINDOW.total_seconds()

    def maybe_suspend(self) -> bool:
        """Return True if the suspend command was spawned."""

        if self.inhibited():
            print(f"Suspend inhibited by {self.inhibit_path}", flush=True)
            return False

        try:
            subprocess.Popen([self._command, "suspend"])
        except OSError as e:
            print(f"Failed to run {self._command} suspend: {e}", file=sys.stderr, flush=True)
            return False

        return True
