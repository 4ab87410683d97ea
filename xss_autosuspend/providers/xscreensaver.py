from __future__ import annotations

import subprocess
from queue import Empty, Queue
from threading import Thread
from typing import IO

XSCREENSAVER_COMMAND = "/usr/bin/xscreensaver-command"


class WatcherError(RuntimeError):
    pass


class XscreensaverWatcher:
    """Forward `xscreensaver-command -watch` output lines into a queue.

    Notes:
    - The process is started once and not supervised. If it exits, the reader
      thread ends and no further lines arrive.
    - Lines are delivered in the order xscreensaver printed them.
    """

    def __init__(self, command: str = XSCREENSAVER_COMMAND):
        self._command = command
        self._queue: Queue[str] = Queue()
        self._process: subprocess.Popen[str] | None = None
        self._thread: Thread | None = None

    def start(self) -> None:
        if self._process is not None:
            return

        try:
            self._process = subprocess.Popen(
                [self._command, "-watch"],
                stdout=subprocess.PIPE,
                text=True,
            )
        except OSError as e:
            raise WatcherError(f"cannot start {self._command}: {e}") from e

        self._thread = Thread(
            target=self._run,
            args=(self._process.stdout,),
            name="xss-autosuspend-watch",
            daemon=True,
        )
        self._thread.start()

    def _run(self, stream: IO[str]) -> None:
        for line in stream:
            self._queue.put(line.rstrip("\n"))

    def get(self, timeout: float) -> str | None:
        """Wait up to `timeout` seconds for the next line."""

        try:
            return self._queue.get(timeout=timeout)
        except Empty:
            return None

    def is_alive(self) -> bool:
        return self._thread is not None and self._thread.is_alive()
