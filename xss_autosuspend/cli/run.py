import sys
import time
from typing import Callable, Protocol

from xss_autosuspend.engine.timers import step
from xss_autosuspend.engine.types import DEFAULT_POLL_SECONDS, Action, Settings, TimerState
from xss_autosuspend.providers.suspend_linux import SuspendTrigger
from xss_autosuspend.providers.xscreensaver import WatcherError, XscreensaverWatcher
from xss_autosuspend.store import (
    ConfigError,
    MissingHomeError,
    get_config_path,
    get_inhibit_path,
    load_settings,
)


class LineSource(Protocol):
    def get(self, timeout: float) -> str | None: ...

    def is_alive(self) -> bool: ...


class Trigger(Protocol):
    def maybe_suspend(self) -> bool: ...


_MESSAGES = {
    Action.SUSPEND_IDLE: "Locked, idle threshold elapsed",
    Action.SUSPEND_PASSWORD: "Locked, password timeout elapsed",
    Action.REARM: "Woken up but not unlocked",
}


class SuspendLoop:
    """Single owner of the timer state."""

    def __init__(
        self,
        *,
        settings: Settings,
        source: LineSource,
        trigger: Trigger,
        poll_seconds: float = DEFAULT_POLL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.settings = settings
        self.state = TimerState()
        self._source = source
        self._trigger = trigger
        self._poll_seconds = poll_seconds
        self._clock = clock
        self._source_exit_reported = False

    def tick(self) -> Action:
        line = self._source.get(timeout=self._poll_seconds)
        if line is None and not self._source_exit_reported and not self._source.is_alive():
            # Not restarted; the loop keeps polling without events.
            print("Event source exited; no further lock events", file=sys.stderr, flush=True)
            self._source_exit_reported = True

        self.state, action = step(self.state, line, self.settings, self._clock())

        message = _MESSAGES.get(action)
        if message:
            print(message, flush=True)

        if action in (Action.SUSPEND_IDLE, Action.SUSPEND_PASSWORD):
            self._trigger.maybe_suspend()

        return action

    def run_forever(self) -> None:
        while True:
            self.tick()


def _fail(message: str) -> int:
    print(message, file=sys.stderr)
    return 1


def main(*, poll_seconds: float = DEFAULT_POLL_SECONDS) -> int:
    try:
        config_path = get_config_path()
        inhibit_path = get_inhibit_path()
        settings = load_settings(config_path)
    except (ConfigError, MissingHomeError) as e:
        return _fail(f"Config error: {e}")

    if not settings.suspend_enabled:
        return _fail(f"dpmsEnabled is not set in {config_path}; nothing to do")

    watcher = XscreensaverWatcher()
    try:
        watcher.start()
    except WatcherError as e:
        return _fail(str(e))

    loop = SuspendLoop(
        settings=settings,
        source=watcher,
        trigger=SuspendTrigger(inhibit_path=inhibit_path),
        poll_seconds=poll_seconds,
    )

    print("Starting xss-autosuspend (Ctrl+C to stop)")
    print(f"Config: {config_path}")
    print(
        f"Idle threshold: {int(settings.idle_threshold.total_seconds())}s, "
        f"password timeout: {int(settings.password_rearm_threshold.total_seconds())}s, "
        f"poll: {poll_seconds}s",
        flush=True,
    )

    try:
        loop.run_forever()
    except KeyboardInterrupt:
        print("\nStopping...")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
