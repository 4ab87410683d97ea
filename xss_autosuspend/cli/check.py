import os
import sys
from datetime import datetime, timezone

from xss_autosuspend.providers.suspend_linux import SuspendTrigger
from xss_autosuspend.providers.xscreensaver import XSCREENSAVER_COMMAND
from xss_autosuspend.store import (
    ConfigError,
    MissingHomeError,
    get_config_path,
    get_inhibit_path,
    load_settings,
)


def main() -> int:
    """Print parsed settings and inhibitor state, then exit."""

    try:
        config_path = get_config_path()
        inhibit_path = get_inhibit_path()
        settings = load_settings(config_path)
    except (ConfigError, MissingHomeError) as e:
        print(f"Config error: {e}", file=sys.stderr)
        return 1

    trigger = SuspendTrigger(inhibit_path=inhibit_path)
    mtime = trigger.inhibitor_mtime()

    print(f"config: {config_path}")
    print(f"dpmsEnabled: {settings.suspend_enabled}")
    print(f"idle threshold: {int(settings.idle_threshold.total_seconds())}s")
    print(
        f"password timeout: {int(settings.password_threshold.total_seconds())}s "
        f"(effective {int(settings.password_rearm_threshold.total_seconds())}s)"
    )
    print(f"inhibitor: {inhibit_path}")
    modified = (
        datetime.fromtimestamp(mtime, tz=timezone.utc).astimezone().isoformat(timespec="seconds")
        if mtime is not None
        else "-"
    )
    print(f"  modified: {modified}")
    print(f"  active: {trigger.inhibited()}")
    watcher_found = os.access(XSCREENSAVER_COMMAND, os.X_OK)
    print(f"watcher: {XSCREENSAVER_COMMAND} ({'found' if watcher_found else 'missing'})")

    return 0 if settings.suspend_enabled else 1
