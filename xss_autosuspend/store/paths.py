from __future__ import annotations

import os
from pathlib import Path

from platformdirs import user_config_dir


class MissingHomeError(RuntimeError):
    pass


def get_home_dir() -> Path:
    home = os.environ.get("HOME")
    if not home:
        raise MissingHomeError("HOME environment variable is not set")
    return Path(home)


def get_config_path() -> Path:
    return get_home_dir() / ".xscreensaver"


def get_inhibit_path() -> Path:
    # `touch ~/.no_suspend` blocks suspend for INHIBIT_WINDOW.
    return get_home_dir() / ".no_suspend"


def get_systemd_user_dir() -> Path:
    return Path(user_config_dir("systemd")) / "user"
