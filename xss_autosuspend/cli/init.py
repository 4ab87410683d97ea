from __future__ import annotations

import os
import shutil
import subprocess
import sys

from xss_autosuspend.providers.xscreensaver import XSCREENSAVER_COMMAND
from xss_autosuspend.store import (
    ConfigError,
    MissingHomeError,
    get_config_path,
    get_systemd_user_dir,
    load_settings,
)

SERVICE_NAME = "xss-autosuspend.service"

# xscreensaver-command talks to the X server; the user manager doesn't have
# these unless they are imported from the graphical session.
SESSION_ENV = ("DISPLAY", "XAUTHORITY")


def _exec_start() -> str:
    exe = shutil.which("xss-autosuspend")
    if exe:
        return f"{exe} run"
    return f"{sys.executable} -m xss_autosuspend.cli.main run"


def _render_service(*, exec_start: str) -> str:
    return (
        "[Unit]\n"
        "Description=Suspend after xscreensaver has been locked for too long\n"
        "PartOf=graphical-session.target\n"
        "After=graphical-session.target\n"
        "ConditionEnvironment=DISPLAY\n"
        "\n"
        "[Service]\n"
        "Type=simple\n"
        f"ExecStartPre={XSCREENSAVER_COMMAND} -version\n"
        f"ExecStart={exec_start}\n"
        "Restart=on-failure\n"
        "RestartSec=10\n"
        "# Exit status 1 means bad or disabled config; restarting won't help.\n"
        "RestartPreventExitStatus=1\n"
        "\n"
        "[Install]\n"
        "WantedBy=graphical-session.target\n"
    )


def _validate() -> str | None:
    """Return an error message if the daemon could not run in this session."""

    try:
        config_path = get_config_path()
        settings = load_settings(config_path)
    except (ConfigError, MissingHomeError) as e:
        return f"Config error: {e}"

    if not settings.suspend_enabled:
        return f"dpmsEnabled is not set in {config_path}; not installing"
    if not os.environ.get("DISPLAY"):
        return "DISPLAY is not set; run init from inside the X session"
    return None


def main(*, force: bool = False) -> int:
    error = _validate()
    if error:
        print(error, file=sys.stderr)
        return 1

    systemctl = shutil.which("systemctl")
    if not systemctl:
        print("systemctl not found; cannot enable systemd user service", file=sys.stderr)
        return 1

    unit_path = get_systemd_user_dir() / SERVICE_NAME
    if unit_path.exists() and not force:
        print(f"Service already exists: {unit_path} (use --force to overwrite)", file=sys.stderr)
        return 1

    unit_path.parent.mkdir(parents=True, exist_ok=True)
    unit_path.write_text(_render_service(exec_start=_exec_start()), encoding="utf-8")
    print(f"Unit written to: {unit_path}")

    imported = [name for name in SESSION_ENV if os.environ.get(name)]
    commands = [
        [systemctl, "--user", "import-environment", *imported],
        [systemctl, "--user", "daemon-reload"],
        [systemctl, "--user", "enable", "--now", SERVICE_NAME],
    ]
    for command in commands:
        try:
            subprocess.run(command, check=True)
        except subprocess.CalledProcessError as e:
            print(f"{' '.join(command[1:])} failed: {e}", file=sys.stderr)
            return 1

    print(f"Enabled {SERVICE_NAME} for graphical-session.target")
    return 0
