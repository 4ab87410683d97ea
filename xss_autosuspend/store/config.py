from __future__ import annotations

from datetime import timedelta
from pathlib import Path

from xss_autosuspend.engine.types import Settings
from xss_autosuspend.store.paths import MissingHomeError, get_config_path

_BOOL_LITERALS = {"true": True, "false": False}


class ConfigError(ValueError):
    pass


def parse_bool(line: str) -> bool:
    """Parse the value after the last colon as a boolean literal."""

    if ":" not in line:
        raise ConfigError(f"expected 'key: value', got {line!r}")

    value = line.rsplit(":", 1)[1].strip().lower()
    try:
        return _BOOL_LITERALS[value]
    except KeyError:
        raise ConfigError(f"not a boolean: {value!r}") from None


def _field_weight(index: int) -> int:
    # Fields counted from the right; the rightmost one weighs nothing.
    return 60 * index


def parse_duration(line: str) -> timedelta:
    """Parse an xscreensaver `H:MM:SS` style value into a duration.

    Everything after the first colon is split on colons and enumerated from
    the right. Field *i* is weighted ``60 * i`` seconds, so ``0:0:5`` is zero
    and ``2:00:00`` is 240 seconds.
    """

    if ":" not in line:
        raise ConfigError(f"expected 'key: value', got {line!r}")

    value = line.split(":", 1)[1]
    total = 0
    for index, raw in enumerate(reversed(value.split(":"))):
        field = raw.strip()
        if not (field.isascii() and field.isdigit()):
            raise ConfigError(f"not a non-negative integer: {field!r} in {line.strip()!r}")
        total += int(field) * _field_weight(index)

    try:
        return timedelta(seconds=total)
    except OverflowError as e:
        raise ConfigError(f"duration out of range in {line.strip()!r}") from e


def parse_settings(text: str) -> Settings:
    """Extract the suspend settings from xscreensaver config text.

    Keys are matched as substrings anywhere on the line, first match wins in
    the order dpmsEnabled, dpmsOff, passwdTimeout. Missing keys keep their
    zero values.
    """

    suspend_enabled = False
    idle_threshold = timedelta(0)
    password_threshold = timedelta(0)

    for line in text.splitlines():
        if "dpmsEnabled" in line:
            suspend_enabled = parse_bool(line)
        elif "dpmsOff" in line:
            idle_threshold = parse_duration(line)
        elif "passwdTimeout" in line:
            password_threshold = parse_duration(line)

    return Settings(
        suspend_enabled=suspend_enabled,
        idle_threshold=idle_threshold,
        password_threshold=password_threshold,
    )


def load_settings(path: Path | None = None) -> Settings:
    """Read and parse ~/.xscreensaver (or `path`). Read once at startup."""

    try:
        config_path = path or get_config_path()
    except MissingHomeError as e:
        raise ConfigError(str(e)) from e

    try:
        text = config_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"cannot read {config_path}: {e}") from e

    return parse_settings(text)
