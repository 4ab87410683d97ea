from .config import ConfigError, load_settings, parse_bool, parse_duration, parse_settings
from .paths import (
    MissingHomeError,
    get_config_path,
    get_home_dir,
    get_inhibit_path,
    get_systemd_user_dir,
)

__all__ = [
    "ConfigError",
    "load_settings",
    "parse_bool",
    "parse_duration",
    "parse_settings",
    "MissingHomeError",
    "get_config_path",
    "get_home_dir",
    "get_inhibit_path",
    "get_systemd_user_dir",
]
