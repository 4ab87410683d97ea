from dataclasses import dataclass
from datetime import timedelta
from enum import Enum
from typing import Final


class EventKind(Enum):
    LOCK = "lock"
    OTHER = "other"


class Action(Enum):
    NONE = "none"
    SUSPEND_IDLE = "suspend_idle"
    SUSPEND_PASSWORD = "suspend_password"
    REARM = "rearm"


DEFAULT_POLL_SECONDS: Final[float] = 5.0
PASSWORD_TIMEOUT_MULTIPLIER: Final[int] = 3
INHIBIT_WINDOW: Final[timedelta] = timedelta(hours=8)


@dataclass(frozen=True)
class Settings:
    suspend_enabled: bool = False
    idle_threshold: timedelta = timedelta(0)
    password_threshold: timedelta = timedelta(0)

    @property
    def password_rearm_threshold(self) -> timedelta:
        return self.password_threshold * PASSWORD_TIMEOUT_MULTIPLIER


@dataclass(frozen=True)
class TimerState:
    """Timer state owned by the control loop.

    lock_timer is a monotonic timestamp (seconds) set on a lock event.
    suspended marks that a suspend already fired in the current lock session.
    """

    lock_timer: float | None = None
    suspended: bool = False
