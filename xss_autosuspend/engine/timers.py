from .state import classify_line
from .types import Action, EventKind, Settings, TimerState


def apply_event(state: TimerState, kind: EventKind, now: float) -> TimerState:
    """Update timers for a freshly received event.

    A lock event re-arms the lock timer but keeps the suspended marker, so a
    second lock without an unlock in between uses the password timeout.
    """
    if kind == EventKind.LOCK:
        return TimerState(lock_timer=now, suspended=state.suspended)
    return TimerState()


def evaluate(state: TimerState, settings: Settings, now: float) -> tuple[TimerState, Action]:
    """Evaluate timers against the thresholds.

    Rules:
        1. Locked, not yet suspended, idle threshold exceeded → SUSPEND_IDLE
        2. Locked, already suspended, 3x password timeout exceeded → SUSPEND_PASSWORD
        3. Suspended but no lock timer (woken without unlocking) → REARM
        4. Otherwise → NONE

    Comparisons are strict: an elapsed time equal to the threshold does not fire.

    Args:
        state: Current timer state.
        settings: Thresholds loaded at startup.
        now: Current monotonic time in seconds.

    Returns:
        (next state, action taken).
    """
    if state.lock_timer is not None:
        elapsed = now - state.lock_timer

        if not state.suspended:
            if elapsed > settings.idle_threshold.total_seconds():
                return TimerState(lock_timer=None, suspended=True), Action.SUSPEND_IDLE
            return state, Action.NONE

        if elapsed > settings.password_rearm_threshold.total_seconds():
            return TimerState(lock_timer=None, suspended=True), Action.SUSPEND_PASSWORD
        return state, Action.NONE

    if state.suspended:
        return TimerState(lock_timer=now, suspended=True), Action.REARM

    return state, Action.NONE


def step(
    state: TimerState, line: str | None, settings: Settings, now: float
) -> tuple[TimerState, Action]:
    """One loop iteration: classify the event (if any), then evaluate."""
    if line is not None:
        state = apply_event(state, classify_line(line), now)
    return evaluate(state, settings, now)
