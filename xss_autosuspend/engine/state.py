from .types import EventKind


def classify_line(line: str) -> EventKind:
    """Classify one line of `xscreensaver-command -watch` output.

    Rules:
        1. If the line contains "LOCK" (case-sensitive) → LOCK
        2. Anything else (UNBLANK, BLANK, RUN, blank lines...) → OTHER

    OTHER is the reset signal; no other event text is interpreted.
    """
    if "LOCK" in line:
        return EventKind.LOCK
    return EventKind.OTHER
