"""
Session high score shared across games in one process.
"""

import threading


def monotonic_max(current: int, candidate: int) -> int:
    return candidate if candidate > current else current


class SessionHighScore:
    """
    Best score seen since the process started.

    One instance is handed to every engine that should share it. Restarting
    a game never touches it; it only ever grows.
    """

    def __init__(self, initial: int = 0):
        if initial < 0:
            raise ValueError(f"High score cannot be negative: {initial}")
        self._value = initial
        self._lock = threading.Lock()

    @property
    def value(self) -> int:
        with self._lock:
            return self._value

    def offer(self, score: int) -> bool:
        """Record score if it beats the current best. Returns True when it did."""
        with self._lock:
            updated = monotonic_max(self._value, score)
            if updated == self._value:
                return False
            self._value = updated
            return True

    def __repr__(self):
        return f"<SessionHighScore value={self._value}>"
