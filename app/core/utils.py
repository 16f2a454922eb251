"""Shared utilities used across the app."""
import re
import threading
import time

_UNSAFE_FILENAME_CHARS = re.compile(r"[^a-zA-Z0-9\-_.]")


def normalize_filename(name: str) -> str:
    """Replace every character outside [a-zA-Z0-9-_.] with an underscore."""
    return _UNSAFE_FILENAME_CHARS.sub("_", name)


class RowKeyGenerator:
    """
    Issue row keys derived from the current time in milliseconds.

    Keys are strictly increasing within the process: when two keys are
    requested in the same millisecond the second one is bumped by one.
    """

    def __init__(self, clock=time.time):
        self._clock = clock
        self._last = 0
        self._lock = threading.Lock()

    def next_key(self) -> str:
        with self._lock:
            now_ms = int(self._clock() * 1000)
            self._last = max(now_ms, self._last + 1)
            return str(self._last)


row_keys = RowKeyGenerator()


def new_row_key() -> str:
    return row_keys.next_key()
