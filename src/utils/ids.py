"""Timestamp-based identifiers."""

import threading
import time

_lock = threading.Lock()
_last_id = 0


def epoch_id() -> str:
    """Return the current epoch time in milliseconds as a string.

    Ids issued within the same millisecond are bumped forward so every call
    returns a distinct, increasing value.
    """
    global _last_id
    with _lock:
        candidate = int(time.time() * 1000)
        _last_id = max(candidate, _last_id + 1)
        return str(_last_id)
