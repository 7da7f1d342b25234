"""
Generated usernames for accounts created without one.

Names have the form ``user_<epoch-ms>``. The millisecond value is forced
to increase strictly within the process, so two calls in the same
millisecond still get different names.
"""

import re
import threading
import time

GENERATED_USERNAME_RE = re.compile(r"^user_\d+$")

_lock = threading.Lock()
_last_ms = 0


def generate_username() -> str:
    global _last_ms
    with _lock:
        now_ms = time.time_ns() // 1_000_000
        _last_ms = max(now_ms, _last_ms + 1)
        return f"user_{_last_ms}"
