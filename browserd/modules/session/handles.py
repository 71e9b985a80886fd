"""
Session handle generation.

A handle is ``browser_<epoch milliseconds>_<9 random [a-z0-9] chars>``.
Callers must treat it as opaque.
"""

import random
import string
import threading
import time
from typing import Callable, Optional, Set

HANDLE_PREFIX = "browser"
SUFFIX_ALPHABET = string.ascii_lowercase + string.digits
SUFFIX_LENGTH = 9


def generate_handle(timestamp_ms: int, rng: random.Random) -> str:
    """Build a handle from a millisecond timestamp and a random suffix."""
    suffix = "".join(rng.choice(SUFFIX_ALPHABET) for _ in range(SUFFIX_LENGTH))
    return f"{HANDLE_PREFIX}_{timestamp_ms}_{suffix}"


class HandleFactory:
    """
    Issues handles that are unique for the lifetime of the factory.

    The time component never goes backwards even if the wall clock does, and
    every issued handle is remembered so a closed session's handle can never
    come back.
    """

    def __init__(
        self,
        clock: Callable[[], float] = time.time,
        rng: Optional[random.Random] = None,
    ):
        self._clock = clock
        self._rng = rng or random.SystemRandom()
        self._last_ms = 0
        self._issued: Set[str] = set()
        self._lock = threading.Lock()

    def __call__(self) -> str:
        with self._lock:
            self._last_ms = max(self._last_ms, int(self._clock() * 1000))
            handle = generate_handle(self._last_ms, self._rng)
            while handle in self._issued:
                handle = generate_handle(self._last_ms, self._rng)
            self._issued.add(handle)
            return handle

    def __contains__(self, handle: str) -> bool:
        return handle in self._issued

    @property
    def issued_count(self) -> int:
        return len(self._issued)
