"""
MessageId Value Object - millisecond-based, strictly increasing message ids.
"""

import threading
import time
from dataclasses import dataclass


@dataclass(frozen=True)
class MessageId:
    value: int

    def __post_init__(self):
        if self.value <= 0:
            raise ValueError("Message ID must be positive")

    def __str__(self) -> str:
        return str(self.value)


class MessageIdSequence:
    """
    Issues message ids derived from the wall clock in milliseconds.

    Two messages created within the same millisecond (or after the clock
    steps backwards) still get distinct, increasing ids.
    """

    def __init__(self, clock=time.time):
        self._clock = clock
        self._last = 0
        self._lock = threading.Lock()

    def next_id(self) -> MessageId:
        with self._lock:
            now_ms = int(self._clock() * 1000)
            self._last = max(now_ms, self._last + 1)
            return MessageId(self._last)
