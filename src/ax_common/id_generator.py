"""Time-ordered business IDs: "market-<snowflake>", "bet-<snowflake>".

The numeric part packs a millisecond timestamp with a per-millisecond
sequence, so IDs from one process sort in creation order even when two
bets land in the same millisecond.
"""

import threading
import time

_SEQUENCE_BITS = 12
_SEQUENCE_MASK = (1 << _SEQUENCE_BITS) - 1


class SnowflakeIdGenerator:
    """Thread-safe generator of increasing integer IDs (as strings).

    Layout: (milliseconds since epoch_ms) << 12 | sequence.
    """

    def __init__(self, epoch_ms: int = 1_700_000_000_000) -> None:
        self._epoch_ms = epoch_ms
        self._last_ms = -1
        self._sequence = 0
        self._lock = threading.Lock()

    def next_id(self) -> str:
        with self._lock:
            now_ms = int(time.time() * 1000)
            if now_ms <= self._last_ms:
                # same millisecond, or the clock stepped back: keep counting
                # from the last timestamp so IDs never go backwards
                now_ms = self._last_ms
                self._sequence = (self._sequence + 1) & _SEQUENCE_MASK
                if self._sequence == 0:
                    now_ms += 1
            else:
                self._sequence = 0
            self._last_ms = now_ms
            return str(((now_ms - self._epoch_ms) << _SEQUENCE_BITS) | self._sequence)


_default_generator = SnowflakeIdGenerator()


def generate_id(prefix: str | None = None) -> str:
    raw = _default_generator.next_id()
    return f"{prefix}-{raw}" if prefix else raw
