# vio_replay/core/pacing.py
# Reproduces capture cadence: compute residual, then wait
from __future__ import annotations

import threading
import time
from typing import Callable, Optional, Sequence


def target_interval(timestamps: Sequence[float], i: int, end: int) -> float:
    """Gap to the next frame; the last frame reuses the gap to the previous one."""
    if i < end - 1:
        return timestamps[i + 1] - timestamps[i]
    if i > 0:
        return timestamps[i] - timestamps[i - 1]
    return 0.0


def residual(target_s: float, duration_s: float) -> float:
    # slow frames are not compensated later
    if duration_s < target_s:
        return target_s - duration_s
    return 0.0


class Pacer:
    """
    Single suspension point of the replay loop.

    rate > 1 replays faster than capture; realtime=False never idles.
    With a stop_event the wait returns early once the event is set.
    """

    def __init__(
        self,
        realtime: bool = True,
        rate: float = 1.0,
        stop_event: Optional[threading.Event] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        if rate <= 0:
            raise ValueError("rate must be > 0")
        self.realtime = realtime
        self.rate = rate
        self.stop_event = stop_event
        self._sleep = sleep

    @property
    def stopped(self) -> bool:
        return self.stop_event is not None and self.stop_event.is_set()

    def pace(self, target_s: float, duration_s: float) -> float:
        """Idle for what is left of the (rate-scaled) frame interval. Returns the idle time."""
        if not self.realtime:
            return 0.0
        rest = residual(target_s / self.rate, duration_s)
        if rest > 0:
            self.wait(rest)
        return rest

    def wait(self, seconds: float) -> None:
        if self.stop_event is not None:
            self.stop_event.wait(seconds)
        else:
            self._sleep(seconds)
