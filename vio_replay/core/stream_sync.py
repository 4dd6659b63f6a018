# vio_replay/core/stream_sync.py
# Pairs each frame with the IMU samples strictly before it
from __future__ import annotations

from typing import Iterator, List, Optional

from vio_replay.types import FrameBatch, FrameRef, ImuSample


def find_start_index(imu: List[ImuSample], frames: List[FrameRef]) -> int:
    """First frame not earlier than the first IMU sample; len(frames) if none."""
    if not imu:
        return len(frames)
    t0 = imu[0].t_s
    i = 0
    while i < len(frames) and t0 > frames[i].t_s:
        i += 1
    return i


class FrameImuSync:
    """
    Walks frames from the start index to `end`, handing out each frame with
    its causal IMU batch. Both cursors only move forward.
    """

    def __init__(self, frames: List[FrameRef], imu: List[ImuSample], end: Optional[int] = None):
        self.frames = frames
        self.imu = imu
        self.end = len(frames) if end is None else max(0, min(end, len(frames)))
        self.start = find_start_index(imu, frames)

        self._i = self.start   # frame cursor
        self._j = 0            # imu cursor

    @property
    def frame_cursor(self) -> int:
        return self._i

    @property
    def imu_cursor(self) -> int:
        return self._j

    @property
    def timestamps(self) -> List[float]:
        return [fr.t_s for fr in self.frames]

    def take_until(self, t_s: float) -> List[ImuSample]:
        batch = []
        while self._j < len(self.imu) and self.imu[self._j].t_s < t_s:
            batch.append(self.imu[self._j])
            self._j += 1
        return batch

    def has_next(self) -> bool:
        return self._i < self.end

    def next_batch(self) -> FrameBatch:
        if not self.has_next():
            raise StopIteration

        fr = self.frames[self._i]
        out = FrameBatch(index=self._i, frame=fr, imu=self.take_until(fr.t_s))
        self._i += 1
        return out

    def __iter__(self) -> Iterator[FrameBatch]:
        while self.has_next():
            yield self.next_batch()
