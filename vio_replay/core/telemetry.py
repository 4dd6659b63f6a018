# vio_replay/core/telemetry.py
# Throughput reports during replay and tracking-time stats after it
from __future__ import annotations

import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional

import matplotlib.pyplot as plt
import numpy as np


@dataclass(frozen=True)
class ThroughputReport:
    frames: int
    interval_s: float
    fps: float

    def __str__(self) -> str:
        return f"{self.frames} frames in {self.interval_s:g} seconds: {self.fps:f} fps"


class ThroughputMeter:
    def __init__(self, interval_s: float = 5.0, clock: Callable[[], float] = time.monotonic):
        if interval_s <= 0:
            raise ValueError("interval_s must be > 0")
        self.interval_s = interval_s
        self._clock = clock
        self._frames = 0
        self._window_start = clock()

    def tick(self) -> Optional[ThroughputReport]:
        self._frames += 1
        now = self._clock()
        if now - self._window_start <= self.interval_s:
            return None

        rep = ThroughputReport(self._frames, self.interval_s, self._frames / self.interval_s)
        self._frames = 0
        self._window_start = now
        return rep


@dataclass(frozen=True)
class TrackSummary:
    median: float
    mean: float
    count: int


class TrackStats:
    """Per-frame processing durations (seconds), kept in playback order."""

    def __init__(self) -> None:
        self.durations: List[float] = []

    def record(self, duration_s: float) -> None:
        self.durations.append(float(duration_s))

    def __len__(self) -> int:
        return len(self.durations)

    def summary(self) -> Optional[TrackSummary]:
        if not self.durations:
            return None
        arr = np.sort(np.asarray(self.durations, dtype=np.float64))
        return TrackSummary(
            median=float(arr[len(arr) // 2]),
            mean=float(arr.sum() / len(arr)),
            count=len(arr),
        )


def plot_track_times(stats: TrackStats, path: str | Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    d_ms = np.asarray(stats.durations, dtype=np.float64) * 1e3
    fig = plt.figure()
    plt.plot(np.arange(len(d_ms)), d_ms)
    s = stats.summary()
    if s is not None:
        plt.axhline(s.median * 1e3, color="tab:orange", linestyle="--", label="median")
        plt.legend()
    plt.title("Tracking time per frame")
    plt.xlabel("frame")
    plt.ylabel("time (ms)")
    plt.savefig(path, dpi=200, bbox_inches="tight")
    plt.close(fig)
    return path
