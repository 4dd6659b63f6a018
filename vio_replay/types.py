from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Literal, Optional, Protocol

import numpy as np


# -----------------------------
# Core sensor samples
# -----------------------------

@dataclass(frozen=True)
class ImuSample:
    t_s: float
    gyro: np.ndarray   # shape (3,), rad/s
    accel: np.ndarray  # shape (3,), m/s^2


@dataclass(frozen=True)
class FrameRef:
    t_s: float
    image_path: Path
    stem: str  # literal token text from the times file


@dataclass(frozen=True)
class FrameBatch:
    """One frame and the IMU samples that strictly precede it."""
    index: int
    frame: FrameRef
    imu: List[ImuSample]


# -----------------------------
# Estimator interface (engine-agnostic)
# -----------------------------

SensorMode = Literal["monocular"]


class IEstimator(Protocol):
    def initialize(self, vocabulary_path: str, settings_path: str, mode: SensorMode) -> None: ...
    def process_frame(self, image: np.ndarray, imu: List[ImuSample], t_s: float) -> Any: ...
    def shutdown(self) -> None: ...
    def save_trajectory(self, path: str) -> None: ...


# -----------------------------
# Errors
# -----------------------------

class ReplayError(RuntimeError):
    pass


class EmptyLogError(ReplayError):
    pass


class MalformedLineError(ReplayError):
    pass


class ImageReadError(ReplayError):
    def __init__(self, path: str):
        super().__init__(f"Failed to load image at: {path}")
        self.path = path


class TimestampError(ReplayError):
    pass


def assert_non_decreasing(prev_t: Optional[float], new_t: float, name: str) -> float:
    if prev_t is not None and new_t < prev_t:
        raise TimestampError(f"{name}: timestamps decreased ({new_t} < {prev_t})")
    return new_t
