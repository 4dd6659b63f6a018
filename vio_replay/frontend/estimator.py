# vio_replay/frontend/estimator.py
# Estimator plumbing: dotted-path loading and a recording stand-in engine
from __future__ import annotations

import importlib
from pathlib import Path
from typing import List, Optional, Tuple

import numpy as np

from vio_replay.types import IEstimator, ImuSample, SensorMode


def load_estimator(spec: str) -> IEstimator:
    """Instantiate an estimator from "package.module:ClassName"."""
    mod_name, sep, attr = spec.partition(":")
    if not sep or not mod_name or not attr:
        raise ValueError(f"estimator must look like 'module:Class', got {spec!r}")
    cls = getattr(importlib.import_module(mod_name), attr)
    return cls()


class RecordingEstimator:
    """
    Stand-in engine for dry runs: keeps one row per delivered frame
    (t_s, n_imu, height, width) and writes them out on save_trajectory.
    """

    def __init__(self) -> None:
        self.mode: Optional[SensorMode] = None
        self.rows: List[Tuple[float, int, int, int]] = []
        self.running = False

    def initialize(self, vocabulary_path: str, settings_path: str, mode: SensorMode) -> None:
        for p in (vocabulary_path, settings_path):
            if not Path(p).exists():
                raise FileNotFoundError(p)
        self.mode = mode
        self.running = True

    def process_frame(self, image: np.ndarray, imu: List[ImuSample], t_s: float) -> int:
        if not self.running:
            raise RuntimeError("estimator is not running")
        h, w = image.shape[:2]
        self.rows.append((t_s, len(imu), h, w))
        return len(self.rows)

    def shutdown(self) -> None:
        self.running = False

    def save_trajectory(self, path: str) -> None:
        arr = np.array(self.rows, dtype=np.float64).reshape(-1, 4)
        np.savetxt(path, arr, fmt=["%.9f", "%d", "%d", "%d"], header="t_s n_imu height width")
