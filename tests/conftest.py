from __future__ import annotations

from pathlib import Path
from typing import List

import cv2
import numpy as np
import pytest


class FakeClock:
    """Manual clock; sleep() advances it instead of blocking."""

    def __init__(self, start: float = 0.0):
        self.now = start
        self.sleeps: List[float] = []

    def __call__(self) -> float:
        return self.now

    def advance(self, dt: float) -> None:
        self.now += dt

    def sleep(self, dt: float) -> None:
        self.sleeps.append(dt)
        self.now += dt


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


def write_imu_log(path: Path, t_ns: List[int], header: bool = True, sep: str = ",") -> Path:
    lines = []
    if header:
        lines.append("#timestamp [ns],w_RS_S_x,w_RS_S_y,w_RS_S_z,a_RS_S_x,a_RS_S_y,a_RS_S_z")
    for k, t in enumerate(t_ns):
        vals = [str(t), "0.01", "0.02", "0.03", "0.1", "0.2", str(9.81 + k)]
        lines.append(sep.join(vals))
    path.write_text("\n".join(lines) + "\n")
    return path


def write_times(path: Path, tokens: List[str]) -> Path:
    path.write_text("\n".join(tokens) + "\n")
    return path


def write_images(image_dir: Path, tokens: List[str], shape=(8, 12)) -> None:
    image_dir.mkdir(parents=True, exist_ok=True)
    for k, tok in enumerate(tokens):
        img = np.full(shape, k * 10, dtype=np.uint8)
        assert cv2.imwrite(str(image_dir / f"{tok}.png"), img)


@pytest.fixture
def dataset(tmp_path: Path):
    """IMU at 0.0..0.3s every 0.1s, frames at 0.05, 0.15, 0.25s."""
    imu_path = write_imu_log(tmp_path / "imu.csv", [0, 100_000_000, 200_000_000, 300_000_000])
    tokens = ["50000000", "150000000", "250000000"]
    times_path = write_times(tmp_path / "times.txt", tokens)
    image_dir = tmp_path / "images"
    write_images(image_dir, tokens)
    voc = tmp_path / "voc.txt"
    voc.write_text("voc\n")
    settings = tmp_path / "settings.yaml"
    settings.write_text("%YAML:1.0\n")
    return {
        "imu": imu_path,
        "times": times_path,
        "images": image_dir,
        "tokens": tokens,
        "voc": voc,
        "settings": settings,
        "root": tmp_path,
    }
