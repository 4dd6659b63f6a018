# vio_replay/providers/image_index.py
# Loads the image timestamp file and resolves <image_dir>/<token>.png
from __future__ import annotations

import errno
from pathlib import Path
from typing import List, Tuple

import cv2
import numpy as np

from vio_replay.types import EmptyLogError, FrameRef, ReplayError


def load_image_index(image_dir: str | Path, times_path: str | Path) -> List[FrameRef]:
    image_dir = Path(image_dir)
    times_path = Path(times_path)
    out: List[FrameRef] = []
    # surrogateescape keeps undecodable bytes in the stem round-trippable
    with times_path.open("r", encoding="utf-8", errors="surrogateescape") as f:
        for lineno, raw in enumerate(f, start=1):
            token = raw.strip()
            if not token or token.startswith("#"):
                continue
            try:
                t_ns = float(token)
            except ValueError as e:
                raise ReplayError(f"{times_path}:{lineno}: bad timestamp {token!r}") from e
            # keep the literal token as file stem (zero padding matters)
            out.append(FrameRef(t_s=t_ns / 1e9, image_path=image_dir / f"{token}.png", stem=token))

    if not out:
        raise EmptyLogError(f"No image timestamps in {times_path}")
    return out


def split_frames(frames: List[FrameRef]) -> Tuple[List[Path], List[float]]:
    return [fr.image_path for fr in frames], [fr.t_s for fr in frames]


def read_image(path: str | Path) -> np.ndarray:
    img = cv2.imread(str(path), cv2.IMREAD_UNCHANGED)
    if img is None or img.size == 0:
        raise FileNotFoundError(errno.ENOENT, "Failed to read image", str(path))
    return img
