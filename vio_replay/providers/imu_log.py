# vio_replay/providers/imu_log.py
# Loads a text IMU log: t_ns, wx, wy, wz, ax, ay, az per line
from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import List, Optional

import numpy as np

from vio_replay.types import EmptyLogError, ImuSample, MalformedLineError

log = logging.getLogger(__name__)

_SEP = re.compile(r"[,\s]+")
N_FIELDS = 7


def parse_imu_line(line: str) -> Optional[ImuSample]:
    """
    Returns None for lines that are not samples (header/comment/empty).
    Raises ValueError for a sample line that does not carry 7 numeric fields.
    """
    if not line or not ("0" <= line[0] <= "9"):
        return None

    tokens = [tok for tok in _SEP.split(line.strip()) if tok][:N_FIELDS]
    if len(tokens) < N_FIELDS:
        raise ValueError(f"expected {N_FIELDS} fields, got {len(tokens)}")
    vals = [float(tok) for tok in tokens]

    t_s = vals[0] * 1e-9
    gyro = np.array(vals[1:4], dtype=np.float64)
    accel = np.array(vals[4:7], dtype=np.float64)
    return ImuSample(t_s=t_s, gyro=gyro, accel=accel)


def load_imu_log(path: str | Path, strict: bool = False) -> List[ImuSample]:
    path = Path(path)
    out: List[ImuSample] = []
    skipped = 0
    with path.open("r", encoding="utf-8", errors="replace") as f:
        for lineno, raw in enumerate(f, start=1):
            line = raw.rstrip("\r\n")
            try:
                s = parse_imu_line(line)
            except ValueError as e:
                if strict:
                    raise MalformedLineError(f"{path}:{lineno}: {e}") from e
                skipped += 1
                continue
            if s is not None:
                out.append(s)

    if skipped:
        log.debug("%s: skipped %d malformed lines", path, skipped)
    if not out:
        raise EmptyLogError(f"No IMU samples in {path}")
    return out
