'''
-loads the IMU log and the image timestamp file
-checks both streams are monotonic
-prints counts + estimated rates
-prints dt stats for IMU and frames separately
-prints the replay start frame and IMU-per-frame batch sizes
'''

from __future__ import annotations

import argparse
from typing import List, Optional

import numpy as np

from vio_replay.core.stream_sync import FrameImuSync
from vio_replay.providers.image_index import load_image_index
from vio_replay.providers.imu_log import load_imu_log
from vio_replay.types import assert_non_decreasing


def summarize_dts(name: str, ts: List[float]) -> None:
    if len(ts) < 2:
        print(f"{name}: no dt samples")
        return
    arr_s = np.diff(np.asarray(ts, dtype=np.float64))
    print(
        f"{name}: n={len(arr_s)}  "
        f"mean={arr_s.mean():.6f}s  std={arr_s.std():.6f}s  "
        f"min={arr_s.min():.6f}s  p50={np.percentile(arr_s, 50):.6f}s  "
        f"p95={np.percentile(arr_s, 95):.6f}s  max={arr_s.max():.6f}s"
    )


def check_monotonic(name: str, ts: List[float]) -> None:
    last_t: Optional[float] = None
    for t in ts:
        last_t = assert_non_decreasing(last_t, t, name)


def main(argv: Optional[List[str]] = None) -> None:
    ap = argparse.ArgumentParser()
    ap.add_argument("image_dir", help="folder holding <timestamp>.png images")
    ap.add_argument("times_file", help="image timestamp file")
    ap.add_argument("imu_file", help="IMU log")
    ap.add_argument("--strict", action="store_true", help="fail on malformed IMU lines")
    args = ap.parse_args(argv)

    imu = load_imu_log(args.imu_file, strict=args.strict)
    frames = load_image_index(args.image_dir, args.times_file)

    imu_ts = [s.t_s for s in imu]
    img_ts = [fr.t_s for fr in frames]
    check_monotonic("sanity/imu", imu_ts)
    check_monotonic("sanity/images", img_ts)

    print("\n=== replay sanity ===")
    print(f"Counts: IMU={len(imu)}, Images={len(frames)}")
    for name, ts in (("IMU", imu_ts), ("Images", img_ts)):
        span_s = ts[-1] - ts[0]
        if span_s > 0:
            print(f"{name}: span={span_s:.3f}s  rate={len(ts) / span_s:.2f} Hz")

    print()
    summarize_dts("IMU dt", imu_ts)
    summarize_dts("Image dt", img_ts)

    sync = FrameImuSync(frames, imu)
    sizes = np.asarray([len(b.imu) for b in sync], dtype=np.int64)
    print()
    print(f"image start: {sync.start} (first image t={img_ts[0]:.6f}s, first IMU t={imu_ts[0]:.6f}s)")
    if sizes.size:
        print(
            f"IMU per frame: mean={sizes.mean():.2f}  min={sizes.min()}  max={sizes.max()}  "
            f"empty={int((sizes == 0).sum())}"
        )
        print(f"IMU consumed: {sync.imu_cursor}/{len(imu)}")
    if sync.start == len(frames):
        print("WARNING: IMU starts after the last image, nothing to replay.")

    print("\nOK: streams are monotonic and stats printed.")


if __name__ == "__main__":
    main()
