from __future__ import annotations

import argparse
from dataclasses import dataclass
from typing import List, Optional

DEFAULT_TRAJECTORY = "KeyFrameTrajectory.txt"
DEFAULT_ESTIMATOR = "vio_replay.frontend.estimator:RecordingEstimator"


@dataclass
class ReplayConfig:
    vocabulary: str
    settings: str
    image_dir: str
    times_file: str
    imu_file: str
    n_images: Optional[int] = None      # frame limit, None = whole sequence
    trajectory: str = DEFAULT_TRAJECTORY
    estimator: str = DEFAULT_ESTIMATOR
    realtime: bool = True
    rate: float = 1.0
    benchmark_interval: float = 5.0     # seconds between fps reports
    strict: bool = False                # fail on malformed IMU lines
    plot: Optional[str] = None
    log_level: Optional[str] = None


def build_arg_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        "vio-replay",
        description="Replay an image sequence and IMU log into a monocular-inertial estimator at capture rate.",
    )
    ap.add_argument("vocabulary", help="path to vocabulary")
    ap.add_argument("settings", help="path to settings")
    ap.add_argument("image_dir", help="folder holding <timestamp>.png images")
    ap.add_argument("times_file", help="one image timestamp (ns) per line")
    ap.add_argument("imu_file", help="IMU log: t_ns, wx, wy, wz, ax, ay, az per line")
    ap.add_argument("n_images", nargs="?", type=int, default=None, help="process at most this many frames")
    ap.add_argument("--trajectory", default=DEFAULT_TRAJECTORY, help="where the estimator saves its trajectory")
    ap.add_argument("--estimator", default=DEFAULT_ESTIMATOR, help="estimator class as module:Class")
    ap.add_argument("--no-realtime", dest="realtime", action="store_false", help="do not wait between frames")
    ap.add_argument("--rate", type=float, default=1.0, help="replay speed factor (2.0 = twice as fast)")
    ap.add_argument("--benchmark-interval", type=float, default=5.0, help="seconds between fps reports")
    ap.add_argument("--strict", action="store_true", help="fail on malformed IMU lines instead of skipping")
    ap.add_argument("--plot", default=None, help="save a tracking-time plot to this path")
    ap.add_argument("--log-level", default=None, help="DEBUG/INFO/WARNING/ERROR (default: $LOG_LEVEL or INFO)")
    return ap


def config_from_args(args: argparse.Namespace) -> ReplayConfig:
    if args.n_images is not None and args.n_images < 0:
        raise ValueError("n_images must be >= 0")
    if args.rate <= 0:
        raise ValueError("--rate must be > 0")
    if args.benchmark_interval <= 0:
        raise ValueError("--benchmark-interval must be > 0")
    return ReplayConfig(
        vocabulary=args.vocabulary,
        settings=args.settings,
        image_dir=args.image_dir,
        times_file=args.times_file,
        imu_file=args.imu_file,
        n_images=args.n_images,
        trajectory=args.trajectory,
        estimator=args.estimator,
        realtime=args.realtime,
        rate=args.rate,
        benchmark_interval=args.benchmark_interval,
        strict=args.strict,
        plot=args.plot,
        log_level=args.log_level,
    )


def parse_config(argv: Optional[List[str]] = None) -> ReplayConfig:
    ap = build_arg_parser()
    args = ap.parse_args(argv)
    try:
        return config_from_args(args)
    except ValueError as e:
        ap.error(str(e))
