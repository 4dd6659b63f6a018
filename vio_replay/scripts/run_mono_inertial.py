'''
Monocular-inertial replay:
-loads the IMU log and the image timestamp file
-skips frames captured before the first IMU sample
-feeds each frame + the IMU samples before it to the estimator at capture rate
-prints fps while running and median/mean tracking time at the end
'''
from __future__ import annotations

import logging
import signal
import sys
import threading
from typing import List, Optional

from vio_replay.common.logging_setup import setup_logging
from vio_replay.config import ReplayConfig, parse_config
from vio_replay.core.pacing import Pacer
from vio_replay.core.stream_sync import FrameImuSync
from vio_replay.core.telemetry import ThroughputMeter, plot_track_times
from vio_replay.frontend.estimator import load_estimator
from vio_replay.frontend.replay import ReplayResult, ReplayRunner
from vio_replay.providers.image_index import load_image_index
from vio_replay.providers.imu_log import load_imu_log
from vio_replay.types import EmptyLogError, ImageReadError, ReplayError

log = logging.getLogger(__name__)


def run(cfg: ReplayConfig, stop_event: Optional[threading.Event] = None) -> int:
    try:
        imu = load_imu_log(cfg.imu_file, strict=cfg.strict)
    except EmptyLogError:
        print("ERROR: Failed to load imus", file=sys.stderr)
        return 1
    print(f"Imus in data: {len(imu)}")

    try:
        frames = load_image_index(cfg.image_dir, cfg.times_file)
    except EmptyLogError:
        print("ERROR: Failed to load images", file=sys.stderr)
        return 1

    n_images = len(frames) if cfg.n_images is None else min(cfg.n_images, len(frames))
    print(f"process images number: {n_images}")

    estimator = load_estimator(cfg.estimator)
    estimator.initialize(cfg.vocabulary, cfg.settings, "monocular")

    print()
    print("-------")
    print("Start processing sequence ...")
    print(f"Images in the sequence: {n_images}")
    print()

    sync = FrameImuSync(frames, imu, end=n_images)
    print(f"start imu time: {imu[0].t_s:.6f}")
    print(f"start image time: {frames[0].t_s:.6f}")
    print(f"image start: {sync.start}")

    runner = ReplayRunner(
        estimator,
        sync,
        pacer=Pacer(realtime=cfg.realtime, rate=cfg.rate, stop_event=stop_event),
        meter=ThroughputMeter(cfg.benchmark_interval),
    )
    try:
        res = runner.run()
    except ImageReadError as e:
        print(f"\n{e}", file=sys.stderr)
        return 1

    report(res)

    estimator.save_trajectory(cfg.trajectory)
    log.info("trajectory saved to %s", cfg.trajectory)

    if cfg.plot:
        print(f"Saved tracking-time plot to {plot_track_times(res.stats, cfg.plot)}")
    return 0


def report(res: ReplayResult) -> None:
    print("-------")
    print()
    if res.stopped_early:
        print(f"stopped early after {res.frames_processed} frames")
    s = res.stats.summary()
    if s is None:
        print("no frames processed")
        return
    print(f"median tracking time: {s.median:.6f}")
    print(f"mean tracking time: {s.mean:.6f}")


def main(argv: Optional[List[str]] = None) -> int:
    cfg = parse_config(argv)
    setup_logging(cfg.log_level)

    stop_event = threading.Event()
    prev = signal.signal(signal.SIGINT, lambda signum, frame: stop_event.set())
    try:
        return run(cfg, stop_event)
    except (ReplayError, FileNotFoundError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    finally:
        signal.signal(signal.SIGINT, prev)


if __name__ == "__main__":
    raise SystemExit(main())
    # python -m vio_replay.scripts.run_mono_inertial
