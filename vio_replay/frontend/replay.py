# vio_replay/frontend/replay.py
# Drives frames + IMU batches into the estimator at capture cadence
from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

import numpy as np

from vio_replay.core.pacing import Pacer, target_interval
from vio_replay.core.stream_sync import FrameImuSync
from vio_replay.core.telemetry import ThroughputMeter, TrackStats
from vio_replay.providers.image_index import read_image
from vio_replay.types import IEstimator, ImageReadError

log = logging.getLogger(__name__)


@dataclass
class ReplayResult:
    start_index: int
    frames_processed: int
    imu_consumed: int
    stats: TrackStats
    stopped_early: bool = False


class ReplayRunner:
    def __init__(
        self,
        estimator: IEstimator,
        sync: FrameImuSync,
        reader: Callable[[str], np.ndarray] = read_image,
        pacer: Optional[Pacer] = None,
        meter: Optional[ThroughputMeter] = None,
        clock: Callable[[], float] = time.perf_counter,
        report: Callable[[str], None] = print,
    ):
        self.estimator = estimator
        self.sync = sync
        self.reader = reader
        self.pacer = pacer if pacer is not None else Pacer()
        self.meter = meter
        self.clock = clock
        self.report = report
        self.stats = TrackStats()

    def run(self) -> ReplayResult:
        ts = self.sync.timestamps
        end = self.sync.end
        n = 0
        stopped = False

        if self.meter is None:
            self.meter = ThroughputMeter()

        while self.sync.has_next():
            if self.pacer.stopped:
                stopped = True
                log.info("stop requested, ending replay at frame %d", self.sync.frame_cursor)
                break

            # read first: an unreadable image aborts before any IMU is consumed
            fr = self.sync.frames[self.sync.frame_cursor]
            try:
                im = self.reader(str(fr.image_path))
            except FileNotFoundError as e:
                raise ImageReadError(str(fr.image_path)) from e

            batch = self.sync.next_batch()

            t1 = self.clock()
            self.estimator.process_frame(im, batch.imu, fr.t_s)
            t2 = self.clock()

            ttrack = t2 - t1
            self.stats.record(ttrack)
            n += 1

            rep = self.meter.tick()
            if rep is not None:
                self.report(str(rep))

            log.debug("frame %d t=%.6f imu=%d track=%.4fs", batch.index, fr.t_s, len(batch.imu), ttrack)

            # wait to load the next frame
            self.pacer.pace(target_interval(ts, batch.index, end), ttrack)

        self.estimator.shutdown()

        return ReplayResult(
            start_index=self.sync.start,
            frames_processed=n,
            imu_consumed=self.sync.imu_cursor,
            stats=self.stats,
            stopped_early=stopped,
        )
