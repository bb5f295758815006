import logging

from .config import EngineConfig, with_defaults
from .engine import TrackingEngine
from .detection import build_detector, RejectedTickError
from .io.sink import TracksWriter

logger = logging.getLogger(__name__)


class TrackingPipeline:
    """Drives detector -> engine -> sink at a fixed synthetic cadence."""

    def __init__(self, cfg: dict):
        self.cfg = with_defaults(cfg)
        self.detector = build_detector(self.cfg['detector'])
        self.engine = TrackingEngine(
            EngineConfig.from_dict(self.cfg['engine']),
            roi=self.cfg.get('roi') or [],
        )
        self.runtime = self.cfg['runtime']
        self.tracks_path = self.cfg['output'].get('tracks_path')
        self.detector_failures = 0
        self.rejected_ticks = 0

    def fetch(self):
        """Get one batch; a failing detector counts as zero detections."""
        try:
            return self.detector.detect()
        except Exception as e:
            self.detector_failures += 1
            logger.error(f"Detector failed, using empty batch: {e}")
            return []

    def run(self):
        max_ticks = int(self.runtime.get('max_ticks', 100))
        interval = float(self.runtime.get('tick_interval_ms', 1000))
        start = float(self.runtime.get('start_ms', 0))
        writer = TracksWriter(self.tracks_path) if self.tracks_path else None
        result = None

        try:
            for i in range(max_ticks):
                ts = start + i * interval
                dets = self.fetch()
                try:
                    result = self.engine.tick(dets, ts)
                except RejectedTickError as e:
                    self.rejected_ticks += 1
                    logger.warning(f"Tick at {ts} rejected: {e}")
                    continue

                if writer is not None:
                    writer.write(result.to_dict())
        finally:
            if writer is not None:
                writer.close()

        return result
