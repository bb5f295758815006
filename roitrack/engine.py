"""
Tracking engine facade.

One tick runs association against the current tracks, applies the result
to the track store, evaluates ROI crossings between the old and new
snapshots and accumulates the counters. Ticks must be serialized by the
caller and arrive with non-decreasing timestamps.
"""

import logging
from enum import Enum
from typing import Any, Dict, Iterable, Optional, Sequence, Tuple
from dataclasses import dataclass, field

from .config import EngineConfig
from .geometry import Point, as_polygon
from .detection.types import RejectedTickError, is_finite_number, parse_detections
from .tracking import Track, TrackStore, IdAllocator, build_associator
from .analytics import RegionOfInterest, ZoneCounters, ZoneEvent, evaluate

logger = logging.getLogger(__name__)


class EngineState(Enum):
    IDLE = "idle"
    ACTIVE = "active"


@dataclass(frozen=True)
class TickResult:
    """Outcome of one tick. Counts in entered/exited are cumulative."""
    tracks: Tuple[Track, ...]
    entered: int
    exited: int
    entered_delta: int = 0
    exited_delta: int = 0
    events: Tuple[ZoneEvent, ...] = field(default_factory=tuple)
    timestamp: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'timestamp': self.timestamp,
            'tracks': [t.to_dict() for t in self.tracks],
            'entered': self.entered,
            'exited': self.exited,
            'entered_delta': self.entered_delta,
            'exited_delta': self.exited_delta,
            'events': [e.to_dict() for e in self.events],
        }


class TrackingEngine:
    """
    Maintains tracks and ROI counters across detection batches.
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        roi: Optional[Iterable] = None,
        allocator: Optional[IdAllocator] = None,
    ):
        """
        Initialize the engine.

        Args:
            config: Tunables; defaults when omitted
            roi: Default ROI polygon used when tick() gets none
            allocator: Id source; the process-wide one when None
        """
        self.config = config or EngineConfig()
        self.associator = build_associator({
            'name': self.config.association,
            'match_threshold': self.config.match_threshold,
        })
        self.store = TrackStore(
            trajectory_capacity=self.config.trajectory_capacity,
            max_dropout_ticks=self.config.max_dropout_ticks,
            frame_unit_ms=self.config.frame_unit_ms,
            allocator=allocator,
        )
        self.roi = RegionOfInterest()
        self._counters = ZoneCounters()
        self.tick_count = 0

        if roi is not None:
            self.set_roi(roi)

    @property
    def tracks(self) -> Tuple[Track, ...]:
        return self.store.tracks

    @property
    def counters(self) -> ZoneCounters:
        return self._counters.copy()

    @property
    def state(self) -> EngineState:
        return EngineState.ACTIVE if self.store.tracks else EngineState.IDLE

    def set_roi(self, points: Iterable):
        """
        Replace the default ROI.

        Raises:
            ValueError: if a vertex is not a finite (x, y) pair
        """
        self.roi = RegionOfInterest.from_points(points)
        logger.info(f"ROI set with {len(self.roi.polygon)} points (defined={self.roi.is_defined})")

    def reset(self):
        """Clear tracks and counters. Track ids keep increasing."""
        self.store.clear()
        self._counters = ZoneCounters()
        self.tick_count = 0
        logger.info("Engine reset")

    def tick(
        self,
        detections: Optional[Iterable[Any]],
        timestamp: float,
        polygon: Optional[Iterable] = None
    ) -> TickResult:
        """
        Advance the engine by one detection batch.

        Args:
            detections: Detection objects or {label, box_2d, confidence?} dicts
            timestamp: Tick time in milliseconds
            polygon: ROI for this tick; the engine's ROI when None

        Returns:
            TickResult with the new snapshot and cumulative counters

        Raises:
            RejectedTickError: if the input shape is invalid; state is unchanged
        """
        if not is_finite_number(timestamp):
            raise RejectedTickError(f"Timestamp must be a finite number, got {timestamp!r}")

        roi_polygon = self._resolve_polygon(polygon)
        dets = parse_detections(detections, self.config.min_confidence)

        old_tracks = self.store.tracks
        match = self.associator.associate(old_tracks, dets)
        new_tracks = self.store.apply(old_tracks, dets, match, timestamp)
        delta = evaluate(old_tracks, new_tracks, roi_polygon)
        self._counters.record(delta)
        self.store.replace(new_tracks)
        self.tick_count += 1

        if delta.entered or delta.exited:
            logger.debug(f"Tick {self.tick_count}: +{delta.entered} entered, +{delta.exited} exited")

        return TickResult(
            tracks=new_tracks,
            entered=self._counters.entered,
            exited=self._counters.exited,
            entered_delta=delta.entered,
            exited_delta=delta.exited,
            events=delta.events,
            timestamp=float(timestamp),
        )

    def _resolve_polygon(self, polygon: Optional[Iterable]) -> Sequence[Point]:
        if polygon is None:
            return self.roi.polygon
        if isinstance(polygon, RegionOfInterest):
            return polygon.polygon
        try:
            return as_polygon(polygon)
        except (TypeError, ValueError) as e:
            raise RejectedTickError(f"Invalid polygon: {e}") from e
