"""
Track store: the only place tracks are created, updated or retired.
Consumers only ever see immutable tuples of Track.
"""

import logging
from typing import List, Optional, Sequence, Tuple
from dataclasses import replace

from ..geometry import centroid
from ..detection.types import Detection
from .track import Track, IdAllocator, DEFAULT_ALLOCATOR, color_for_id
from .association import MatchResult

logger = logging.getLogger(__name__)


class TrackStore:
    """
    Owns the current track set and applies association results to it.
    """

    def __init__(
        self,
        trajectory_capacity: int = 30,
        max_dropout_ticks: int = 5,
        frame_unit_ms: float = 1000.0,
        allocator: Optional[IdAllocator] = None,
    ):
        """
        Initialize the store.

        Args:
            trajectory_capacity: Max trajectory points kept per track
            max_dropout_ticks: Unmatched ticks tolerated before retirement
            frame_unit_ms: Milliseconds per tick, scales the dropout window
            allocator: Id source; the process-wide DEFAULT_ALLOCATOR when None
        """
        self.trajectory_capacity = trajectory_capacity
        self.max_dropout_ticks = max_dropout_ticks
        self.frame_unit_ms = frame_unit_ms
        self.allocator = allocator if allocator is not None else DEFAULT_ALLOCATOR
        self._tracks: Tuple[Track, ...] = ()

    @property
    def tracks(self) -> Tuple[Track, ...]:
        return self._tracks

    @property
    def dropout_window_ms(self) -> float:
        return self.max_dropout_ticks * self.frame_unit_ms

    def replace(self, tracks: Sequence[Track]):
        """Install a new authoritative track set."""
        self._tracks = tuple(tracks)

    def clear(self):
        """Drop all tracks. The id allocator keeps counting."""
        self._tracks = ()

    def apply(
        self,
        current_tracks: Sequence[Track],
        detections: Sequence[Detection],
        match: MatchResult,
        timestamp: float
    ) -> Tuple[Track, ...]:
        """
        Build the next track set from an association result.

        Matched tracks take the detection's box and extend their trajectory,
        unmatched tracks survive while inside the dropout window, and each
        unmatched detection starts a new track. Output keeps surviving tracks
        in their existing order followed by new tracks in detection order.

        Args:
            current_tracks: Tracks the match was computed against
            detections: Detections the match was computed against
            match: Association result by index
            timestamp: Tick time in milliseconds

        Returns:
            New immutable track set
        """
        assigned = match.as_dict()
        updated: List[Track] = []

        for i, track in enumerate(current_tracks):
            j = assigned.get(i)
            if j is not None:
                updated.append(self._update(track, detections[j], timestamp))
            elif timestamp - track.last_seen < self.dropout_window_ms:
                updated.append(track)
            else:
                logger.debug(f"Retiring track {track.id} ({track.label}), last seen {track.last_seen}")

        for j in match.unmatched_detections:
            updated.append(self._create(detections[j], timestamp))

        return tuple(updated)

    def _update(self, track: Track, det: Detection, timestamp: float) -> Track:
        trajectory = track.trajectory + (centroid(det.box),)
        if len(trajectory) > self.trajectory_capacity:
            trajectory = trajectory[-self.trajectory_capacity:]
        return replace(track, box=det.box, trajectory=trajectory, last_seen=timestamp)

    def _create(self, det: Detection, timestamp: float) -> Track:
        tid = self.allocator.allocate()
        logger.debug(f"New track {tid} ({det.label})")
        return Track(
            id=tid,
            label=det.label,
            box=det.box,
            trajectory=(centroid(det.box),),
            color=color_for_id(tid),
            last_seen=timestamp,
        )
