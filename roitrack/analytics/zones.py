"""
ROI definition and per-tick enter/exit evaluation.

Evaluation is stateless: it compares each surviving track's centroid in the
previous snapshot with its centroid in the new one.
"""

import logging
from typing import Dict, Iterable, List, Sequence, Tuple
from dataclasses import dataclass, field

from ..geometry import Point, as_polygon, point_in_polygon
from ..tracking.track import Track
from .events import ZoneEvent, ZoneEventType

logger = logging.getLogger(__name__)

MIN_POLYGON_POINTS = 3


@dataclass(frozen=True)
class RegionOfInterest:
    """Closed polygon region. Fewer than 3 vertices means no ROI is defined."""
    polygon: Tuple[Point, ...] = ()

    @classmethod
    def from_points(cls, points: Iterable) -> 'RegionOfInterest':
        return cls(as_polygon(points))

    @property
    def is_defined(self) -> bool:
        return len(self.polygon) >= MIN_POLYGON_POINTS

    def contains(self, point: Point) -> bool:
        """Check if point is inside; always False when undefined."""
        if not self.is_defined:
            return False
        return point_in_polygon(point, self.polygon)

    def to_list(self) -> List[List[float]]:
        return [[p.x, p.y] for p in self.polygon]


@dataclass(frozen=True)
class ZoneDelta:
    """Crossings observed in one tick."""
    entered: int = 0
    exited: int = 0
    events: Tuple[ZoneEvent, ...] = field(default_factory=tuple)


def evaluate(
    old_tracks: Sequence[Track],
    new_tracks: Sequence[Track],
    polygon: Sequence[Point]
) -> ZoneDelta:
    """
    Count ROI entries and exits between two snapshots.

    Only tracks present in both snapshots (same id) can cross. New and
    retired tracks contribute nothing.

    Args:
        old_tracks: Snapshot before the tick
        new_tracks: Snapshot after the tick
        polygon: ROI vertices; fewer than 3 disables analytics

    Returns:
        ZoneDelta with counts and events in new-snapshot order
    """
    if len(polygon) < MIN_POLYGON_POINTS:
        return ZoneDelta()

    previous: Dict[int, Track] = {t.id: t for t in old_tracks}
    entered = 0
    exited = 0
    events = []

    for track in new_tracks:
        old = previous.get(track.id)
        if old is None:
            continue

        was_in = point_in_polygon(old.center, polygon)
        is_in = point_in_polygon(track.center, polygon)

        if not was_in and is_in:
            entered += 1
            event_type = ZoneEventType.ENTER
        elif was_in and not is_in:
            exited += 1
            event_type = ZoneEventType.EXIT
        else:
            continue

        logger.debug(f"Track {track.id} ({track.label}) {event_type.value}")
        events.append(ZoneEvent(
            track_id=track.id,
            label=track.label,
            event_type=event_type,
            timestamp=track.last_seen,
            position=track.center,
        ))

    return ZoneDelta(entered=entered, exited=exited, events=tuple(events))
