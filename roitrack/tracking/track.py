"""
Track record, id allocation and display colors.
"""

from typing import Tuple
from dataclasses import dataclass, field

from ..geometry import BoundingBox, Point, centroid

PALETTE = ('#00f3ff', '#00ff9d', '#ff0055', '#ffcc00', '#bd00ff', '#ffffff')


def color_for_id(track_id: int) -> str:
    """Stable display color for a track id."""
    return PALETTE[(track_id - 1) % len(PALETTE)]


class IdAllocator:
    """Monotonic track id source. Ids are never handed out twice."""

    def __init__(self, start: int = 1):
        self.next_id = start

    def allocate(self) -> int:
        tid = self.next_id
        self.next_id += 1
        return tid

    def peek(self) -> int:
        return self.next_id


# Process-wide id source used when no allocator is injected
DEFAULT_ALLOCATOR = IdAllocator()


@dataclass(frozen=True)
class Track:
    """Immutable snapshot of one tracked object."""
    id: int
    label: str
    box: BoundingBox
    trajectory: Tuple[Point, ...] = field(default_factory=tuple)
    color: str = PALETTE[0]
    last_seen: float = 0.0

    @property
    def center(self) -> Point:
        return centroid(self.box)

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'label': self.label,
            'box_2d': self.box.to_box_2d(),
            'trajectory': [[p.x, p.y] for p in self.trajectory],
            'color': self.color,
            'last_seen': self.last_seen,
        }
