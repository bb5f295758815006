"""
Event types for ROI analytics.
"""

from enum import Enum
from typing import Dict
from dataclasses import dataclass

from ..geometry import Point


class ZoneEventType(Enum):
    """Types of ROI crossing events."""
    ENTER = "zone_entry"
    EXIT = "zone_exit"


@dataclass(frozen=True)
class ZoneEvent:
    """A track crossed the ROI boundary between two consecutive observations."""
    track_id: int
    label: str
    event_type: ZoneEventType
    timestamp: float
    position: Point

    def to_dict(self) -> Dict:
        """Convert to serializable dict."""
        return {
            'track_id': self.track_id,
            'label': self.label,
            'event_type': self.event_type.value,
            'timestamp': self.timestamp,
            'position': [self.position.x, self.position.y],
        }

    @classmethod
    def from_dict(cls, data: Dict) -> 'ZoneEvent':
        x, y = data['position']
        return cls(
            track_id=data['track_id'],
            label=data['label'],
            event_type=ZoneEventType(data['event_type']),
            timestamp=data['timestamp'],
            position=Point(float(x), float(y)),
        )
