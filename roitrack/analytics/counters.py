"""
Cumulative ROI counters.
"""

from typing import Dict
from dataclasses import dataclass

from .zones import ZoneDelta


@dataclass
class ZoneCounters:
    """Session totals. Only ever increase; cleared by engine reset."""
    entered: int = 0
    exited: int = 0

    def record(self, delta: ZoneDelta):
        self.entered += delta.entered
        self.exited += delta.exited

    def copy(self) -> 'ZoneCounters':
        return ZoneCounters(self.entered, self.exited)

    def to_dict(self) -> Dict:
        return {'entered': self.entered, 'exited': self.exited}
