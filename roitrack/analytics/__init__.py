"""
Analytics module for ROI enter/exit accounting.
"""

from .events import ZoneEvent, ZoneEventType
from .zones import RegionOfInterest, ZoneDelta, evaluate, MIN_POLYGON_POINTS
from .counters import ZoneCounters


__all__ = [
    'ZoneEvent',
    'ZoneEventType',
    'RegionOfInterest',
    'ZoneDelta',
    'evaluate',
    'MIN_POLYGON_POINTS',
    'ZoneCounters',
]
