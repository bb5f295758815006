"""
ROI tracking engine: greedy centroid tracking of per-frame detections with
enter/exit counting against a polygon region of interest.
"""

from .config import EngineConfig, load_config
from .engine import TrackingEngine, TickResult, EngineState
from .detection import Detection, RejectedTickError
from .tracking import Track
from .analytics import RegionOfInterest, ZoneCounters, ZoneEvent, ZoneEventType

__version__ = "0.1.0"

__all__ = [
    'EngineConfig',
    'load_config',
    'TrackingEngine',
    'TickResult',
    'EngineState',
    'Detection',
    'RejectedTickError',
    'Track',
    'RegionOfInterest',
    'ZoneCounters',
    'ZoneEvent',
    'ZoneEventType',
]
