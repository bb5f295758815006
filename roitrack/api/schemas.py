"""
Pydantic schemas for API request/response models.
"""

from pydantic import BaseModel
from typing import Any, Dict, List, Optional, Tuple


# --- Track Schemas ---

class TrackOut(BaseModel):
    id: int
    label: str
    box_2d: List[float]
    trajectory: List[Tuple[float, float]]
    color: str
    last_seen: float


class TracksResponse(BaseModel):
    tracks: List[TrackOut]
    state: str


# --- Tick Schemas ---

class TickRequest(BaseModel):
    detections: List[Any] = []
    timestamp: float
    polygon: Optional[List[Any]] = None


class ZoneEventOut(BaseModel):
    track_id: int
    label: str
    event_type: str
    timestamp: float
    position: Tuple[float, float]


class TickResponse(BaseModel):
    timestamp: float
    tracks: List[TrackOut]
    entered: int
    exited: int
    entered_delta: int
    exited_delta: int
    events: List[ZoneEventOut]


# --- Analytics Schemas ---

class CountsResponse(BaseModel):
    entered: int
    exited: int


class RoiRequest(BaseModel):
    polygon: List[Any]


class RoiResponse(BaseModel):
    polygon: List[Tuple[float, float]]
    defined: bool


class HealthResponse(BaseModel):
    status: str
    uptime: float
    tick_count: int
    active_tracks: int
    config: Dict[str, Any]
