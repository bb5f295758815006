"""
Engine tunables and YAML project configuration.
"""

import copy
import logging
from typing import Any, Dict, Optional
from dataclasses import dataclass, asdict, fields

import yaml

logger = logging.getLogger(__name__)


@dataclass
class EngineConfig:
    """Tracking engine tunables. Distances are on the 0-1000 scale."""
    match_threshold: float = 150.0
    max_dropout_ticks: int = 5
    trajectory_capacity: int = 30
    frame_unit_ms: float = 1000.0
    association: str = "greedy"
    min_confidence: Optional[float] = None

    def __post_init__(self):
        if self.match_threshold <= 0:
            raise ValueError(f"match_threshold must be > 0, got {self.match_threshold}")
        if self.max_dropout_ticks < 0:
            raise ValueError(f"max_dropout_ticks must be >= 0, got {self.max_dropout_ticks}")
        if self.trajectory_capacity < 1:
            raise ValueError(f"trajectory_capacity must be >= 1, got {self.trajectory_capacity}")
        if self.frame_unit_ms <= 0:
            raise ValueError(f"frame_unit_ms must be > 0, got {self.frame_unit_ms}")

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'EngineConfig':
        """Create from a config mapping; unknown keys are an error."""
        data = data or {}
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown engine config keys: {sorted(unknown)}")
        return cls(**data)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


DEFAULTS: Dict[str, Any] = {
    'engine': {},
    'roi': [],
    'detector': {'name': 'dummy'},
    'output': {'tracks_path': 'outputs/tracks.jsonl'},
    'runtime': {
        'max_ticks': 100,
        'tick_interval_ms': 1000,
        'start_ms': 0,
    },
}


def with_defaults(cfg: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Fill missing top-level sections and runtime keys from DEFAULTS."""
    merged = copy.deepcopy(DEFAULTS)
    for key, value in (cfg or {}).items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key].update(value)
        else:
            merged[key] = value
    return merged


def load_config(path: str) -> Dict[str, Any]:
    """Load a YAML project config."""
    with open(path, 'r') as f:
        cfg = yaml.safe_load(f) or {}
    if not isinstance(cfg, dict):
        raise ValueError(f"Config {path} must be a mapping")
    logger.info(f"Loaded config from {path}")
    return with_defaults(cfg)
