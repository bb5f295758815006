"""
Detection module for the ROI tracking engine.
Holds the detection input type plus detector collaborators: a synthetic
dummy detector and a replay detector for recorded batches.
"""

from .types import Detection, RejectedTickError, parse_detection, parse_detections
from .detector import DummyDetector, ReplayDetector


def build_detector(config):
    """
    Build a detector based on configuration.
    
    Args:
        config: Either a string (detector name) or dict with 'name' and params
        
    Returns:
        Detector instance
    """
    if isinstance(config, str):
        name = config.lower()
        params = {}
    else:
        name = config.get('name', 'dummy').lower()
        params = {k: v for k, v in config.items() if k != 'name'}
    
    if name == 'dummy':
        return DummyDetector(**params)
    elif name == 'replay':
        if 'path' not in params:
            raise ValueError("Replay detector requires 'path' parameter")
        return ReplayDetector(**params)
    else:
        raise ValueError(f'Unknown detector: {name}')


__all__ = [
    'Detection',
    'RejectedTickError',
    'parse_detection',
    'parse_detections',
    'DummyDetector',
    'ReplayDetector',
    'build_detector',
]
