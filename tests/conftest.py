"""
Pytest configuration and fixtures.
"""

import pytest
import sys
import os

# Add project root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from roitrack.geometry import BoundingBox, Point
from roitrack.tracking import Track, color_for_id


def box_around(cx, cy, half=10.0):
    """Box of side 2*half centred on (cx, cy)."""
    return BoundingBox(ymin=cy - half, xmin=cx - half, ymax=cy + half, xmax=cx + half)


@pytest.fixture
def make_detection():
    """Factory for wire-format detections centred on a point."""
    def _make(label, cx, cy, half=10.0, confidence=None):
        box = box_around(cx, cy, half)
        det = {'label': label, 'box_2d': box.to_box_2d()}
        if confidence is not None:
            det['confidence'] = confidence
        return det
    return _make


@pytest.fixture
def make_track():
    """Factory for tracks centred on a point."""
    def _make(tid, label, cx, cy, last_seen=0.0):
        return Track(
            id=tid,
            label=label,
            box=box_around(cx, cy),
            trajectory=(Point(cx, cy),),
            color=color_for_id(tid),
            last_seen=last_seen,
        )
    return _make


@pytest.fixture
def square_polygon():
    """Large square ROI."""
    return [(100, 100), (900, 100), (900, 900), (100, 900)]


@pytest.fixture
def triangle_polygon():
    return [(200, 200), (800, 200), (500, 800)]


@pytest.fixture
def sample_config(tmp_path):
    """Generate sample pipeline configuration."""
    return {
        'engine': {
            'match_threshold': 150,
            'max_dropout_ticks': 5,
            'trajectory_capacity': 30,
            'frame_unit_ms': 1000,
        },
        'roi': [[100, 100], [900, 100], [900, 900], [100, 900]],
        'detector': {'name': 'dummy'},
        'output': {
            'tracks_path': str(tmp_path / 'out' / 'tracks.jsonl')
        },
        'runtime': {
            'max_ticks': 10,
            'tick_interval_ms': 1000,
        }
    }
