import json
import logging

import numpy as np

from ..geometry import SCALE

logger = logging.getLogger(__name__)

DEFAULT_OBJECTS = [
    {'label': 'person', 'x': 50.0, 'y': 500.0, 'vx': 40.0, 'vy': 0.0, 'w': 60.0, 'h': 160.0},
    {'label': 'car', 'x': 900.0, 'y': 250.0, 'vx': -35.0, 'vy': 10.0, 'w': 140.0, 'h': 90.0},
]


class DummyDetector:
    """A fast CPU-only fake detector.
    Produces a few moving boxes on the 0-1000 plane so the engine can be exercised without a model.
    """
    def __init__(self, objects=None, jitter=0.0, seed=0):
        self.frame_no = 0
        self.traj = [dict(o) for o in (objects or DEFAULT_OBJECTS)]
        self.jitter = float(jitter)
        self.rng = np.random.default_rng(seed)

    def detect(self, image=None):
        self.frame_no += 1
        dets = []
        for t in self.traj:
            t['x'] = (t['x'] + t['vx']) % SCALE
            t['y'] = (t['y'] + t['vy']) % SCALE
            cx, cy = t['x'], t['y']
            if self.jitter > 0:
                cx += self.rng.normal(0, self.jitter)
                cy += self.rng.normal(0, self.jitter)
            w, h = t['w'], t['h']
            xmin = float(np.clip(cx - w/2, 0, SCALE))
            xmax = float(np.clip(cx + w/2, 0, SCALE))
            ymin = float(np.clip(cy - h/2, 0, SCALE))
            ymax = float(np.clip(cy + h/2, 0, SCALE))
            dets.append({'label': t['label'], 'box_2d': [ymin, xmin, ymax, xmax], 'confidence': 0.9})
        return dets


class ReplayDetector:
    """Replays recorded detector output, one JSON array of detections per line."""
    def __init__(self, path):
        self.path = path
        with open(path, 'r', encoding='utf-8') as f:
            self.batches = [json.loads(line) for line in f if line.strip()]
        self.frame_no = 0
        logger.info(f"Loaded {len(self.batches)} detection batches from {path}")

    def detect(self, image=None):
        self.frame_no += 1
        if self.frame_no > len(self.batches):
            return []
        return self.batches[self.frame_no - 1]
