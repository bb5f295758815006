"""
Geometry primitives on the detector's normalized 0-1000 plane.
Points, boxes, centroids and the even-odd point-in-polygon test.
"""

import math
from typing import Iterable, Sequence, Tuple
from dataclasses import dataclass

import numpy as np

SCALE = 1000.0


@dataclass(frozen=True)
class Point:
    """Immutable 2D point."""
    x: float
    y: float


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned box in [ymin, xmin, ymax, xmax] order."""
    ymin: float
    xmin: float
    ymax: float
    xmax: float

    @classmethod
    def from_box_2d(cls, box: Sequence[float]) -> 'BoundingBox':
        """Build from the detector's [ymin, xmin, ymax, xmax] array."""
        ymin, xmin, ymax, xmax = box
        return cls(float(ymin), float(xmin), float(ymax), float(xmax))

    def to_box_2d(self) -> list:
        return [self.ymin, self.xmin, self.ymax, self.xmax]

    @property
    def is_ordered(self) -> bool:
        return self.ymin <= self.ymax and self.xmin <= self.xmax

    @property
    def in_bounds(self) -> bool:
        return all(0.0 <= v <= SCALE for v in (self.ymin, self.xmin, self.ymax, self.xmax))


def centroid(box: BoundingBox) -> Point:
    """Midpoint of the box."""
    return Point((box.xmin + box.xmax) / 2, (box.ymin + box.ymax) / 2)


def distance(p1: Point, p2: Point) -> float:
    """Euclidean distance between two points."""
    return math.hypot(p1.x - p2.x, p1.y - p2.y)


def centroid_distances(tracks_xy: np.ndarray, dets_xy: np.ndarray) -> np.ndarray:
    """
    Pairwise Euclidean distances between two sets of centroids.

    Args:
        tracks_xy: (N, 2) array
        dets_xy: (M, 2) array

    Returns:
        (N, M) distance matrix
    """
    if len(tracks_xy) == 0 or len(dets_xy) == 0:
        return np.zeros((len(tracks_xy), len(dets_xy)))
    diff = tracks_xy[:, None, :] - dets_xy[None, :, :]
    return np.sqrt((diff ** 2).sum(axis=2))


def point_in_polygon(point: Point, polygon: Sequence[Point]) -> bool:
    """
    Ray-casting (even-odd) test over the closed polygon.

    Callers must gate on len(polygon) >= 3. Points exactly on an edge
    fall wherever the edge formula puts them.
    """
    inside = False
    n = len(polygon)
    j = n - 1
    for i in range(n):
        xi, yi = polygon[i].x, polygon[i].y
        xj, yj = polygon[j].x, polygon[j].y

        # (yi > y) != (yj > y) guarantees yj != yi
        if ((yi > point.y) != (yj > point.y)) and \
                (point.x < (xj - xi) * (point.y - yi) / (yj - yi) + xi):
            inside = not inside
        j = i

    return inside


def as_polygon(points: Iterable) -> Tuple[Point, ...]:
    """
    Normalize a polygon given as Points, (x, y) pairs or {'x', 'y'} dicts.

    Raises:
        ValueError: if a vertex is not a pair of finite numbers
    """
    vertices = []
    for p in points:
        if isinstance(p, Point):
            x, y = p.x, p.y
        elif isinstance(p, dict):
            if 'x' not in p or 'y' not in p:
                raise ValueError(f"Polygon vertex missing x/y: {p!r}")
            x, y = p['x'], p['y']
        else:
            try:
                x, y = p
            except (TypeError, ValueError):
                raise ValueError(f"Polygon vertex must be an (x, y) pair: {p!r}") from None
        if not (_is_number(x) and _is_number(y)):
            raise ValueError(f"Polygon vertex must be numeric: {p!r}")
        if not (math.isfinite(x) and math.isfinite(y)):
            raise ValueError(f"Polygon vertex must be finite: {p!r}")
        vertices.append(Point(float(x), float(y)))
    return tuple(vertices)


def _is_number(value) -> bool:
    return isinstance(value, (int, float, np.integer, np.floating)) and not isinstance(value, bool)
