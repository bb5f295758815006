"""
Frame-to-frame data association between tracks and detections.

The default policy is greedy nearest-centroid matching with label gating:
tracks are visited in creation order and each claims the nearest still
unclaimed detection of the same label within the match threshold. This is
not a globally optimal assignment; an earlier track can take a detection a
later track would have fit better. HungarianCentroidAssociator solves the
same gated problem as a minimum-cost assignment instead.
"""

import logging
from typing import Dict, List, Sequence, Tuple
from dataclasses import dataclass

import numpy as np
from scipy.optimize import linear_sum_assignment

from ..geometry import centroid_distances
from ..detection.types import Detection
from .track import Track

logger = logging.getLogger(__name__)

INVALID_COST = 1e9


@dataclass(frozen=True)
class MatchResult:
    """Partial 1:1 matching for one timestep, by list index."""
    matches: Tuple[Tuple[int, int], ...]  # (track_idx, det_idx), ascending track_idx
    unmatched_tracks: Tuple[int, ...]
    unmatched_detections: Tuple[int, ...]  # ascending det_idx

    def as_dict(self) -> Dict[int, int]:
        """Mapping of track index to matched detection index."""
        return dict(self.matches)


def _centers(items: Sequence) -> np.ndarray:
    xy = [(c.x, c.y) for c in (item.center for item in items)]
    return np.array(xy, dtype=np.float64).reshape(-1, 2)


def gated_distances(
    tracks: Sequence[Track],
    detections: Sequence[Detection],
    match_threshold: float
) -> np.ndarray:
    """
    Centroid distance matrix with disallowed pairs set to +inf.

    A pair is allowed when labels are equal and distance < match_threshold.

    Returns:
        (N_tracks, N_detections) matrix
    """
    dist = centroid_distances(_centers(tracks), _centers(detections))
    if dist.size == 0:
        return dist

    track_labels = np.array([t.label for t in tracks], dtype=object)
    det_labels = np.array([d.label for d in detections], dtype=object)
    same_label = track_labels[:, None] == det_labels[None, :]

    return np.where(same_label & (dist < match_threshold), dist, np.inf)


def _result(matches: List[Tuple[int, int]], n_tracks: int, n_dets: int) -> MatchResult:
    matches = sorted(matches)
    matched_tracks = {i for i, _ in matches}
    matched_dets = {j for _, j in matches}
    return MatchResult(
        matches=tuple(matches),
        unmatched_tracks=tuple(i for i in range(n_tracks) if i not in matched_tracks),
        unmatched_detections=tuple(j for j in range(n_dets) if j not in matched_dets),
    )


class GreedyCentroidAssociator:
    """Very simple greedy nearest-centroid association with label gating."""

    def __init__(self, match_threshold: float = 150.0):
        self.match_threshold = match_threshold

    def associate(
        self,
        tracks: Sequence[Track],
        detections: Sequence[Detection]
    ) -> MatchResult:
        """
        Match tracks to detections, first-claimed-wins in track order.

        Ties on distance go to the detection that appears first in the batch.
        """
        cost = gated_distances(tracks, detections, self.match_threshold)
        available = np.ones(len(detections), dtype=bool)
        matches = []

        for i in range(len(tracks)):
            if not available.any():
                break
            row = np.where(available, cost[i], np.inf)
            j = int(np.argmin(row))
            if np.isfinite(row[j]):
                matches.append((i, j))
                available[j] = False

        return _result(matches, len(tracks), len(detections))


class HungarianCentroidAssociator:
    """Minimum total centroid distance assignment under the same gating."""

    def __init__(self, match_threshold: float = 150.0):
        self.match_threshold = match_threshold

    def associate(
        self,
        tracks: Sequence[Track],
        detections: Sequence[Detection]
    ) -> MatchResult:
        cost = gated_distances(tracks, detections, self.match_threshold)
        if cost.size == 0:
            return _result([], len(tracks), len(detections))

        valid = np.isfinite(cost)
        if not valid.any():
            return _result([], len(tracks), len(detections))

        rows, cols = linear_sum_assignment(np.where(valid, cost, INVALID_COST))
        matches = [(int(i), int(j)) for i, j in zip(rows, cols) if valid[i, j]]

        return _result(matches, len(tracks), len(detections))
