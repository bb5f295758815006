"""
Detection input type and wire-format parsing.

A detector reports each object as ``{label, box_2d: [ymin, xmin, ymax, xmax],
confidence?}`` on the 0-1000 scale. Parsing applies two policies:

- Shape errors (not a mapping, wrong box arity, non-numeric or non-finite
  values, missing label) reject the whole batch with RejectedTickError.
- Well-shaped but malformed boxes (inverted, or outside [0, 1000]) are
  skipped with a warning; the rest of the batch goes through.
"""

import math
import logging
from typing import Any, Iterable, List, Optional, Sequence
from dataclasses import dataclass

import numpy as np

from ..geometry import BoundingBox, Point, centroid

logger = logging.getLogger(__name__)


class RejectedTickError(ValueError):
    """Raised when a tick's input has an invalid shape; the tick has no effect."""


@dataclass(frozen=True)
class Detection:
    """One detected object for a single timestep."""
    label: str
    box: BoundingBox
    confidence: Optional[float] = None

    @property
    def center(self) -> Point:
        return centroid(self.box)

    def to_dict(self) -> dict:
        d = {'label': self.label, 'box_2d': self.box.to_box_2d()}
        if self.confidence is not None:
            d['confidence'] = self.confidence
        return d


def is_finite_number(value: Any) -> bool:
    """True for real, finite, non-bool numbers."""
    if isinstance(value, bool):
        return False
    if not isinstance(value, (int, float, np.integer, np.floating)):
        return False
    return math.isfinite(value)


def _check_box(box: BoundingBox, index: int) -> None:
    for v in box.to_box_2d():
        if not is_finite_number(v):
            raise RejectedTickError(f"Detection {index}: box values must be finite numbers")


def parse_detection(raw: Any, index: int = 0) -> Optional[Detection]:
    """
    Parse one detection.

    Args:
        raw: Detection instance or wire dict
        index: Position in the batch, used in messages

    Returns:
        Detection, or None if the detection is malformed and skipped

    Raises:
        RejectedTickError: if the input shape is invalid
    """
    if isinstance(raw, Detection):
        det = raw
        if not isinstance(det.label, str) or not det.label:
            raise RejectedTickError(f"Detection {index}: label must be a non-empty string")
        if not isinstance(det.box, BoundingBox):
            raise RejectedTickError(f"Detection {index}: box must be a BoundingBox, got {type(det.box).__name__}")
        _check_box(det.box, index)
        if det.confidence is not None and not is_finite_number(det.confidence):
            raise RejectedTickError(f"Detection {index}: confidence must be a finite number")
    elif isinstance(raw, dict):
        label = raw.get('label')
        if not isinstance(label, str) or not label:
            raise RejectedTickError(f"Detection {index}: label must be a non-empty string")

        box = raw.get('box_2d')
        if not isinstance(box, (list, tuple, np.ndarray)) or len(box) != 4:
            raise RejectedTickError(f"Detection {index}: box_2d must have 4 values")
        if not all(is_finite_number(v) for v in box):
            raise RejectedTickError(f"Detection {index}: box values must be finite numbers")

        confidence = raw.get('confidence')
        if confidence is not None:
            if not is_finite_number(confidence):
                raise RejectedTickError(f"Detection {index}: confidence must be a finite number")
            confidence = float(confidence)

        det = Detection(label=label, box=BoundingBox.from_box_2d(box), confidence=confidence)
    else:
        raise RejectedTickError(f"Detection {index}: expected a mapping, got {type(raw).__name__}")

    if not det.box.is_ordered:
        logger.warning(f"Skipping detection {index} ({det.label}): inverted box {det.box.to_box_2d()}")
        return None
    if not det.box.in_bounds:
        logger.warning(f"Skipping detection {index} ({det.label}): box outside [0, 1000] {det.box.to_box_2d()}")
        return None

    return det


def parse_detections(
    raw: Optional[Iterable[Any]],
    min_confidence: Optional[float] = None
) -> List[Detection]:
    """
    Parse a detection batch, dropping malformed entries.

    A None batch is treated as zero detections. The whole batch is
    validated before anything is returned.

    Raises:
        RejectedTickError: if any entry has an invalid shape
    """
    if raw is None:
        return []
    if isinstance(raw, (str, bytes, dict)):
        raise RejectedTickError("Detections must be a sequence")
    try:
        items: Sequence[Any] = list(raw)
    except TypeError:
        raise RejectedTickError("Detections must be a sequence") from None

    detections = []
    for i, item in enumerate(items):
        det = parse_detection(item, i)
        if det is None:
            continue
        if (min_confidence is not None and det.confidence is not None
                and det.confidence < min_confidence):
            logger.debug(f"Dropping detection {i} ({det.label}): confidence {det.confidence:.2f}")
            continue
        detections.append(det)

    return detections
