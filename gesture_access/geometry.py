"""
Landmark validation and hand geometry helpers.

The detector contract is one hand of 21 normalized points per frame. Input is
checked once here, at the boundary; everything downstream assumes a valid
``Hand``.
"""
import math
from typing import Any, Iterable, List, Sequence, Tuple

import numpy as np

from .types import (
    FINGER_PIPS,
    FINGER_TIPS,
    HAND_LANDMARK_COUNT,
    INDEX_MCP,
    MIDDLE_MCP,
    PINKY_MCP,
    RING_MCP,
    THUMB_IP,
    THUMB_MCP,
    THUMB_TIP,
    WRIST,
    Hand,
    HandShapeError,
    Landmark,
)


def _point_coords(point: Any) -> Tuple[Any, Any, Any]:
    """Pull (x, y, z) out of a tuple, mapping or landmark-like object."""
    if isinstance(point, dict):
        if "x" not in point or "y" not in point:
            raise HandShapeError(f"landmark is missing x/y: {point!r}")
        return point["x"], point["y"], point.get("z")

    if hasattr(point, "x") and hasattr(point, "y"):
        return point.x, point.y, getattr(point, "z", None)

    try:
        coords = list(point)
    except TypeError:
        raise HandShapeError(f"unsupported landmark value: {point!r}") from None

    if len(coords) == 2:
        return coords[0], coords[1], None
    if len(coords) == 3:
        return coords[0], coords[1], coords[2]
    raise HandShapeError(f"landmark must have 2 or 3 coordinates, got {len(coords)}")


def _is_number(value: Any) -> bool:
    # bool is an int subclass, strings would be parsed by numpy
    return isinstance(value, (int, float, np.integer, np.floating)) and not isinstance(value, bool)


def as_hand(points: Iterable[Any]) -> List[Landmark]:
    """
    Validate detector output and convert it into a Hand.

    Args:
        points: 21 landmarks as (x, y), (x, y, z), {"x", "y", "z"} mappings
            or objects with x/y/z attributes (MediaPipe NormalizedLandmark)

    Returns:
        List of 21 Landmark tuples. Missing z becomes 0.0.

    Raises:
        HandShapeError: wrong landmark count, missing or non-finite coordinates
    """
    if points is None:
        raise HandShapeError("no landmarks given")

    try:
        rows = [_point_coords(p) for p in points]
    except TypeError:
        raise HandShapeError(f"landmarks must be a sequence, got {type(points).__name__}") from None

    if len(rows) != HAND_LANDMARK_COUNT:
        raise HandShapeError(
            f"expected {HAND_LANDMARK_COUNT} landmarks, got {len(rows)}"
        )

    rows = [(x, y, 0.0 if z is None else z) for x, y, z in rows]
    for i, row in enumerate(rows):
        if not all(_is_number(v) for v in row):
            raise HandShapeError(f"landmark {i} coordinates must be numbers: {row!r}")

    coords = np.asarray(rows, dtype=float)
    if coords.shape != (HAND_LANDMARK_COUNT, 3):
        raise HandShapeError(f"expected landmark array of shape (21, 3), got {coords.shape}")

    if not np.all(np.isfinite(coords)):
        raise HandShapeError("landmark coordinates must be finite")

    return [Landmark(float(x), float(y), float(z)) for x, y, z in coords]


def landmark_distance(a: Landmark, b: Landmark) -> float:
    """Euclidean distance between two landmarks in normalized units."""
    return math.sqrt((a.x - b.x) ** 2 + (a.y - b.y) ** 2 + (a.z - b.z) ** 2)


def fingers_extended(hand: Hand) -> Tuple[bool, bool, bool, bool]:
    """
    Extension flags for index, middle, ring and pinky.

    A finger counts as extended when its tip is above its PIP joint in image
    space (smaller y). Assumes a roughly upright hand facing the camera.
    """
    index, middle, ring, pinky = (
        hand[tip].y < hand[pip].y for tip, pip in zip(FINGER_TIPS, FINGER_PIPS)
    )
    return index, middle, ring, pinky


def is_thumb_extended(hand: Hand) -> bool:
    """Thumb spread test: the tip sits further out along x than the IP joint."""
    return abs(hand[THUMB_TIP].x - hand[THUMB_MCP].x) > abs(hand[THUMB_IP].x - hand[THUMB_MCP].x)


def is_thumb_pointing_up(hand: Hand) -> bool:
    return hand[THUMB_TIP].y < hand[WRIST].y


def palm_center(hand: Sequence[Landmark]) -> Tuple[float, float]:
    """
    Calculate the center of the palm.

    Args:
        hand: 21 hand landmarks

    Returns:
        (x, y) coordinates of palm center in [0..1] range
    """
    palm_indices = [WRIST, INDEX_MCP, MIDDLE_MCP, RING_MCP, PINKY_MCP]

    x_sum = sum(hand[i].x for i in palm_indices)
    y_sum = sum(hand[i].y for i in palm_indices)

    return (x_sum / len(palm_indices), y_sum / len(palm_indices))
