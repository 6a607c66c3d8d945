"""
Synthetic upright hands for gesture tests.

Coordinates follow MediaPipe: x, y in [0..1], smaller y is higher in the image.
"""
from typing import Dict, List, Optional, Tuple

from gesture_access.types import Landmark

_BASE = {
    0: (0.50, 0.90),   # wrist
    1: (0.44, 0.82),
    2: (0.40, 0.75),   # thumb MCP
    3: (0.37, 0.70),   # thumb IP
    5: (0.45, 0.60), 6: (0.45, 0.50), 7: (0.45, 0.45),
    9: (0.50, 0.60), 10: (0.50, 0.50), 11: (0.50, 0.45),
    13: (0.55, 0.60), 14: (0.55, 0.50), 15: (0.55, 0.45),
    17: (0.60, 0.62), 18: (0.60, 0.52), 19: (0.60, 0.47),
}

_TIPS_EXTENDED = {8: (0.45, 0.35), 12: (0.50, 0.33), 16: (0.55, 0.35), 20: (0.60, 0.40)}
_TIPS_CURLED = {8: (0.45, 0.58), 12: (0.50, 0.58), 16: (0.55, 0.58), 20: (0.60, 0.60)}

THUMB_TIPS = {
    "tucked": (0.42, 0.80),  # not spread, not extended
    "out": (0.30, 0.65),     # spread sideways, above the wrist
    "up": (0.30, 0.30),      # spread, above the index MCP
    "down": (0.30, 0.95),    # spread, below the wrist
}


def make_hand(fingers: Tuple[bool, bool, bool, bool] = (False, False, False, False),
              thumb: str = "tucked",
              overrides: Optional[Dict[int, Tuple[float, float]]] = None) -> List[Landmark]:
    """
    Build a 21-point hand.

    Args:
        fingers: extended flags for index, middle, ring, pinky
        thumb: one of THUMB_TIPS
        overrides: landmark index -> (x, y) replacements applied last
    """
    points = dict(_BASE)
    for tip, extended in zip((8, 12, 16, 20), fingers):
        points[tip] = _TIPS_EXTENDED[tip] if extended else _TIPS_CURLED[tip]
    points[4] = THUMB_TIPS[thumb]
    if overrides:
        points.update(overrides)
    return [Landmark(x, y, 0.0) for x, y in (points[i] for i in range(21))]


OPEN_PALM = make_hand((True, True, True, True), thumb="out")
THUMBS_UP = make_hand(thumb="up")
THUMBS_DOWN = make_hand(thumb="down")
FIST = make_hand()
PINCH = make_hand((True, False, False, False), overrides={4: (0.43, 0.36)})
OK_SIGN = make_hand((False, True, True, True), overrides={4: (0.44, 0.60)})
PEACE = make_hand((True, True, False, False))
POINTING = make_hand((True, False, False, False))
THREE_FINGERS = make_hand((True, True, True, False))
FOUR_FINGERS = make_hand((True, True, True, True))
ROCK_ON = make_hand((True, False, False, True))
HANG_LOOSE = make_hand((False, False, False, True), thumb="out")
UNKNOWN = make_hand((False, True, False, False))


def as_json(hand: List[Landmark]) -> List[List[float]]:
    return [[lm.x, lm.y, lm.z] for lm in hand]
