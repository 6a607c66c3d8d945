"""
Static gesture classification from a single frame of hand landmarks.

Rules are evaluated in order and the first match wins. Several rules can hold
for the same hand, so the order of GESTURE_RULES is the tie-break policy.
"""
from dataclasses import dataclass
from typing import Callable, Dict, List, Tuple

from .geometry import (
    fingers_extended,
    is_thumb_extended,
    is_thumb_pointing_up,
    landmark_distance,
)
from .types import INDEX_MCP, INDEX_TIP, THUMB_IP, THUMB_TIP, GestureAction, GestureResult, Hand

PINCH_DISTANCE = 0.06
OK_DISTANCE = 0.07


@dataclass(frozen=True)
class HandFeatures:
    """Geometric features the gesture rules are written against."""
    extended: Tuple[bool, bool, bool, bool]  # index, middle, ring, pinky
    thumb_extended: bool
    thumb_pointing_up: bool
    thumb_index_distance: float
    thumb_tip_y: float
    thumb_ip_y: float
    index_mcp_y: float
    pinch_distance: float = PINCH_DISTANCE
    ok_distance: float = OK_DISTANCE

    @property
    def extended_count(self) -> int:
        return sum(self.extended)


def extract_features(hand: Hand, pinch_distance: float = PINCH_DISTANCE,
                     ok_distance: float = OK_DISTANCE) -> HandFeatures:
    """Compute rule features for one validated hand."""
    return HandFeatures(
        extended=fingers_extended(hand),
        thumb_extended=is_thumb_extended(hand),
        thumb_pointing_up=is_thumb_pointing_up(hand),
        thumb_index_distance=landmark_distance(hand[THUMB_TIP], hand[INDEX_TIP]),
        thumb_tip_y=hand[THUMB_TIP].y,
        thumb_ip_y=hand[THUMB_IP].y,
        index_mcp_y=hand[INDEX_MCP].y,
        pinch_distance=pinch_distance,
        ok_distance=ok_distance,
    )


@dataclass(frozen=True)
class GestureRule:
    """One entry of the ordered rule table."""
    name: str
    emoji: str
    action: GestureAction
    predicate: Callable[[HandFeatures], bool]

    @property
    def result(self) -> GestureResult:
        return GestureResult(name=self.name, emoji=self.emoji, action=self.action)


def _open_palm(f: HandFeatures) -> bool:
    return f.extended_count >= 4 and f.thumb_extended


def _thumbs_up(f: HandFeatures) -> bool:
    # Checked before Fist: both have no fingers extended
    return (f.thumb_extended and f.thumb_pointing_up and f.extended_count == 0
            and f.thumb_tip_y < f.index_mcp_y)


def _thumbs_down(f: HandFeatures) -> bool:
    return (f.thumb_extended and not f.thumb_pointing_up and f.extended_count == 0
            and f.thumb_tip_y > f.thumb_ip_y)


def _fist(f: HandFeatures) -> bool:
    return f.extended_count == 0 and not f.thumb_extended


def _pinch(f: HandFeatures) -> bool:
    _, middle, ring, pinky = f.extended
    return f.thumb_index_distance < f.pinch_distance and not middle and not ring and not pinky


def _ok_sign(f: HandFeatures) -> bool:
    _, middle, ring, pinky = f.extended
    return f.thumb_index_distance < f.ok_distance and middle and ring and pinky


def _peace_sign(f: HandFeatures) -> bool:
    return f.extended == (True, True, False, False)


def _pointing(f: HandFeatures) -> bool:
    return f.extended == (True, False, False, False)


def _three_fingers(f: HandFeatures) -> bool:
    return f.extended == (True, True, True, False)


def _l_shape(f: HandFeatures) -> bool:
    # Never reached: Pointing matches the same fingers regardless of the thumb
    return f.thumb_extended and f.extended == (True, False, False, False)


def _four_fingers(f: HandFeatures) -> bool:
    return f.extended_count >= 4 and not f.thumb_extended


def _rock_on(f: HandFeatures) -> bool:
    return f.extended == (True, False, False, True)


def _hang_loose(f: HandFeatures) -> bool:
    return f.thumb_extended and f.extended == (False, False, False, True)


GESTURE_RULES: List[GestureRule] = [
    GestureRule("Open Palm", "✋", "stop", _open_palm),
    GestureRule("Thumbs Up", "👍", "confirm", _thumbs_up),
    GestureRule("Thumbs Down", "👎", "reject", _thumbs_down),
    GestureRule("Fist", "✊", "start", _fist),
    GestureRule("Pinch", "🤏", "zoom", _pinch),
    GestureRule("OK Sign", "👌", "toggle-theme", _ok_sign),
    GestureRule("Peace Sign", "✌️", "scroll", _peace_sign),
    GestureRule("Pointing", "☝️", "point", _pointing),
    GestureRule("Three Fingers", "🤟", "scroll-up", _three_fingers),
    GestureRule("L-Shape", "👆", "prev-section", _l_shape),
    GestureRule("Four Fingers", "🖖", "next-section", _four_fingers),
    GestureRule("Rock On", "🤘", "top", _rock_on),
    GestureRule("Hang Loose", "🤙", "bottom", _hang_loose),
]

UNKNOWN_GESTURE = GestureResult(name="Unknown", emoji="🤚", action="none")


def classify_features(features: HandFeatures) -> GestureResult:
    for rule in GESTURE_RULES:
        if rule.predicate(features):
            return rule.result
    return UNKNOWN_GESTURE


def classify_gesture(hand: Hand, pinch_distance: float = PINCH_DISTANCE,
                     ok_distance: float = OK_DISTANCE) -> GestureResult:
    """
    Classify one validated hand into a static gesture.

    Args:
        hand: 21 landmarks, already checked by geometry.as_hand
        pinch_distance: thumb-index distance below which Pinch can match
        ok_distance: thumb-index distance below which OK Sign can match

    Returns:
        The first matching GestureResult, or UNKNOWN_GESTURE
    """
    return classify_features(extract_features(hand, pinch_distance, ok_distance))


def gesture_catalog() -> List[Dict[str, str]]:
    """Rule table in precedence order, for help screens and the API."""
    return [
        {"name": rule.name, "emoji": rule.emoji, "action": rule.action}
        for rule in GESTURE_RULES
    ]


class GestureClassifier:
    """Classifier bound to configured distance thresholds."""

    def __init__(self, pinch_distance: float = PINCH_DISTANCE, ok_distance: float = OK_DISTANCE):
        self.pinch_distance = pinch_distance
        self.ok_distance = ok_distance

    def features(self, hand: Hand) -> HandFeatures:
        return extract_features(hand, self.pinch_distance, self.ok_distance)

    def __call__(self, hand: Hand) -> GestureResult:
        return classify_features(self.features(hand))
