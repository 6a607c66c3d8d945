"""
Hand Gesture Recognition System

Classifies a hand's 21 landmarks into static gestures and confirms them over
consecutive frames before they trigger accessibility actions (scroll, pause,
confirm, theme toggle, ...).
"""

__version__ = "0.1.0"

from .types import (
    ConfirmedGesture,
    ControllerProto,
    GestureResult,
    GESTURE_ACTIONS,
    HandShapeError,
    Landmark,
)
from .config import load_config, Cfg
from .geometry import as_hand
from .classifier import GESTURE_RULES, GestureClassifier, classify_gesture
from .gestures import GestureConfirmer, GestureProcessor
from .controller_mock import MockController
from .dispatcher import GestureActionDispatcher

__all__ = [
    "ConfirmedGesture",
    "ControllerProto",
    "GestureResult",
    "GESTURE_ACTIONS",
    "HandShapeError",
    "Landmark",
    "load_config",
    "Cfg",
    "as_hand",
    "GESTURE_RULES",
    "GestureClassifier",
    "classify_gesture",
    "GestureConfirmer",
    "GestureProcessor",
    "MockController",
    "GestureActionDispatcher",
]
