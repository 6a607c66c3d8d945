"""
Hand landmark detection with MediaPipe and landmark drawing with OpenCV.
"""
import logging
from typing import Iterable, List, Optional, Sequence, Tuple

import cv2
import numpy as np

from .geometry import as_hand, palm_center
from .types import Landmark

logger = logging.getLogger(__name__)


class HandsTracker:
    """Hand landmark tracker using MediaPipe Hands."""

    def __init__(self, max_num_hands: int = 1, model_complexity: int = 1,
                 min_detection_conf: float = 0.5, min_tracking_conf: float = 0.5):
        """
        Initialize the hands tracker.

        Args:
            max_num_hands: Maximum number of hands to detect. Only the first
                hand is ever classified.
            model_complexity: MediaPipe Hands model complexity (0 or 1)
            min_detection_conf: Minimum confidence for hand detection
            min_tracking_conf: Minimum confidence for hand tracking
        """
        import mediapipe as mp  # type: ignore

        if not hasattr(mp, "solutions"):
            raise RuntimeError(
                "The installed mediapipe package does not provide `mp.solutions`.\n"
                "Install a mediapipe release that ships the Hands solution API."
            )

        self.hands = mp.solutions.hands.Hands(
            static_image_mode=False,
            max_num_hands=max_num_hands,
            model_complexity=model_complexity,
            min_detection_confidence=min_detection_conf,
            min_tracking_confidence=min_tracking_conf
        )
        self.connections = mp.solutions.hands.HAND_CONNECTIONS

    def close(self) -> None:
        self.hands.close()

    def __enter__(self) -> "HandsTracker":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def process(self, frame_bgr: np.ndarray) -> Optional[List[Landmark]]:
        """
        Process a frame and return hand landmarks.

        Args:
            frame_bgr: Input frame in BGR format

        Returns:
            List of 21 (x, y, z) landmarks in [0..1] range, or None if no hand detected
        """
        frame_rgb = cv2.cvtColor(frame_bgr, cv2.COLOR_BGR2RGB)
        results = self.hands.process(frame_rgb)

        if not results.multi_hand_landmarks:
            return None

        # First detected hand only
        return as_hand(results.multi_hand_landmarks[0].landmark)


def draw_landmarks(frame: np.ndarray, hand: Sequence[Landmark],
                   connections: Iterable[Tuple[int, int]],
                   show_palm_center: bool = False) -> np.ndarray:
    """
    Draw hand landmarks and their connections on the frame.

    Args:
        frame: Input frame
        hand: 21 landmarks in [0..1] range
        connections: Landmark index pairs to join, e.g. the tracker's
            MediaPipe HAND_CONNECTIONS
        show_palm_center: Also mark the palm center

    Returns:
        Frame with landmarks drawn
    """
    height, width = frame.shape[:2]
    points = [(int(lm.x * width), int(lm.y * height)) for lm in hand]

    for start, end in connections:
        cv2.line(frame, points[start], points[end], (241, 102, 99), 2)

    for px, py in points:
        cv2.circle(frame, (px, py), 3, (94, 197, 34), -1)

    if show_palm_center:
        palm_x, palm_y = palm_center(hand)
        palm_px = (int(palm_x * width), int(palm_y * height))
        cv2.circle(frame, palm_px, 8, (0, 0, 255), -1)
        cv2.putText(frame, "Palm", (palm_px[0] + 10, palm_px[1] - 10),
                    cv2.FONT_HERSHEY_SIMPLEX, 0.5, (0, 0, 255), 2)

    return frame
