"""
Temporal confirmation of per-frame gesture classifications.

Landmark detection is noisy from frame to frame. A raw label only becomes a
gesture event once it has been seen for several consecutive frames, and the
same gesture is not emitted again inside the debounce window.
"""
import logging
from collections import deque
from typing import Any, Deque, Iterable, Optional, Tuple

from .classifier import GestureClassifier
from .config import Cfg
from .geometry import as_hand
from .types import ConfirmationState, ConfirmedGesture, GestureResult

logger = logging.getLogger(__name__)

CONFIRM_FRAMES = 3
DEBOUNCE_MS = 800.0


class GestureConfirmer:
    """
    Turns a stream of raw classifications into confirmed gesture events.

    Two gates must pass before a gesture is emitted:
    - the last ``confirm_frames`` raw labels are all the same label, and that
      label is not the one already confirmed for the current streak
    - the label differs from the last emitted one, or ``debounce_ms`` has
      passed since that emission

    A frame without a hand, or with an unknown gesture, clears the window and
    the confirmed label. A partial streak never survives a gap.

    One instance per detection session. Not safe for concurrent use.
    """

    def __init__(self, confirm_frames: int = CONFIRM_FRAMES, debounce_ms: float = DEBOUNCE_MS):
        if confirm_frames < 1:
            raise ValueError(f"confirm_frames must be >= 1, got {confirm_frames}")
        self.confirm_frames = confirm_frames
        self.debounce_ms = debounce_ms

        self.recent_labels: Deque[str] = deque(maxlen=confirm_frames)
        self.confirmed_label: Optional[str] = None
        self.last_emitted_label: Optional[str] = None
        self.last_emitted_at_ms: Optional[float] = None

    @property
    def state(self) -> ConfirmationState:
        return ConfirmationState(
            recent_labels=tuple(self.recent_labels),
            confirmed_label=self.confirmed_label,
            last_emitted_label=self.last_emitted_label,
            last_emitted_at_ms=self.last_emitted_at_ms,
        )

    def reset(self) -> None:
        """Drop the current streak. Debounce memory is kept."""
        self.recent_labels.clear()
        self.confirmed_label = None

    def observe(self, raw: Optional[GestureResult], now_ms: float) -> Optional[ConfirmedGesture]:
        """
        Feed one frame's raw classification.

        Args:
            raw: Classifier output, or None when no hand was detected
            now_ms: Monotonic timestamp of the frame in milliseconds

        Returns:
            ConfirmedGesture when both gates pass, None otherwise
        """
        if raw is None or raw.is_unknown:
            if self.recent_labels or self.confirmed_label is not None:
                logger.debug("Gesture streak broken, clearing confirmation window")
            self.reset()
            return None

        self.recent_labels.append(raw.name)

        if len(self.recent_labels) < self.confirm_frames:
            return None
        if any(label != raw.name for label in self.recent_labels):
            return None
        if raw.name == self.confirmed_label:
            return None

        self.confirmed_label = raw.name

        if (raw.name == self.last_emitted_label and self.last_emitted_at_ms is not None
                and now_ms - self.last_emitted_at_ms < self.debounce_ms):
            logger.debug(
                "Debounced %s (%.0f ms since last emission)",
                raw.name, now_ms - self.last_emitted_at_ms,
            )
            return None

        self.last_emitted_label = raw.name
        self.last_emitted_at_ms = now_ms
        logger.info("Gesture confirmed: %s %s -> %s", raw.emoji, raw.name, raw.action)

        return ConfirmedGesture(
            name=raw.name,
            emoji=raw.emoji,
            action=raw.action,
            timestamp_ms=now_ms,
        )


class GestureProcessor:
    """
    One gesture detection session: validation, classification and confirmation.
    """

    def __init__(self, cfg: Cfg):
        """Initialize gesture processor with configuration."""
        self.cfg = cfg
        self.classifier = GestureClassifier(
            pinch_distance=cfg.gestures.pinch_distance,
            ok_distance=cfg.gestures.ok_distance,
        )
        self.confirmer = GestureConfirmer(
            confirm_frames=cfg.gestures.confirm_frames,
            debounce_ms=cfg.gestures.debounce_ms,
        )
        self.frames_processed = 0

    def process_frame(self, landmarks: Optional[Iterable[Any]],
                      t_now_ms: float) -> Tuple[Optional[GestureResult], Optional[ConfirmedGesture]]:
        """
        Process a frame and return the raw and confirmed gestures.

        Args:
            landmarks: 21 hand landmarks (None if no hand detected)
            t_now_ms: Current timestamp in milliseconds

        Returns:
            Tuple of (raw_gesture, confirmed_gesture). raw_gesture is None
            when there was no hand.

        Raises:
            HandShapeError: landmarks are not a valid 21-point hand. The
                session state is cleared as for a frame without a hand.
        """
        self.frames_processed += 1

        if landmarks is None:
            self.confirmer.observe(None, t_now_ms)
            return None, None

        try:
            hand = as_hand(landmarks)
        except ValueError:
            self.confirmer.observe(None, t_now_ms)
            raise

        raw = self.classifier(hand)
        confirmed = self.confirmer.observe(raw, t_now_ms)
        return raw, confirmed

    def reset(self) -> None:
        """Reset confirmation state when detection stops."""
        self.confirmer.reset()
