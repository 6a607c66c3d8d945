"""
Main application for hand gesture recognition.
"""
import argparse
import asyncio
import logging
import time
from typing import Optional

import cv2

from .classifier import gesture_catalog
from .config import load_config
from .controller_mock import MockController
from .dispatcher import GestureActionDispatcher
from .gestures import GestureProcessor
from .landmarks import HandsTracker, draw_landmarks
from .types import ConfirmedGesture, HandShapeError

logger = logging.getLogger(__name__)


class GestureRecognitionApp:
    """Main application class for hand gesture recognition."""

    def __init__(self, config_path: Optional[str] = None):
        """Initialize the application with configuration."""
        self.config = load_config(config_path)
        self.tracker = HandsTracker(
            max_num_hands=self.config.mediapipe.max_num_hands,
            model_complexity=self.config.mediapipe.model_complexity,
            min_detection_conf=self.config.mediapipe.min_detection_confidence,
            min_tracking_conf=self.config.mediapipe.min_tracking_confidence
        )

        self.controller = MockController()
        self.dispatcher = GestureActionDispatcher(self.controller, self.config)
        self.gesture_processor = GestureProcessor(self.config)
        self.events: "asyncio.Queue[Optional[ConfirmedGesture]]" = asyncio.Queue()

        # Initialize camera
        self.cap = cv2.VideoCapture(self.config.camera.index)
        self.cap.set(cv2.CAP_PROP_FRAME_WIDTH, self.config.camera.width)
        self.cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self.config.camera.height)
        self.cap.set(cv2.CAP_PROP_FPS, self.config.camera.fps)

        if not self.cap.isOpened():
            self.tracker.close()
            raise RuntimeError(f"Failed to open camera {self.config.camera.index}")

    async def run(self):
        """Run the capture loop with the dispatcher as a separate task."""
        logger.info(f"Starting {self.config.display.window_name}")
        for entry in gesture_catalog():
            logger.info(f"  {entry['emoji']} {entry['name']} -> {entry['action']}")
        logger.info("Press 'q' to quit")

        dispatcher_task = asyncio.create_task(self.dispatcher.run(self.events))
        try:
            await self._capture_loop()
        finally:
            self.gesture_processor.reset()
            await self.events.put(None)
            await dispatcher_task
            self.close()

    async def _capture_loop(self):
        while True:
            ret, frame = self.cap.read()
            if not ret:
                logger.error("Failed to read frame from camera")
                break

            hand, raw, confirmed = self.track_frame(frame, time.monotonic() * 1000.0)

            if confirmed is not None:
                self.events.put_nowait(confirmed)

            if hand is not None and self.config.display.show_landmarks:
                frame = draw_landmarks(frame, hand, self.tracker.connections,
                                       self.config.display.show_palm_center)

            self._draw_status(frame, hand is not None, raw)

            cv2.imshow(self.config.display.window_name, frame)

            # Let the dispatcher task run between frames
            await asyncio.sleep(0)

            if cv2.waitKey(1) & 0xFF == ord('q'):
                break

    def track_frame(self, frame, t_now_ms: float):
        """
        Detect and classify one camera frame.

        Malformed detector output is logged and treated as a frame without a
        hand, so the confirmation window starts over.

        Returns:
            (hand, raw, confirmed); hand is None when no usable hand was found
        """
        try:
            hand = self.tracker.process(frame)
        except HandShapeError as e:
            logger.warning(f"Dropping malformed landmarks: {e}")
            hand = None

        try:
            raw, confirmed = self.gesture_processor.process_frame(hand, t_now_ms)
        except HandShapeError as e:
            logger.warning(f"Dropping malformed landmarks: {e}")
            return None, None, None
        return hand, raw, confirmed

    def _draw_status(self, frame, hand_seen: bool, raw) -> None:
        if not hand_seen:
            status_text = "No hand detected"
        elif raw is None or raw.is_unknown:
            status_text = "Show a gesture"
        else:
            status_text = f"Hand: {raw.name} ({raw.action})"

        cv2.putText(frame, status_text, (10, 30), cv2.FONT_HERSHEY_SIMPLEX, 0.7, (255, 255, 255), 2)

        confirmed = self.gesture_processor.confirmer.confirmed_label or "-"
        cv2.putText(frame, f"Confirmed: {confirmed}", (10, 60), cv2.FONT_HERSHEY_SIMPLEX, 0.6, (0, 255, 0), 2)

        if self.dispatcher.last_status:
            cv2.putText(frame, self.dispatcher.last_status, (10, 90), cv2.FONT_HERSHEY_SIMPLEX, 0.6, (0, 255, 255), 2)

        cv2.putText(frame, "Press 'q' to quit", (10, frame.shape[0] - 20), cv2.FONT_HERSHEY_SIMPLEX, 0.5, (255, 255, 255), 1)

    def close(self):
        """Cleanup resources."""
        if self.cap.isOpened():
            self.cap.release()
        self.tracker.close()
        cv2.destroyAllWindows()


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Webcam hand gesture recognition")
    parser.add_argument("--config", default=None, help="YAML file merged over the default config")
    parser.add_argument("--log-level", default="INFO", help="Logging level (default: INFO)")
    return parser.parse_args(argv)


async def main(argv=None):
    """Entry point for the application."""
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO))

    try:
        app = GestureRecognitionApp(config_path=args.config)
        await app.run()
    except KeyboardInterrupt:
        logger.info("Application interrupted by user")


def run():
    asyncio.run(main())


if __name__ == "__main__":
    run()
