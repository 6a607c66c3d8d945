#!/usr/bin/env python3
"""
Gesture Access - FastAPI Server
Classifies hand landmarks streamed from a browser front end.

The browser runs the landmark detector and sends one hand (or none) per frame
over a WebSocket. Every connection owns its own GestureProcessor, so sessions
never share confirmation state.
"""

import json
import logging
import time
from typing import Dict, List, Optional, Union

from fastapi import FastAPI, HTTPException, WebSocket, WebSocketDisconnect
from pydantic import BaseModel

from .classifier import GestureClassifier, gesture_catalog
from .config import Cfg, load_config
from .geometry import as_hand
from .gestures import GestureProcessor
from .types import ConfirmedGesture, GestureResult, HandShapeError

logger = logging.getLogger(__name__)


# Request/Response models
class LandmarkModel(BaseModel):
    x: float
    y: float
    z: Optional[float] = None


LandmarkInput = Union[List[float], LandmarkModel]


class ClassifyRequest(BaseModel):
    landmarks: List[LandmarkInput]


class GestureModel(BaseModel):
    name: str
    emoji: str
    action: str


class FeaturesModel(BaseModel):
    extended: List[bool]
    extended_count: int
    thumb_extended: bool
    thumb_pointing_up: bool
    thumb_index_distance: float


class ClassifyResponse(BaseModel):
    gesture: GestureModel
    features: FeaturesModel


def _gesture_payload(gesture: Optional[GestureResult]) -> Optional[Dict[str, str]]:
    if gesture is None:
        return None
    return {"name": gesture.name, "emoji": gesture.emoji, "action": gesture.action}


def _confirmed_payload(event: Optional[ConfirmedGesture]) -> Optional[Dict[str, object]]:
    if event is None:
        return None
    return {
        "name": event.name,
        "emoji": event.emoji,
        "action": event.action,
        "timestamp_ms": event.timestamp_ms,
    }


def _now_ms() -> float:
    return time.monotonic() * 1000.0


def create_app(cfg: Optional[Cfg] = None) -> FastAPI:
    """Build the FastAPI application."""
    cfg = cfg or load_config()

    app = FastAPI(
        title="Gesture Access",
        description="Hand gesture classification with frame confirmation and debounce",
        version="0.1.0",
    )
    app.state.cfg = cfg
    classifier = GestureClassifier(
        pinch_distance=cfg.gestures.pinch_distance,
        ok_distance=cfg.gestures.ok_distance,
    )

    # Active sessions, one processor per open WebSocket
    active_sessions: Dict[str, GestureProcessor] = {}
    app.state.active_sessions = active_sessions

    @app.get("/health")
    async def health():
        return {
            "status": "healthy",
            "active_sessions": len(active_sessions),
            "confirm_frames": cfg.gestures.confirm_frames,
            "debounce_ms": cfg.gestures.debounce_ms,
        }

    @app.get("/gestures")
    async def gestures():
        """Supported gestures in precedence order."""
        return {"gestures": gesture_catalog()}

    @app.post("/classify", response_model=ClassifyResponse)
    async def classify(request: ClassifyRequest):
        """Classify a single hand. Stateless, no confirmation."""
        try:
            hand = as_hand(request.landmarks)
        except HandShapeError as e:
            logger.warning(f"Rejected landmarks: {e}")
            raise HTTPException(status_code=422, detail=str(e))

        features = classifier.features(hand)
        gesture = classifier(hand)
        return ClassifyResponse(
            gesture=GestureModel(**_gesture_payload(gesture)),
            features=FeaturesModel(
                extended=list(features.extended),
                extended_count=features.extended_count,
                thumb_extended=features.thumb_extended,
                thumb_pointing_up=features.thumb_pointing_up,
                thumb_index_distance=features.thumb_index_distance,
            ),
        )

    @app.websocket("/ws/gestures/{session_id}")
    async def websocket_gestures(websocket: WebSocket, session_id: str):
        """WebSocket endpoint for per-frame landmarks of one detection session"""
        await websocket.accept()

        if session_id in active_sessions:
            await websocket.send_json({
                "type": "error",
                "message": f"Session {session_id} is already connected",
            })
            await websocket.close()
            return

        session = GestureProcessor(cfg)
        active_sessions[session_id] = session
        logger.info(f"🔌 Gesture session {session_id} connected ({len(active_sessions)} active)")
        await websocket.send_json({"type": "status", "connected": True, "session_id": session_id})

        try:
            while True:
                data = await websocket.receive_text()
                reply = _handle_message(session, data)
                await websocket.send_json(reply)

        except WebSocketDisconnect:
            logger.info(f"🔌 Gesture session {session_id} disconnected")
        finally:
            session.reset()
            active_sessions.pop(session_id, None)

    return app


def _handle_message(session: GestureProcessor, data: str) -> Dict[str, object]:
    """Apply one client message to a session and build the reply."""
    try:
        message = json.loads(data)
    except json.JSONDecodeError as e:
        return {"type": "error", "message": f"Invalid JSON: {e.msg}"}

    if not isinstance(message, dict):
        return {"type": "error", "message": "Message must be a JSON object"}

    msg_type = message.get("type")

    if msg_type == "reset":
        session.reset()
        return {"type": "reset", "ok": True}

    if msg_type == "frame":
        timestamp_ms = message.get("timestamp_ms")
        if timestamp_ms is None:
            timestamp_ms = _now_ms()
        elif isinstance(timestamp_ms, bool) or not isinstance(timestamp_ms, (int, float)):
            return {"type": "error", "message": "timestamp_ms must be a number"}

        try:
            raw, confirmed = session.process_frame(message.get("landmarks"), float(timestamp_ms))
        except HandShapeError as e:
            logger.warning(f"Rejected landmarks: {e}")
            return {"type": "error", "message": str(e)}

        return {
            "type": "frame",
            "raw": _gesture_payload(raw),
            "confirmed": _confirmed_payload(confirmed),
        }

    return {"type": "error", "message": f"Unknown message type: {msg_type!r}"}


def main():
    import uvicorn

    cfg = load_config()
    logging.basicConfig(level=getattr(logging, cfg.server.log_level.upper(), logging.INFO))

    logger.info(f"🚀 Starting Gesture Access server on http://{cfg.server.host}:{cfg.server.port}")
    logger.info(f"📚 API documentation available at http://localhost:{cfg.server.port}/docs")

    uvicorn.run(
        create_app(cfg),
        host=cfg.server.host,
        port=cfg.server.port,
        reload=False,
        log_level=cfg.server.log_level
    )


if __name__ == "__main__":
    main()
