"""
Type definitions for hand gesture recognition system.
"""
from dataclasses import dataclass
from typing import Literal, NamedTuple, Optional, Protocol, Sequence, runtime_checkable


class Landmark(NamedTuple):
    """One normalized hand landmark. x, y in [0..1], z is relative depth."""
    x: float
    y: float
    z: float = 0.0


# Exactly 21 landmarks, MediaPipe Hands index order
Hand = Sequence[Landmark]

HAND_LANDMARK_COUNT = 21

# MediaPipe hand landmark indices. Shared contract with the detector, never renumber.
WRIST = 0
THUMB_MCP = 2
THUMB_IP = 3
THUMB_TIP = 4
INDEX_MCP = 5
INDEX_PIP = 6
INDEX_TIP = 8
MIDDLE_MCP = 9
MIDDLE_PIP = 10
MIDDLE_TIP = 12
RING_MCP = 13
RING_PIP = 14
RING_TIP = 16
PINKY_MCP = 17
PINKY_PIP = 18
PINKY_TIP = 20

FINGER_TIPS = (INDEX_TIP, MIDDLE_TIP, RING_TIP, PINKY_TIP)
FINGER_PIPS = (INDEX_PIP, MIDDLE_PIP, RING_PIP, PINKY_PIP)


GestureAction = Literal[
    "stop",
    "confirm",
    "reject",
    "start",
    "zoom",
    "toggle-theme",
    "scroll",
    "point",
    "scroll-up",
    "prev-section",
    "next-section",
    "top",
    "bottom",
    "none",
]

GESTURE_ACTIONS = (
    "stop",
    "confirm",
    "reject",
    "start",
    "zoom",
    "toggle-theme",
    "scroll",
    "point",
    "scroll-up",
    "prev-section",
    "next-section",
    "top",
    "bottom",
    "none",
)


class HandShapeError(ValueError):
    """Landmark input does not describe a single 21-point hand."""


@dataclass(frozen=True)
class GestureResult:
    """Raw per-frame classification of one hand."""
    name: str
    emoji: str
    action: GestureAction

    @property
    def is_unknown(self) -> bool:
        return self.action == "none"


@dataclass(frozen=True)
class ConfirmedGesture:
    """A gesture that passed frame confirmation and debounce."""
    name: str
    emoji: str
    action: GestureAction
    timestamp_ms: float

    @property
    def label(self) -> str:
        return self.name


@dataclass(frozen=True)
class ConfirmationState:
    """Snapshot of a confirmer's internal state."""
    recent_labels: tuple
    confirmed_label: Optional[str]
    last_emitted_label: Optional[str]
    last_emitted_at_ms: Optional[float]


ScrollEdge = Literal["top", "bottom"]


@runtime_checkable
class ControllerProto(Protocol):
    """Abstract protocol for controllers that execute gesture actions."""

    async def scroll(self, dy_px: int) -> None:
        """Scroll the page by a pixel delta (positive is down)."""
        ...

    async def scroll_to(self, edge: ScrollEdge) -> None:
        """Jump to the top or bottom of the page."""
        ...

    async def focus_section(self, section_id: str) -> None:
        """Bring the named page section into view."""
        ...

    async def set_theme(self, theme: str) -> None:
        """Apply a display theme."""
        ...

    async def go_back(self) -> None:
        """Navigate back in history."""
        ...

    async def stop_audio(self) -> None:
        """Stop all running audio features."""
        ...

    async def start_active_tool(self) -> None:
        """Start the tool of the section currently in view."""
        ...

    async def show_status(self, message: str) -> None:
        """Show a short status message to the user."""
        ...
