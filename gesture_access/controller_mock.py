"""
Mock controller implementation for testing gesture actions.
"""
import logging
from collections import Counter
from typing import List, Optional

from .types import ScrollEdge

logger = logging.getLogger(__name__)


class MockController:
    """Mock controller that logs actions instead of executing them."""

    def __init__(self):
        """Initialize the mock controller."""
        self.calls: Counter = Counter()
        self.scroll_total_px = 0
        self.last_edge: Optional[ScrollEdge] = None
        self.section: Optional[str] = None
        self.theme: Optional[str] = None
        self.statuses: List[str] = []

    async def scroll(self, dy_px: int) -> None:
        self.calls["scroll"] += 1
        self.scroll_total_px += dy_px
        logger.info(f"[MockController] Scroll: dy_px={dy_px} (call #{self.calls['scroll']})")

    async def scroll_to(self, edge: ScrollEdge) -> None:
        self.calls["scroll_to"] += 1
        self.last_edge = edge
        logger.info(f"[MockController] Scroll to {edge}")

    async def focus_section(self, section_id: str) -> None:
        self.calls["focus_section"] += 1
        self.section = section_id
        logger.info(f"[MockController] Focus section: {section_id}")

    async def set_theme(self, theme: str) -> None:
        self.calls["set_theme"] += 1
        self.theme = theme
        logger.info(f"[MockController] Theme: {theme}")

    async def go_back(self) -> None:
        self.calls["go_back"] += 1
        logger.info("[MockController] History back")

    async def stop_audio(self) -> None:
        self.calls["stop_audio"] += 1
        logger.info("[MockController] Stop audio features")

    async def start_active_tool(self) -> None:
        self.calls["start_active_tool"] += 1
        logger.info("[MockController] Start active tool")

    async def show_status(self, message: str) -> None:
        self.statuses.append(message)
        logger.info(f"[MockController] Status: {message}")

    def reset_counters(self) -> None:
        """Reset action counters for testing."""
        self.calls.clear()
        self.scroll_total_px = 0
        self.statuses.clear()
