"""
Maps confirmed gestures onto controller actions.
"""
import asyncio
import logging
from collections import Counter
from typing import Optional

from .config import Cfg
from .types import ConfirmedGesture, ControllerProto

logger = logging.getLogger(__name__)


class GestureActionDispatcher:
    """
    Consumer side of the gesture pipeline.

    Keeps the small amount of UI state the actions need (current section,
    current theme) and usage counts per gesture.
    """

    def __init__(self, controller: ControllerProto, cfg: Cfg):
        self.controller = controller
        self.scroll_step_px = cfg.dispatch.scroll_step_px
        self.sections = list(cfg.dispatch.sections)
        self.themes = list(cfg.dispatch.themes)

        self.section_index = 0
        self.theme_index = 0
        self.gesture_counts: Counter = Counter()
        self.last_status: Optional[str] = None

    @property
    def current_section(self) -> str:
        return self.sections[self.section_index]

    @property
    def current_theme(self) -> str:
        return self.themes[self.theme_index]

    async def dispatch(self, event: ConfirmedGesture) -> None:
        """Execute the action bound to a confirmed gesture."""
        action = event.action
        if action == "none":
            return

        status = f"{event.emoji} {event.name}"

        if action == "stop":
            status = f"{event.emoji} Stop/Pause detected!"
            await self.controller.stop_audio()
        elif action == "start":
            status = f"{event.emoji} Start detected for {self.current_section}"
            await self.controller.start_active_tool()
        elif action == "confirm":
            status = f"{event.emoji} Confirmed!"
        elif action == "reject":
            status = f"{event.emoji} Rejected / Go back!"
            await self.controller.go_back()
        elif action == "scroll":
            status = f"{event.emoji} Scrolling down..."
            await self.controller.scroll(self.scroll_step_px)
        elif action == "scroll-up":
            status = f"{event.emoji} Scrolling up..."
            await self.controller.scroll(-self.scroll_step_px)
        elif action == "top":
            status = f"{event.emoji} Going to top..."
            await self.controller.scroll_to("top")
        elif action == "bottom":
            status = f"{event.emoji} Going to bottom..."
            await self.controller.scroll_to("bottom")
        elif action == "point":
            status = f"{event.emoji} Pointing detected!"
        elif action == "zoom":
            status = f"{event.emoji} Pinch - Zoom / Focus!"
        elif action == "next-section":
            self.section_index = (self.section_index + 1) % len(self.sections)
            status = f"{event.emoji} Next section: {self.current_section}"
            await self.controller.focus_section(self.current_section)
        elif action == "prev-section":
            self.section_index = (self.section_index - 1) % len(self.sections)
            status = f"{event.emoji} Previous section: {self.current_section}"
            await self.controller.focus_section(self.current_section)
        elif action == "toggle-theme":
            self.theme_index = (self.theme_index + 1) % len(self.themes)
            status = f"{event.emoji} Theme: {self.current_theme}"
            await self.controller.set_theme(self.current_theme)
        else:
            logger.warning("No handler for gesture action %r", action)
            return

        self.gesture_counts[event.name] += 1
        self.last_status = status
        await self.controller.show_status(status)

    async def run(self, queue: "asyncio.Queue[Optional[ConfirmedGesture]]") -> None:
        """
        Consume confirmed gestures until a None sentinel arrives.

        A failing controller call is logged and the loop keeps going.
        """
        while True:
            event = await queue.get()
            try:
                if event is None:
                    logger.info("Dispatcher stopping")
                    return
                await self.dispatch(event)
            except Exception as e:
                logger.error(f"❌ Failed to execute {event.action if event else None}: {e}")
            finally:
                queue.task_done()
