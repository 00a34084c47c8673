from __future__ import annotations

from typing import TYPE_CHECKING

from .capture import PointerCapture
from .events import EventKind, SurfaceEvent
from .frame_scheduler import FrameScheduler

if TYPE_CHECKING:
    from sketchpad_core.targets.base import EventHandler, EventSubscriber


class InputRouter:
    """Registers one typed handler per event kind with a host event subscriber."""

    def __init__(self, capture: PointerCapture, scheduler: FrameScheduler) -> None:
        self._capture = capture
        self._scheduler = scheduler
        self._attached = False

    def handlers(self) -> dict[EventKind, "EventHandler"]:
        return {
            "pointer_down": self._on_pointer_down,
            "pointer_move": self._on_pointer_move,
            "pointer_up": self._on_pointer_up,
            "resize": self._scheduler.on_resize,
            "key_press": self._scheduler.on_key,
        }

    def attach(self, subscriber: "EventSubscriber") -> None:
        if self._attached:
            raise RuntimeError("input router is already attached")
        for kind, handler in self.handlers().items():
            subscriber.add_listener(kind, handler)
        self._attached = True

    def _on_pointer_down(self, event: SurfaceEvent) -> None:
        self._capture.pointer_down(event)

    def _on_pointer_move(self, event: SurfaceEvent) -> None:
        self._capture.pointer_move(event)

    def _on_pointer_up(self, event: SurfaceEvent) -> None:
        self._capture.pointer_up(event)
