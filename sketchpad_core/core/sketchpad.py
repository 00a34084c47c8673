from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .capture import PointerCapture
from .config import SketchConfig
from .frame_scheduler import FrameScheduler
from .input_router import InputRouter
from .session import DrawingSession
from .stroke_renderer import IncrementalRenderer

if TYPE_CHECKING:
    from sketchpad_core.targets.base import EventSubscriber, FrameRequester, HostSurface


@dataclass(frozen=True)
class Sketchpad:
    session: DrawingSession
    capture: PointerCapture
    renderer: IncrementalRenderer
    scheduler: FrameScheduler
    router: InputRouter

    def start(self) -> None:
        self.scheduler.start()


def build_sketchpad(
    surface: "HostSurface",
    frames: "FrameRequester",
    events: "EventSubscriber",
    config: SketchConfig | None = None,
    *,
    start: bool = True,
) -> Sketchpad:
    """Wire capture, render and scheduling around one session and attach to the host."""
    session = DrawingSession(config=config or SketchConfig())
    capture = PointerCapture(session, surface)
    renderer = IncrementalRenderer(
        surface,
        session.config.stroke_style(),
        marker_radius=session.config.marker_radius,
        marker_color=session.config.marker_color,
    )
    scheduler = FrameScheduler(session, surface, renderer, frames)
    router = InputRouter(capture, scheduler)
    router.attach(events)
    pad = Sketchpad(session=session, capture=capture, renderer=renderer, scheduler=scheduler, router=router)
    if start:
        pad.start()
    return pad
