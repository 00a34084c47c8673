from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable

from .calibration import CalibrationState, calibrate
from .events import ENTER_KEY, SurfaceEvent
from .session import DrawingSession
from .stroke_renderer import IncrementalRenderer, RenderStats

if TYPE_CHECKING:
    from sketchpad_core.targets.base import FrameRequester, HostSurface

LOGGER = logging.getLogger(__name__)


class FrameScheduler:
    """Host-driven tick loop: at most one recalibration, then one render, per refresh.

    There is no stop path; once started the scheduler re-registers itself on
    every tick for the lifetime of the host.
    """

    def __init__(
        self,
        session: DrawingSession,
        surface: "HostSurface",
        renderer: IncrementalRenderer,
        frames: "FrameRequester",
        *,
        calibrator: Callable[["HostSurface"], CalibrationState] = calibrate,
    ) -> None:
        self._session = session
        self._surface = surface
        self._renderer = renderer
        self._frames = frames
        self._calibrator = calibrator
        self._started = False
        self._tick_count = 0
        self._calibration_count = 0
        self._last_stats: RenderStats | None = None

    @property
    def session(self) -> DrawingSession:
        return self._session

    @property
    def needs_recalibration(self) -> bool:
        return self._session.needs_recalibration

    @property
    def tick_count(self) -> int:
        return self._tick_count

    @property
    def calibration_count(self) -> int:
        return self._calibration_count

    @property
    def last_stats(self) -> RenderStats | None:
        return self._last_stats

    def start(self) -> None:
        if self._started:
            return
        self._started = True
        self.request_recalibration()
        self._frames.request_frame(self.tick)
        LOGGER.info("frame scheduler started")

    def request_recalibration(self) -> None:
        self._session.needs_recalibration = True

    def on_resize(self, event: SurfaceEvent) -> None:
        _ = event
        self.request_recalibration()

    def on_key(self, event: SurfaceEvent) -> None:
        if event.key == ENTER_KEY:
            LOGGER.debug("manual recalibration requested")
            self.request_recalibration()

    def tick(self) -> None:
        self._tick_count += 1
        session = self._session
        try:
            if session.needs_recalibration:
                session.calibration = self._calibrator(self._surface)
                session.needs_recalibration = False
                self._calibration_count += 1
                if session.config.redraw_on_recalibrate:
                    reset = session.store.mark_all_undrawn()
                    if reset:
                        LOGGER.debug("recalibration cleared surface; %d points queued for redraw", reset)
            self._last_stats = self._renderer.render(session.store)
        finally:
            self._frames.request_frame(self.tick)
