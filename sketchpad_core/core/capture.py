from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .calibration import resolve_density
from .events import SurfaceEvent
from .segments import CapturedPoint, Point
from .session import DrawingSession

if TYPE_CHECKING:
    from sketchpad_core.targets.base import HostSurface

LOGGER = logging.getLogger(__name__)


class PointerCapture:
    """Turns pointer down/move/up events into segments on the session store.

    With a surface attached, client offset and density are read from it on every
    event; otherwise the session's last calibration is used.
    """

    def __init__(self, session: DrawingSession, surface: "HostSurface | None" = None) -> None:
        self._session = session
        self._surface = surface

    @property
    def active(self) -> bool:
        return self._session.pointer_active

    def to_surface_point(self, client_x: float, client_y: float) -> Point:
        left, top, density = self._geometry()
        x = round((client_x - left) * density)
        y = round((client_y - top) * density)
        return Point(int(x), int(y))

    def pointer_down(self, event: SurfaceEvent) -> CapturedPoint:
        self._session.pointer_active = True
        self._session.start_new_segment = True
        return self._register(self._point_for(event))

    def pointer_move(self, event: SurfaceEvent) -> CapturedPoint | None:
        if not self._session.pointer_active:
            return None
        point = self._point_for(event)
        if self._too_close(point):
            return None
        return self._register(point)

    def pointer_up(self, event: SurfaceEvent) -> CapturedPoint:
        self._session.pointer_active = False
        return self._register(self._point_for(event))

    def _point_for(self, event: SurfaceEvent) -> Point:
        x, y = event.position()
        return self.to_surface_point(x, y)

    def _register(self, point: Point) -> CapturedPoint:
        store = self._session.store
        if self._session.start_new_segment:
            segment = store.begin_segment(point)
            self._session.start_new_segment = False
            LOGGER.debug("segment %d started at (%d, %d)", len(store) - 1, point.x, point.y)
            return segment.points[0]
        return store.add_point(point)

    def _too_close(self, point: Point) -> bool:
        threshold = self._session.config.min_point_distance
        if threshold <= 0:
            return False
        segment = self._session.store.current_segment()
        if segment is None:
            return False
        last = segment.last_point()
        if last is None:
            return False
        return point.distance_to(last) < threshold * self._geometry()[2]

    def _geometry(self) -> tuple[float, float, float]:
        if self._surface is None:
            cal = self._session.calibration
            return (cal.left, cal.top, cal.density)
        left, top = self._surface.client_offset()
        return (float(left), float(top), resolve_density(self._surface.device_pixel_ratio()))

