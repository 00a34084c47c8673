from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import TYPE_CHECKING

from sketchpad_core.render.style import Color, StrokeStyle

from .segments import Point, SegmentStore

if TYPE_CHECKING:
    from sketchpad_core.targets.base import HostSurface

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderStats:
    points_visited: int
    points_committed: int
    lines_stroked: int


class IncrementalRenderer:
    """Draws only the stroke pieces whose end point is not yet marked drawn.

    Already-drawn points are skipped in O(1) each, so a frame with no new input
    issues no stroke calls. A single-point segment is never stroked. The centre
    reference marker is a static overlay and is drawn on every pass.
    """

    def __init__(
        self,
        surface: "HostSurface",
        style: StrokeStyle,
        *,
        marker_radius: int = 10,
        marker_color: Color = (153, 153, 153, 255),
    ) -> None:
        if marker_radius <= 0:
            raise ValueError("marker_radius must be > 0")
        self._surface = surface
        self._style = style
        self._marker_radius = marker_radius
        self._marker_color = marker_color

    @property
    def style(self) -> StrokeStyle:
        return self._style

    def render(self, store: SegmentStore) -> RenderStats:
        visited = 0
        committed = 0
        stroked = 0
        for segment in store:
            last: Point | None = None
            for index, captured in enumerate(segment):
                visited += 1
                point = captured.point
                if captured.drawn:
                    last = point
                    continue
                if index == 0 or last is None:
                    self._surface.move_to(point.x, point.y)
                elif point != last:
                    self._stroke_line(last, point)
                    stroked += 1
                captured.drawn = True
                committed += 1
                last = point
        self._draw_marker()
        if committed:
            LOGGER.debug("render committed %d points, stroked %d lines", committed, stroked)
        return RenderStats(points_visited=visited, points_committed=committed, lines_stroked=stroked)

    def _stroke_line(self, start: Point, end: Point) -> None:
        surface = self._surface
        surface.begin_path()
        surface.move_to(start.x, start.y)
        surface.line_to(end.x, end.y)
        surface.stroke(self._style)

    def _draw_marker(self) -> None:
        width, height = self._surface.backing_size()
        self._surface.fill_circle(width * 0.5, height * 0.5, self._marker_radius, self._marker_color)
