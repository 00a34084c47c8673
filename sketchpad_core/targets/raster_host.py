from __future__ import annotations

from collections import deque
import logging
import math
import time
from typing import Callable

import numpy as np
import torch

from sketchpad_core.core.events import ALL_EVENT_KINDS, EventKind, SurfaceEvent, resize_event
from sketchpad_core.core.frame_pacing import FramePacer
from sketchpad_core.render.raster import draw_line, fill_circle, new_canvas
from sketchpad_core.render.style import Color, StrokeStyle

from .base import DisplayFrame, EventHandler, FrameCallback, HostSurface

LOGGER = logging.getLogger(__name__)


class RasterHost(HostSurface):
    """Headless host: numpy-backed surface, manual frame pump and synchronous event dispatch.

    Every drawing-surface call is appended to `calls` as a tuple so callers can
    inspect exactly what a render pass issued.
    """

    def __init__(
        self,
        width: float,
        height: float,
        *,
        left: float = 0.0,
        top: float = 0.0,
        device_pixel_ratio: float | None = 1.0,
        background: Color = (255, 255, 255, 255),
    ) -> None:
        if width < 0 or height < 0:
            raise ValueError("width and height must be >= 0")
        self._logical = (float(width), float(height))
        self._offset = (float(left), float(top))
        self._dpr = device_pixel_ratio
        self._background = background
        self._canvas = new_canvas(0, 0, background)
        self._cursor: tuple[int, int] | None = None
        self._path: list[tuple[int, int, int, int]] = []
        self._frames: deque[FrameCallback] = deque()
        self._listeners: dict[EventKind, list[EventHandler]] = {kind: [] for kind in ALL_EVENT_KINDS}
        self._revision = 0
        self._last_error: Exception | None = None
        self.calls: list[tuple[object, ...]] = []

    # HostSurface

    def logical_size(self) -> tuple[float, float]:
        return self._logical

    def client_offset(self) -> tuple[float, float]:
        return self._offset

    def device_pixel_ratio(self) -> float | None:
        return self._dpr

    def backing_size(self) -> tuple[int, int]:
        h, w, _ = self._canvas.shape
        return (int(w), int(h))

    def set_backing_size(self, width: int, height: int) -> None:
        if width < 0 or height < 0:
            raise ValueError("backing size must be >= 0")
        self.calls.append(("set_backing_size", width, height))
        self._canvas = new_canvas(width, height, self._background)
        self._cursor = None
        self._path = []
        self._revision += 1

    def begin_path(self) -> None:
        self.calls.append(("begin_path",))
        self._path = []

    def move_to(self, x: float, y: float) -> None:
        self.calls.append(("move_to", x, y))
        self._cursor = (_px(x), _px(y))

    def line_to(self, x: float, y: float) -> None:
        self.calls.append(("line_to", x, y))
        end = (_px(x), _px(y))
        if self._cursor is not None:
            self._path.append((self._cursor[0], self._cursor[1], end[0], end[1]))
        self._cursor = end

    def stroke(self, style: StrokeStyle) -> None:
        self.calls.append(("stroke", style))
        for x0, y0, x1, y1 in self._path:
            draw_line(self._canvas, x0, y0, x1, y1, style.color, width=style.width)
        self._revision += 1

    def fill_circle(self, x: float, y: float, radius: float, color: Color) -> None:
        self.calls.append(("fill_circle", x, y, radius, color))
        fill_circle(self._canvas, _px(x), _px(y), _px(radius), color)
        self._revision += 1

    # FrameRequester

    def request_frame(self, callback: FrameCallback) -> None:
        self._frames.append(callback)

    def pending_frames(self) -> int:
        return len(self._frames)

    def run_frames(self, count: int = 1) -> int:
        """Run `count` display refreshes; callbacks requested during a refresh wait for the next one."""
        if count < 0:
            raise ValueError("count must be >= 0")
        ran = 0
        for _ in range(count):
            batch = list(self._frames)
            self._frames.clear()
            for callback in batch:
                ran += 1
                try:
                    callback()
                except Exception as exc:  # noqa: BLE001
                    self._last_error = exc
                    LOGGER.exception("frame callback failed: %s", exc)
        return ran

    def run_paced(
        self,
        count: int,
        pacer: FramePacer,
        *,
        clock: Callable[[], float] = time.perf_counter,
        sleep: Callable[[float], None] = time.sleep,
    ) -> int:
        """Like `run_frames`, but holds each refresh to the pacer's cadence."""
        if count < 0:
            raise ValueError("count must be >= 0")
        ran = 0
        for _ in range(count):
            started = clock()
            ran += self.run_frames(1)
            delay = pacer.compute_sleep(started, clock())
            if delay > 0:
                sleep(delay)
        return ran

    # EventSubscriber

    def add_listener(self, kind: EventKind, handler: EventHandler) -> None:
        if kind not in self._listeners:
            raise ValueError(f"unsupported event kind: {kind}")
        self._listeners[kind].append(handler)

    def dispatch(self, event: SurfaceEvent) -> None:
        for handler in list(self._listeners[event.kind]):
            try:
                handler(event)
            except Exception as exc:  # noqa: BLE001
                self._last_error = exc
                LOGGER.exception("%s handler failed: %s", event.kind, exc)

    def resize(self, width: float, height: float, *, left: float | None = None, top: float | None = None) -> None:
        if width < 0 or height < 0:
            raise ValueError("width and height must be >= 0")
        self._logical = (float(width), float(height))
        if left is not None or top is not None:
            cur_left, cur_top = self._offset
            self._offset = (
                cur_left if left is None else float(left),
                cur_top if top is None else float(top),
            )
        self.dispatch(resize_event())

    def set_device_pixel_ratio(self, ratio: float | None) -> None:
        self._dpr = ratio
        self.dispatch(resize_event())

    # Inspection

    @property
    def last_error(self) -> Exception | None:
        return self._last_error

    @property
    def revision(self) -> int:
        return self._revision

    def count_calls(self, name: str) -> int:
        return sum(1 for call in self.calls if call[0] == name)

    def clear_calls(self) -> None:
        self.calls.clear()

    def pixel(self, x: int, y: int) -> Color:
        r, g, b, a = (int(v) for v in self._canvas[y, x])
        return (r, g, b, a)

    def pixels(self) -> np.ndarray:
        return self._canvas.copy()

    def snapshot(self) -> DisplayFrame:
        w, h = self.backing_size()
        return DisplayFrame(
            revision=self._revision,
            width=w,
            height=h,
            rgba=torch.from_numpy(self._canvas.copy()),
        )


def _px(value: float) -> int:
    if not math.isfinite(value):
        return 0
    return int(round(value))
