from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Protocol

import torch

from sketchpad_core.core.events import EventKind, SurfaceEvent
from sketchpad_core.render.style import Color, StrokeStyle

FrameCallback = Callable[[], None]
EventHandler = Callable[[SurfaceEvent], None]


@dataclass(frozen=True)
class DisplayFrame:
    revision: int
    width: int
    height: int
    rgba: torch.Tensor


class HostSurface(ABC):
    """Mutable 2-D raster target the drawing core renders into."""

    @abstractmethod
    def logical_size(self) -> tuple[float, float]:
        raise NotImplementedError

    @abstractmethod
    def client_offset(self) -> tuple[float, float]:
        raise NotImplementedError

    @abstractmethod
    def device_pixel_ratio(self) -> float | None:
        raise NotImplementedError

    @abstractmethod
    def backing_size(self) -> tuple[int, int]:
        raise NotImplementedError

    @abstractmethod
    def set_backing_size(self, width: int, height: int) -> None:
        """Resize the backing store. Previously drawn pixels are discarded."""
        raise NotImplementedError

    @abstractmethod
    def begin_path(self) -> None:
        raise NotImplementedError

    @abstractmethod
    def move_to(self, x: float, y: float) -> None:
        raise NotImplementedError

    @abstractmethod
    def line_to(self, x: float, y: float) -> None:
        raise NotImplementedError

    @abstractmethod
    def stroke(self, style: StrokeStyle) -> None:
        raise NotImplementedError

    @abstractmethod
    def fill_circle(self, x: float, y: float, radius: float, color: Color) -> None:
        raise NotImplementedError


class FrameRequester(Protocol):
    def request_frame(self, callback: FrameCallback) -> None:
        """Invoke `callback` once, at or before the next display refresh."""
        ...


class EventSubscriber(Protocol):
    def add_listener(self, kind: EventKind, handler: EventHandler) -> None:
        ...


class RenderTarget(ABC):
    @abstractmethod
    def start(self) -> None:
        raise NotImplementedError

    @abstractmethod
    def present_frame(self, frame: DisplayFrame) -> None:
        raise NotImplementedError

    @abstractmethod
    def stop(self) -> None:
        raise NotImplementedError
