from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional


EventKind = Literal[
    "pointer_down",
    "pointer_move",
    "pointer_up",
    "resize",
    "key_press",
]

POINTER_KINDS: tuple[EventKind, ...] = ("pointer_down", "pointer_move", "pointer_up")
ALL_EVENT_KINDS: tuple[EventKind, ...] = ("pointer_down", "pointer_move", "pointer_up", "resize", "key_press")

# Touch sources deliver the same gesture shape as a mouse; cancel ends the gesture.
TOUCH_EVENT_ALIASES: dict[str, EventKind] = {
    "touchstart": "pointer_down",
    "touchmove": "pointer_move",
    "touchend": "pointer_up",
    "touchcancel": "pointer_up",
    "mousedown": "pointer_down",
    "mousemove": "pointer_move",
    "mouseup": "pointer_up",
}

ENTER_KEY = "Enter"


@dataclass(frozen=True)
class SurfaceEvent:
    """Minimal host event shape consumed by the drawing core."""

    kind: EventKind
    x: Optional[float] = None
    y: Optional[float] = None
    key: Optional[str] = None

    def position(self) -> tuple[float, float]:
        if self.x is None or self.y is None:
            raise ValueError(f"{self.kind} event carries no position")
        return (float(self.x), float(self.y))


def pointer_event(kind: EventKind, x: float, y: float) -> SurfaceEvent:
    if kind not in POINTER_KINDS:
        raise ValueError(f"not a pointer event kind: {kind}")
    return SurfaceEvent(kind=kind, x=float(x), y=float(y))


def resize_event() -> SurfaceEvent:
    return SurfaceEvent(kind="resize")


def key_event(key: str) -> SurfaceEvent:
    return SurfaceEvent(kind="key_press", key=key)


def normalize_event_kind(raw: str) -> EventKind:
    """Map a host event name (including mouse/touch DOM names) onto an EventKind."""

    name = raw.strip()
    if name in ALL_EVENT_KINDS:
        return name  # type: ignore[return-value]
    alias = TOUCH_EVENT_ALIASES.get(name.lower())
    if alias is None:
        raise ValueError(f"unsupported event kind: {raw}")
    return alias
