from __future__ import annotations

from dataclasses import dataclass
import json
import logging
from pathlib import Path
from typing import Protocol

from .events import POINTER_KINDS, SurfaceEvent, key_event, normalize_event_kind, pointer_event

LOGGER = logging.getLogger(__name__)

STEP_KINDS = ("pointer", "key", "resize", "density", "frame")


@dataclass(frozen=True)
class ScriptStep:
    """One scripted host action: an input event, a host change, or frame pumping."""

    kind: str
    event: SurfaceEvent | None = None
    width: float | None = None
    height: float | None = None
    left: float | None = None
    top: float | None = None
    density: float | None = None
    count: int = 1


@dataclass(frozen=True)
class ReplayResult:
    events_dispatched: int
    frames_run: int


class ReplayHost(Protocol):
    def dispatch(self, event: SurfaceEvent) -> None:
        ...

    def resize(self, width: float, height: float, *, left: float | None = None, top: float | None = None) -> None:
        ...

    def set_device_pixel_ratio(self, ratio: float | None) -> None:
        ...

    def run_frames(self, count: int = 1) -> int:
        ...


def load_script(path: str | Path) -> list[ScriptStep]:
    script_path = Path(path)
    if not script_path.exists():
        raise FileNotFoundError(f"gesture script not found: {script_path}")
    try:
        raw = json.loads(script_path.read_text())
    except json.JSONDecodeError as exc:
        raise ValueError(f"invalid gesture script JSON: {script_path}") from exc
    return parse_script(raw)


def parse_script(raw: object) -> list[ScriptStep]:
    if not isinstance(raw, list):
        raise ValueError("gesture script must be a JSON list of steps")
    return [_parse_step(item, index) for index, item in enumerate(raw)]


def replay(steps: list[ScriptStep], host: ReplayHost) -> ReplayResult:
    events = 0
    frames = 0
    for step in steps:
        if step.kind == "frame":
            host.run_frames(step.count)
            frames += step.count
        elif step.kind == "resize":
            assert step.width is not None and step.height is not None
            host.resize(step.width, step.height, left=step.left, top=step.top)
            events += 1
        elif step.kind == "density":
            host.set_device_pixel_ratio(step.density)
            events += 1
        else:
            assert step.event is not None
            host.dispatch(step.event)
            events += 1
    LOGGER.info("replayed %d steps: events=%d frames=%d", len(steps), events, frames)
    return ReplayResult(events_dispatched=events, frames_run=frames)


def _parse_step(item: object, index: int) -> ScriptStep:
    if not isinstance(item, dict):
        raise ValueError(f"step {index}: must be an object")
    raw_kind = item.get("kind")
    if not isinstance(raw_kind, str) or not raw_kind.strip():
        raise ValueError(f"step {index}: `kind` must be a non-empty string")
    kind = raw_kind.strip()
    if kind == "frame":
        count = item.get("count", 1)
        if isinstance(count, bool) or not isinstance(count, int) or count <= 0:
            raise ValueError(f"step {index}: frame `count` must be an integer > 0")
        return ScriptStep(kind="frame", count=count)
    if kind == "resize":
        return ScriptStep(
            kind="resize",
            width=_require_number(item, "width", index),
            height=_require_number(item, "height", index),
            left=_optional_number(item, "left", index),
            top=_optional_number(item, "top", index),
        )
    if kind == "density":
        return ScriptStep(kind="density", density=_optional_number(item, "ratio", index))
    if kind in ("key", "key_press"):
        key = item.get("key")
        if not isinstance(key, str) or not key:
            raise ValueError(f"step {index}: `key` must be a non-empty string")
        return ScriptStep(kind="key", event=key_event(key))
    try:
        event_kind = normalize_event_kind(kind)
    except ValueError as exc:
        raise ValueError(f"step {index}: unknown kind `{kind}`; expected one of {STEP_KINDS} or a pointer kind") from exc
    if event_kind not in POINTER_KINDS:
        raise ValueError(f"step {index}: `{kind}` must be scripted as a `{event_kind}` step")
    x = _require_number(item, "x", index)
    y = _require_number(item, "y", index)
    return ScriptStep(kind="pointer", event=pointer_event(event_kind, x, y))


def _require_number(item: dict[str, object], name: str, index: int) -> float:
    value = _optional_number(item, name, index)
    if value is None:
        raise ValueError(f"step {index}: missing required field `{name}`")
    return value


def _optional_number(item: dict[str, object], name: str, index: int) -> float | None:
    if name not in item or item[name] is None:
        return None
    value = item[name]
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"step {index}: `{name}` must be a number")
    return float(value)
