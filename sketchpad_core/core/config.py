from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
import tomllib

from sketchpad_core.render.style import Color, StrokeStyle


PALETTE: dict[str, Color] = {
    "default": (176, 176, 176, 196),
    "green": (4, 251, 49, 161),
    "red": (251, 4, 4, 161),
    "blue": (4, 193, 251, 161),
}
MARKER_COLOR: Color = (153, 153, 153, 255)
DEFAULT_BACKGROUND: Color = (255, 255, 255, 255)


@dataclass(frozen=True)
class SketchConfig:
    palette_color: str = "default"
    stroke_width: int = 10
    marker_radius: int = 10
    marker_color: Color = MARKER_COLOR
    background: Color = DEFAULT_BACKGROUND
    min_point_distance: float = 0.0
    redraw_on_recalibrate: bool = True
    target_fps: int = 60

    def __post_init__(self) -> None:
        if self.palette_color not in PALETTE:
            raise ValueError(
                f"palette_color must be one of {sorted(PALETTE)}, got: {self.palette_color!r}"
            )
        if self.stroke_width <= 0:
            raise ValueError("stroke_width must be > 0")
        if self.marker_radius <= 0:
            raise ValueError("marker_radius must be > 0")
        if self.min_point_distance < 0:
            raise ValueError("min_point_distance must be >= 0")
        if self.target_fps <= 0:
            raise ValueError("target_fps must be > 0")

    def stroke_style(self) -> StrokeStyle:
        return StrokeStyle(color=PALETTE[self.palette_color], width=self.stroke_width)


def load_config(path: str | Path) -> SketchConfig:
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"config file not found: {config_path}")
    with config_path.open("rb") as f:
        raw = tomllib.load(f)
    return config_from_mapping(raw)


def config_from_mapping(raw: dict[str, object]) -> SketchConfig:
    known = {f.name for f in fields(SketchConfig)}
    unknown = sorted(set(raw) - known)
    if unknown:
        raise ValueError("unknown config keys: " + ", ".join(unknown))
    kwargs: dict[str, object] = {}
    if "palette_color" in raw:
        kwargs["palette_color"] = _coerce_str(raw["palette_color"], "palette_color")
    for name in ("stroke_width", "marker_radius", "target_fps"):
        if name in raw:
            kwargs[name] = _coerce_int(raw[name], name)
    if "min_point_distance" in raw:
        kwargs["min_point_distance"] = _coerce_float(raw["min_point_distance"], "min_point_distance")
    if "redraw_on_recalibrate" in raw:
        value = raw["redraw_on_recalibrate"]
        if not isinstance(value, bool):
            raise ValueError("redraw_on_recalibrate must be a boolean")
        kwargs["redraw_on_recalibrate"] = value
    for name in ("marker_color", "background"):
        if name in raw:
            kwargs[name] = _coerce_rgba(raw[name], name)
    return SketchConfig(**kwargs)  # type: ignore[arg-type]


def _coerce_str(value: object, field_name: str) -> str:
    if not isinstance(value, str):
        raise ValueError(f"{field_name} must be a string")
    return value


def _coerce_int(value: object, field_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{field_name} must be an integer")
    return value


def _coerce_float(value: object, field_name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{field_name} must be a number")
    return float(value)


def _coerce_rgba(value: object, field_name: str) -> Color:
    if isinstance(value, str):
        return _parse_hex_color(value, field_name)
    if (
        not isinstance(value, list)
        or len(value) != 4
        or any(isinstance(v, bool) or not isinstance(v, int) or v < 0 or v > 255 for v in value)
    ):
        raise ValueError(f"{field_name} must be #RRGGBB[AA] or a list of 4 uint8 ints")
    return (value[0], value[1], value[2], value[3])


def _parse_hex_color(value: str, field_name: str) -> Color:
    raw = value.strip()
    if not raw.startswith("#"):
        raise ValueError(f"{field_name} must be hex color, got: {value}")
    h = raw[1:]
    try:
        if len(h) == 6:
            return (int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16), 255)
        if len(h) == 8:
            return (int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16), int(h[6:8], 16))
    except ValueError as exc:
        raise ValueError(f"{field_name} has invalid hex digits: {value}") from exc
    raise ValueError(f"{field_name} must be #RRGGBB or #RRGGBBAA, got: {value}")
