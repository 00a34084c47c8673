from __future__ import annotations

from dataclasses import dataclass
import logging
import math
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sketchpad_core.targets.base import HostSurface

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class CalibrationState:
    """Logical surface geometry plus the host pixel-density factor."""

    logical_width: float
    logical_height: float
    left: float
    top: float
    density: float

    @property
    def pixel_width(self) -> int:
        return int(self.logical_width * self.density)

    @property
    def pixel_height(self) -> int:
        return int(self.logical_height * self.density)

    def center(self) -> tuple[float, float]:
        return (self.pixel_width * 0.5, self.pixel_height * 0.5)


UNCALIBRATED = CalibrationState(logical_width=0.0, logical_height=0.0, left=0.0, top=0.0, density=1.0)


def resolve_density(raw: float | None) -> float:
    if raw is None:
        return 1.0
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return 1.0
    if not math.isfinite(value) or value <= 0:
        return 1.0
    return value


def calibrate(surface: "HostSurface") -> CalibrationState:
    """Size the backing store to logical size times density; clears drawn pixels."""
    raw_density = surface.device_pixel_ratio()
    density = resolve_density(raw_density)
    if density != raw_density:
        LOGGER.debug("device pixel ratio unavailable (%r); using %.1f", raw_density, density)
    width, height = surface.logical_size()
    left, top = surface.client_offset()
    state = CalibrationState(
        logical_width=max(0.0, float(width)),
        logical_height=max(0.0, float(height)),
        left=float(left),
        top=float(top),
        density=density,
    )
    surface.set_backing_size(state.pixel_width, state.pixel_height)
    LOGGER.debug(
        "calibrated surface: logical=%.1fx%.1f density=%.2f backing=%dx%d",
        state.logical_width,
        state.logical_height,
        density,
        state.pixel_width,
        state.pixel_height,
    )
    return state
