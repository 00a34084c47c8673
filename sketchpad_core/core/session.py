from __future__ import annotations

from dataclasses import dataclass, field

from .calibration import UNCALIBRATED, CalibrationState
from .config import SketchConfig
from .segments import SegmentStore


@dataclass
class DrawingSession:
    """All mutable drawing state for one surface, shared by capture, render and scheduling."""

    config: SketchConfig = field(default_factory=SketchConfig)
    store: SegmentStore = field(default_factory=SegmentStore)
    calibration: CalibrationState = UNCALIBRATED
    needs_recalibration: bool = True
    pointer_active: bool = False
    start_new_segment: bool = True
