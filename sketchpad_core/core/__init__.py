from .calibration import UNCALIBRATED, CalibrationState, calibrate, resolve_density
from .capture import PointerCapture
from .config import PALETTE, SketchConfig, config_from_mapping, load_config
from .events import (
    ALL_EVENT_KINDS,
    ENTER_KEY,
    POINTER_KINDS,
    EventKind,
    SurfaceEvent,
    key_event,
    normalize_event_kind,
    pointer_event,
    resize_event,
)
from .frame_pacing import FramePacer
from .frame_scheduler import FrameScheduler
from .input_router import InputRouter
from .module_runner import EntryPoint, ModuleManifest, ModuleRunner, TickModule, load_module_manifest, load_tick_module
from .replay import ReplayResult, ScriptStep, load_script, parse_script, replay
from .segments import CapturedPoint, Point, Segment, SegmentStore
from .session import DrawingSession
from .sketchpad import Sketchpad, build_sketchpad
from .stroke_renderer import IncrementalRenderer, RenderStats

__all__ = [
    "ALL_EVENT_KINDS",
    "CalibrationState",
    "CapturedPoint",
    "DrawingSession",
    "ENTER_KEY",
    "EntryPoint",
    "EventKind",
    "FramePacer",
    "FrameScheduler",
    "IncrementalRenderer",
    "InputRouter",
    "ModuleManifest",
    "ModuleRunner",
    "PALETTE",
    "POINTER_KINDS",
    "Point",
    "PointerCapture",
    "RenderStats",
    "ReplayResult",
    "ScriptStep",
    "Segment",
    "SegmentStore",
    "Sketchpad",
    "SketchConfig",
    "SurfaceEvent",
    "TickModule",
    "UNCALIBRATED",
    "build_sketchpad",
    "calibrate",
    "config_from_mapping",
    "key_event",
    "load_config",
    "load_module_manifest",
    "load_script",
    "load_tick_module",
    "normalize_event_kind",
    "parse_script",
    "pointer_event",
    "replay",
    "resize_event",
    "resolve_density",
]
