from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from PIL import Image

from .base import DisplayFrame, RenderTarget


@dataclass
class PngSnapshotTarget(RenderTarget):
    """Writes each presented frame to `path` as an RGBA PNG (last frame wins)."""

    path: Path
    frames_presented: int = 0
    _started: bool = field(default=False, repr=False)

    def start(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._started = True

    def present_frame(self, frame: DisplayFrame) -> None:
        if not self._started:
            raise RuntimeError("PngSnapshotTarget must be started before presenting frames")
        if frame.width <= 0 or frame.height <= 0:
            raise ValueError(f"cannot write empty frame: {frame.width}x{frame.height}")
        rgba = frame.rgba.contiguous().cpu().numpy()
        Image.fromarray(rgba).save(self.path, format="PNG")
        self.frames_presented += 1

    def stop(self) -> None:
        self._started = False
