from .base import DisplayFrame, EventHandler, EventSubscriber, FrameCallback, FrameRequester, HostSurface, RenderTarget
from .png_target import PngSnapshotTarget
from .raster_host import RasterHost

__all__ = [
    "DisplayFrame",
    "EventHandler",
    "EventSubscriber",
    "FrameCallback",
    "FrameRequester",
    "HostSurface",
    "PngSnapshotTarget",
    "RasterHost",
    "RenderTarget",
]
