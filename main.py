from __future__ import annotations

import argparse
import logging
from pathlib import Path

from sketchpad_core.core import (
    FramePacer,
    ModuleRunner,
    SketchConfig,
    build_sketchpad,
    load_config,
    load_module_manifest,
    load_script,
    load_tick_module,
    replay,
)
from sketchpad_core.targets import PngSnapshotTarget, RasterHost


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="sketchpad")
    parser.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    sub = parser.add_subparsers(dest="command", required=True)

    rep = sub.add_parser("replay", help="Replay a JSON gesture script on a headless surface.")
    rep.add_argument("script", type=Path)
    rep.add_argument("--config", type=Path, default=None, help="TOML sketch config.")
    rep.add_argument("--width", type=float, default=640.0)
    rep.add_argument("--height", type=float, default=360.0)
    rep.add_argument("--dpr", type=float, default=1.0, help="Device pixel ratio of the headless surface.")
    rep.add_argument("--snapshot", type=Path, default=None, help="Write the final surface to this PNG.")
    rep.add_argument("--realtime", action="store_true", help="Pace scripted frames at the config target_fps.")

    mod = sub.add_parser("run-module", help="Load a tick module folder and tick it once per frame.")
    mod.add_argument("module_dir", type=Path)
    mod.add_argument("--entrypoint", default=None, help="`module:symbol`; defaults to module.toml.")
    mod.add_argument("--frames", type=int, default=60)
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    if args.command == "replay":
        _run_replay(args)
        return
    if args.command == "run-module":
        _run_module(args)
        return
    raise RuntimeError(f"unsupported command: {args.command}")


def _run_replay(args: argparse.Namespace) -> None:
    if args.width <= 0 or args.height <= 0:
        raise ValueError("width and height must be > 0")
    config = load_config(args.config) if args.config is not None else SketchConfig()
    steps = load_script(args.script)
    surface = RasterHost(args.width, args.height, device_pixel_ratio=args.dpr, background=config.background)
    host = _PacedHost(surface, FramePacer(config.target_fps)) if args.realtime else surface
    pad = build_sketchpad(surface, surface, surface, config)
    result = replay(steps, host)
    store = pad.session.store
    print(
        f"replay complete: segments={len(store)} points={store.point_count()} "
        f"ticks={pad.scheduler.tick_count} calibrations={pad.scheduler.calibration_count} "
        f"events={result.events_dispatched}"
    )
    if args.snapshot is not None:
        target = PngSnapshotTarget(path=args.snapshot)
        target.start()
        try:
            target.present_frame(surface.snapshot())
        finally:
            target.stop()
        print(f"snapshot written: {args.snapshot}")


def _run_module(args: argparse.Namespace) -> None:
    if args.frames < 0:
        raise ValueError("frames must be >= 0")
    entrypoint = args.entrypoint or load_module_manifest(args.module_dir).entrypoint
    host = RasterHost(0, 0)
    runner = ModuleRunner(lambda: load_tick_module(args.module_dir, entrypoint), host)
    runner.start()
    host.run_frames(args.frames)
    if host.last_error is not None:
        raise RuntimeError(f"tick module failed: {host.last_error}") from host.last_error
    print(f"run complete: loaded={runner.loaded} ticks={runner.ticks}")


class _PacedHost:
    def __init__(self, surface: RasterHost, pacer: FramePacer) -> None:
        self.surface = surface
        self._pacer = pacer

    def dispatch(self, event) -> None:
        self.surface.dispatch(event)

    def resize(self, width: float, height: float, *, left: float | None = None, top: float | None = None) -> None:
        self.surface.resize(width, height, left=left, top=top)

    def set_device_pixel_ratio(self, ratio: float | None) -> None:
        self.surface.set_device_pixel_ratio(ratio)

    def run_frames(self, count: int = 1) -> int:
        return self.surface.run_paced(count, self._pacer)


if __name__ == "__main__":
    main()
