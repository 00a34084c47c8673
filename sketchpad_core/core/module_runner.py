from __future__ import annotations

from dataclasses import dataclass
import hashlib
import importlib.util
import logging
from pathlib import Path
import tomllib
from types import ModuleType
from typing import TYPE_CHECKING, Callable, Protocol

if TYPE_CHECKING:
    from sketchpad_core.targets.base import FrameRequester

LOGGER = logging.getLogger(__name__)

MODULE_MANIFEST = "module.toml"


class TickModule(Protocol):
    def init(self) -> None:
        ...

    def tick(self) -> None:
        ...


@dataclass(frozen=True)
class ModuleManifest:
    module_id: str
    entrypoint: str


@dataclass(frozen=True)
class EntryPoint:
    """`module:symbol` reference into a tick-module folder."""

    module: str
    symbol: str

    @classmethod
    def parse(cls, raw: str) -> "EntryPoint":
        module, sep, symbol = raw.partition(":")
        module = module.strip()
        symbol = symbol.strip()
        if not sep or not module or not symbol:
            raise ValueError(f"entrypoint must be `module:symbol`, got: {raw!r}")
        if not all(part.isidentifier() for part in module.split(".")) or not symbol.isidentifier():
            raise ValueError(f"entrypoint names must be Python identifiers, got: {raw!r}")
        return cls(module=module, symbol=symbol)

    def source_path(self, module_dir: Path) -> Path:
        """`pkg/mod.py`, or `pkg/mod/__init__.py` for a package."""
        base = module_dir.joinpath(*self.module.split("."))
        for candidate in (base.with_suffix(".py"), base / "__init__.py"):
            if candidate.is_file():
                return candidate
        raise ValueError(f"tick module source not found for `{self.module}` under {module_dir}")


def load_module_manifest(module_dir: str | Path) -> ModuleManifest:
    manifest_path = Path(module_dir) / MODULE_MANIFEST
    if not manifest_path.exists():
        raise FileNotFoundError(f"module manifest not found: {manifest_path}")
    with manifest_path.open("rb") as f:
        raw = tomllib.load(f)
    try:
        module_id = str(raw["module_id"])
        entrypoint = str(raw["entrypoint"])
    except KeyError as exc:
        raise ValueError(f"manifest missing required field: {exc.args[0]}") from exc
    EntryPoint.parse(entrypoint)
    return ModuleManifest(module_id=module_id, entrypoint=entrypoint)


def load_tick_module(module_dir: str | Path, entrypoint: str) -> TickModule:
    """Import `module:symbol` from `module_dir`; the symbol (or what calling it returns) needs `init` and `tick`."""
    entry = EntryPoint.parse(entrypoint)
    root = Path(module_dir).resolve()
    module = _import_source(entry.source_path(root), root, entry)
    symbol = getattr(module, entry.symbol, None)
    if symbol is None:
        raise ValueError(f"tick module `{entry.module}` has no attribute `{entry.symbol}`")
    if isinstance(symbol, type) or (callable(symbol) and not _has_entry_points(symbol)):
        instance = symbol()
    else:
        instance = symbol
    if not _has_entry_points(instance):
        raise ValueError(f"entrypoint missing callable `init`/`tick`: {entrypoint}")
    return instance


class ModuleRunner:
    """Loads a tick module on the first refresh, calls `init` once, then `tick` every refresh."""

    def __init__(self, loader: Callable[[], TickModule], frames: "FrameRequester") -> None:
        self._loader = loader
        self._frames = frames
        self._module: TickModule | None = None
        self._started = False
        self._ticks = 0

    @property
    def loaded(self) -> bool:
        return self._module is not None

    @property
    def ticks(self) -> int:
        return self._ticks

    def start(self) -> None:
        if self._started:
            return
        self._started = True
        self._frames.request_frame(self._load)

    def _load(self) -> None:
        module = self._loader()
        module.init()
        self._module = module
        LOGGER.info("tick module loaded: %s", type(module).__name__)
        self._frames.request_frame(self._tick)

    def _tick(self) -> None:
        assert self._module is not None
        try:
            self._module.tick()
            self._ticks += 1
        finally:
            self._frames.request_frame(self._tick)


def _has_entry_points(obj: object) -> bool:
    return all(callable(getattr(obj, name, None)) for name in ("init", "tick"))


def _import_source(path: Path, module_dir: Path, entry: EntryPoint) -> ModuleType:
    digest = hashlib.sha1(str(path).encode("utf-8")).hexdigest()[:12]
    spec = importlib.util.spec_from_file_location(f"sketchpad_tick_{digest}", path)
    if spec is None or spec.loader is None:
        raise ValueError(f"unable to import tick module `{entry.module}` from {module_dir}")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    LOGGER.debug("imported tick module %s from %s", entry.module, path)
    return module

