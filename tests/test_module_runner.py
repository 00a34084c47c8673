from __future__ import annotations

from pathlib import Path
import tempfile
import textwrap
import unittest

from sketchpad_core.core.module_runner import EntryPoint, ModuleRunner, load_module_manifest, load_tick_module
from sketchpad_core.targets.raster_host import RasterHost


class _FakeModule:
    def __init__(self) -> None:
        self.events: list[str] = []

    def init(self) -> None:
        self.events.append("init")

    def tick(self) -> None:
        self.events.append("tick")


def _write_module(root: Path, source: str, manifest: str | None = None) -> None:
    (root / "compute.py").write_text(textwrap.dedent(source))
    if manifest is not None:
        (root / "module.toml").write_text(textwrap.dedent(manifest))


class ModuleRunnerTests(unittest.TestCase):
    def test_loads_on_first_frame_then_ticks_every_frame(self) -> None:
        host = RasterHost(0, 0)
        module = _FakeModule()
        runner = ModuleRunner(lambda: module, host)
        runner.start()
        runner.start()
        self.assertFalse(runner.loaded)
        self.assertEqual(module.events, [])
        host.run_frames(4)
        self.assertTrue(runner.loaded)
        self.assertEqual(module.events, ["init", "tick", "tick", "tick"])
        self.assertEqual(runner.ticks, 3)

    def test_tick_error_does_not_stop_ticking(self) -> None:
        host = RasterHost(0, 0)

        class _Flaky(_FakeModule):
            def tick(self) -> None:
                super().tick()
                if len(self.events) == 2:
                    raise RuntimeError("bad tick")

        module = _Flaky()
        runner = ModuleRunner(lambda: module, host)
        runner.start()
        host.run_frames(4)
        self.assertEqual(module.events, ["init", "tick", "tick", "tick"])
        self.assertEqual(runner.ticks, 2)
        self.assertIsInstance(host.last_error, RuntimeError)

    def test_load_tick_module_instantiates_class(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            _write_module(
                Path(td),
                """
                class Compute:
                    def __init__(self):
                        self.count = 0

                    def init(self):
                        self.count = 100

                    def tick(self):
                        self.count += 1
                """,
            )
            module = load_tick_module(td, "compute:Compute")
            module.init()
            module.tick()
            self.assertEqual(module.count, 101)

    def test_load_tick_module_accepts_factory_and_instance(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            _write_module(
                Path(td),
                """
                class _Compute:
                    def init(self):
                        pass

                    def tick(self):
                        pass

                instance = _Compute()

                def create():
                    return _Compute()
                """,
            )
            self.assertTrue(callable(load_tick_module(td, "compute:instance").tick))
            self.assertTrue(callable(load_tick_module(td, "compute:create").init))

    def test_load_tick_module_errors(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            _write_module(Path(td), "VALUE = 3\n")
            with self.assertRaises(ValueError):
                load_tick_module(td, "compute")
            with self.assertRaises(ValueError):
                load_tick_module(td, "missing:Thing")
            with self.assertRaises(ValueError):
                load_tick_module(td, "compute:Thing")
            with self.assertRaises(ValueError):
                load_tick_module(td, "compute:VALUE")

    def test_entrypoint_parsing(self) -> None:
        self.assertEqual(EntryPoint.parse(" pkg.compute : Compute "), EntryPoint(module="pkg.compute", symbol="Compute"))
        for raw in ("compute", ":Compute", "compute:", "../evil:Compute", "compute:not-valid"):
            with self.subTest(raw=raw):
                with self.assertRaises(ValueError):
                    EntryPoint.parse(raw)

    def test_load_tick_module_from_package(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            package = Path(td) / "solver"
            package.mkdir()
            (package / "__init__.py").write_text(
                textwrap.dedent(
                    """
                    class Solver:
                        def init(self):
                            self.ready = True

                        def tick(self):
                            pass
                    """
                )
            )
            module = load_tick_module(td, "solver:Solver")
            module.init()
            self.assertTrue(module.ready)

    def test_manifest(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            _write_module(Path(td), "", manifest='module_id = "demo"\nentrypoint = "compute:Compute"\n')
            manifest = load_module_manifest(td)
            self.assertEqual((manifest.module_id, manifest.entrypoint), ("demo", "compute:Compute"))
            (Path(td) / "module.toml").write_text('module_id = "demo"\n')
            with self.assertRaises(ValueError):
                load_module_manifest(td)
        with tempfile.TemporaryDirectory() as td:
            with self.assertRaises(FileNotFoundError):
                load_module_manifest(td)


if __name__ == "__main__":
    unittest.main()
