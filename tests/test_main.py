from __future__ import annotations

import contextlib
import io
import json
from pathlib import Path
import tempfile
import textwrap
import unittest

from PIL import Image

import main


class MainCliTests(unittest.TestCase):
    def test_replay_prints_summary_and_writes_snapshot(self) -> None:
        script = [
            {"kind": "pointer_down", "x": 10, "y": 10},
            {"kind": "pointer_move", "x": 40, "y": 20},
            {"kind": "pointer_up", "x": 60, "y": 40},
            {"kind": "frame", "count": 2},
        ]
        with tempfile.TemporaryDirectory() as td:
            script_path = Path(td) / "gesture.json"
            script_path.write_text(json.dumps(script))
            config_path = Path(td) / "sketch.toml"
            config_path.write_text('palette_color = "green"\n')
            png_path = Path(td) / "out.png"
            out = io.StringIO()
            with contextlib.redirect_stdout(out):
                main.main(
                    [
                        "replay",
                        str(script_path),
                        "--config",
                        str(config_path),
                        "--width",
                        "80",
                        "--height",
                        "60",
                        "--dpr",
                        "2",
                        "--snapshot",
                        str(png_path),
                    ]
                )
            with Image.open(png_path) as image:
                self.assertEqual(image.size, (160, 120))
        text = out.getvalue()
        self.assertIn("segments=1 points=3 ticks=2 calibrations=1", text)
        self.assertIn("snapshot written", text)

    def test_run_module_uses_manifest_entrypoint(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            (Path(td) / "compute.py").write_text(
                textwrap.dedent(
                    """
                    class Compute:
                        def init(self):
                            pass

                        def tick(self):
                            pass
                    """
                )
            )
            (Path(td) / "module.toml").write_text('module_id = "demo"\nentrypoint = "compute:Compute"\n')
            out = io.StringIO()
            with contextlib.redirect_stdout(out):
                main.main(["run-module", td, "--frames", "5"])
        self.assertIn("run complete: loaded=True ticks=4", out.getvalue())

    def test_rejects_bad_dimensions(self) -> None:
        with self.assertRaises(ValueError):
            main.main(["replay", "missing.json", "--width", "0"])


if __name__ == "__main__":
    unittest.main()
