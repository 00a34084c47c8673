from __future__ import annotations

import unittest

from sketchpad_core.core.calibration import CalibrationState
from sketchpad_core.core.capture import PointerCapture
from sketchpad_core.core.config import SketchConfig
from sketchpad_core.core.events import pointer_event
from sketchpad_core.core.segments import Point
from sketchpad_core.core.session import DrawingSession
from sketchpad_core.targets.raster_host import RasterHost


def _session(*, left: float = 0, top: float = 0, density: float = 1.0, **config) -> DrawingSession:
    session = DrawingSession(config=SketchConfig(**config))
    session.calibration = CalibrationState(logical_width=500, logical_height=500, left=left, top=top, density=density)
    return session


class PointerCaptureTests(unittest.TestCase):
    def test_down_moves_up_produce_one_segment_of_n_plus_two_points(self) -> None:
        session = _session()
        capture = PointerCapture(session)
        capture.pointer_down(pointer_event("pointer_down", 0, 0))
        for i in range(1, 6):
            capture.pointer_move(pointer_event("pointer_move", i * 3, i))
        capture.pointer_up(pointer_event("pointer_up", 20, 7))
        self.assertEqual(len(session.store), 1)
        points = [c.point for c in session.store[0]]
        self.assertEqual(len(points), 5 + 2)
        self.assertEqual(points[0], Point(0, 0))
        self.assertEqual(points[1:6], [Point(i * 3, i) for i in range(1, 6)])
        self.assertEqual(points[-1], Point(20, 7))
        self.assertTrue(all(not c.drawn for c in session.store[0]))

    def test_offset_and_density_conversion(self) -> None:
        capture = PointerCapture(_session(left=10, top=20, density=2.0))
        self.assertEqual(capture.to_surface_point(15, 25), Point(10, 10))

    def test_attached_surface_geometry_is_read_per_event(self) -> None:
        session = _session(left=0, top=0, density=1.0)
        host = RasterHost(100, 100, left=10, top=20, device_pixel_ratio=None)
        capture = PointerCapture(session, host)
        self.assertEqual(capture.to_surface_point(15, 25), Point(5, 5))
        host.resize(100, 100, left=0, top=0)
        host.set_device_pixel_ratio(3.0)
        self.assertEqual(capture.to_surface_point(15, 25), Point(45, 75))

    def test_conversion_rounds_and_does_not_clamp(self) -> None:
        capture = PointerCapture(_session(left=10, top=10, density=1.5))
        self.assertEqual(capture.to_surface_point(11, 11), Point(2, 2))
        self.assertEqual(capture.to_surface_point(0, -10), Point(-15, -30))

    def test_move_while_inactive_is_ignored(self) -> None:
        session = _session()
        capture = PointerCapture(session)
        self.assertIsNone(capture.pointer_move(pointer_event("pointer_move", 5, 5)))
        self.assertEqual(len(session.store), 0)
        capture.pointer_down(pointer_event("pointer_down", 1, 1))
        capture.pointer_up(pointer_event("pointer_up", 2, 2))
        self.assertIsNone(capture.pointer_move(pointer_event("pointer_move", 3, 3)))
        self.assertEqual(session.store.point_count(), 2)

    def test_each_down_starts_a_new_segment(self) -> None:
        session = _session()
        capture = PointerCapture(session)
        for x in (10, 50):
            capture.pointer_down(pointer_event("pointer_down", x, x))
            capture.pointer_up(pointer_event("pointer_up", x, x))
        self.assertEqual(len(session.store), 2)
        self.assertEqual([len(s) for s in session.store], [2, 2])

    def test_up_without_down_is_recorded(self) -> None:
        session = _session()
        capture = PointerCapture(session)
        capture.pointer_up(pointer_event("pointer_up", 7, 8))
        self.assertEqual(len(session.store), 1)
        self.assertEqual(session.store[0].last_point(), Point(7, 8))
        self.assertFalse(capture.active)

    def test_active_tracks_gesture(self) -> None:
        capture = PointerCapture(_session())
        self.assertFalse(capture.active)
        capture.pointer_down(pointer_event("pointer_down", 0, 0))
        self.assertTrue(capture.active)
        capture.pointer_up(pointer_event("pointer_up", 0, 0))
        self.assertFalse(capture.active)

    def test_min_point_distance_drops_close_moves_only(self) -> None:
        session = _session(density=2.0, min_point_distance=3.0)
        capture = PointerCapture(session)
        capture.pointer_down(pointer_event("pointer_down", 0, 0))
        self.assertIsNone(capture.pointer_move(pointer_event("pointer_move", 2, 0)))
        self.assertIsNotNone(capture.pointer_move(pointer_event("pointer_move", 3, 0)))
        capture.pointer_up(pointer_event("pointer_up", 3, 0))
        self.assertEqual([c.point for c in session.store[0]], [Point(0, 0), Point(6, 0), Point(6, 0)])


if __name__ == "__main__":
    unittest.main()
