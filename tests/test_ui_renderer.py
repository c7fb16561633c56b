"""
test_ui_renderer.py
Rendering side effects on numpy canvases: additive ink, replay across
pen-lifts, guide redraw and the completion badge.
"""
import sys
import os
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
import unittest

import numpy as np

import config
from stroke_engine import BREAK_MARKER, Point
from trace_pad import TracePad, trace_strokes
from ui_renderer import TraceRenderer


def color_at(canvas, x, y):
    return tuple(int(c) for c in canvas[y, x])


class TestTraceRenderer(unittest.TestCase):
    def setUp(self):
        self.r = TraceRenderer()
        self.ink = tuple(config.UI_COLORS["ink"])
        self.bg = tuple(config.UI_COLORS["background"])

    def test_new_canvas(self):
        canvas = self.r.new_canvas((300, 200))
        self.assertEqual(canvas.shape, (200, 300, 3))
        self.assertEqual(canvas.dtype, np.uint8)
        self.assertEqual(color_at(canvas, 0, 0), self.bg)

    def test_segment_is_additive(self):
        canvas = self.r.new_canvas(400)
        self.r.draw_segment(canvas, Point(20, 20), Point(20, 60))
        self.assertEqual(color_at(canvas, 20, 40), self.ink)
        self.r.draw_segment(canvas, Point(60, 20), Point(60, 60))
        self.assertEqual(color_at(canvas, 20, 40), self.ink)
        self.assertEqual(color_at(canvas, 60, 40), self.ink)

    def test_replay_does_not_bridge_pen_lift(self):
        canvas = self.r.new_canvas(400)
        points = [Point(20, 20), Point(20, 60), BREAK_MARKER, Point(20, 340), Point(20, 380)]
        self.r.replay_strokes(canvas, points)
        self.assertEqual(color_at(canvas, 20, 40), self.ink)
        self.assertEqual(color_at(canvas, 20, 360), self.ink)
        self.assertNotEqual(color_at(canvas, 20, 200), self.ink)
        self.assertNotEqual(color_at(canvas, 20, 120), self.ink)

    def test_replay_single_point_stroke(self):
        canvas = self.r.new_canvas(200)
        self.r.replay_strokes(canvas, [Point(30, 30), BREAK_MARKER, Point(150, 150), Point(150, 180)])
        self.assertEqual(color_at(canvas, 30, 30), self.ink)

    def test_guide_wipes_ink(self):
        canvas = self.r.new_canvas(400)
        self.r.draw_segment(canvas, Point(5, 5), Point(5, 40))
        self.r.draw_guide(canvas, "I")
        self.assertEqual(color_at(canvas, 5, 20), self.bg)
        self.assertNotEqual(color_at(canvas, 200, 200), self.bg)

    def test_guide_waypoints(self):
        r = TraceRenderer(show_waypoints=True)
        canvas = r.new_canvas(400)
        r.draw_guide(canvas, "I")
        self.assertEqual(color_at(canvas, 200, 60), tuple(config.UI_COLORS["waypoint"]))

    def test_guide_for_token_and_unknown(self):
        for target in ("10", "?"):
            canvas = self.r.new_canvas(200)
            self.r.draw_guide(canvas, target)
            self.assertTrue((canvas != np.array(self.bg, dtype=np.uint8)).any())

    def test_complete_badge(self):
        canvas = self.r.new_canvas(400)
        self.r.draw_complete(canvas)
        half = 400 // 6
        self.assertEqual(color_at(canvas, 200 - half + 2, 200 - half + 2),
                         tuple(config.UI_COLORS["complete_bg"]))

    def test_compose_window(self):
        canvas = self.r.new_canvas(200)
        frame = self.r.compose_window(canvas, "Trace: A", "Tracing...")
        self.assertEqual(frame.shape, (200 + config.STATUS_BAR_HEIGHT, 200, 3))


class TestPadRendering(unittest.TestCase):
    def setUp(self):
        self.ink = tuple(config.UI_COLORS["ink"])

    def test_start_dot_and_ink(self):
        pad = TracePad("?", 400, renderer=TraceRenderer())
        pad.press(30, 30)
        self.assertEqual(color_at(pad.canvas, 30, 30), self.ink)
        pad.move(30, 80)
        self.assertEqual(color_at(pad.canvas, 30, 55), self.ink)

    def test_clear_removes_ink(self):
        pad = TracePad("?", 400, renderer=TraceRenderer())
        trace_strokes(pad, [[(30, 30), (30, 80)]])
        pad.clear()
        self.assertNotEqual(color_at(pad.canvas, 30, 55), self.ink)

    def test_redraw_replays_strokes(self):
        pad = TracePad("?", 400, renderer=TraceRenderer())
        trace_strokes(pad, [[(30, 30), (30, 80)], [(30, 320), (30, 370)]])
        pad.redraw()
        self.assertEqual(color_at(pad.canvas, 30, 55), self.ink)
        self.assertEqual(color_at(pad.canvas, 30, 345), self.ink)
        self.assertNotEqual(color_at(pad.canvas, 30, 200), self.ink)

    def test_completion_draws_badge(self):
        pad = TracePad("I", 200, renderer=TraceRenderer())
        trace_strokes(pad, [[(100, y) for y in range(30, 171, 10)]])
        self.assertTrue(pad.is_complete)
        half = 200 // 6
        self.assertEqual(color_at(pad.canvas, 100 - half + 2, 100 - half + 2),
                         tuple(config.UI_COLORS["complete_bg"]))

    def test_resize_on_new_target(self):
        pad = TracePad("I", 200, renderer=TraceRenderer())
        pad.set_target("o", (300, 150))
        self.assertEqual(pad.canvas.shape, (150, 300, 3))


if __name__ == "__main__":
    unittest.main()
