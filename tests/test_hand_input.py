"""
test_hand_input.py
Pinch gesture to pad events, using fake landmark frames.
"""
import sys
import os
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
import tempfile
import unittest
from types import SimpleNamespace

from hand_input import (
    HAND_POINTER_ID,
    INDEX_FINGER_TIP,
    THUMB_TIP,
    PinchPointer,
    ensure_model,
    pinch_distance,
)
from trace_pad import TracePad


def hand(tip, thumb):
    lms = [SimpleNamespace(x=0.0, y=0.0) for _ in range(21)]
    lms[INDEX_FINGER_TIP] = SimpleNamespace(x=tip[0], y=tip[1])
    lms[THUMB_TIP] = SimpleNamespace(x=thumb[0], y=thumb[1])
    return lms


def pinched(x, y):
    return hand((x, y), (x + 0.01, y))


def open_hand(x, y):
    return hand((x, y), (x + 0.3, y))


class TestPinchPointer(unittest.TestCase):
    def setUp(self):
        self.pad = TracePad("I", 200)
        self.pointer = PinchPointer(self.pad)

    def test_pinch_distance(self):
        self.assertAlmostEqual(pinch_distance(hand((0.3, 0.4), (0.0, 0.0))), 0.5)

    def test_open_hand_does_nothing(self):
        self.assertIsNone(self.pointer.update(open_hand(0.5, 0.5)))
        self.assertIsNone(self.pointer.update(None))
        self.assertEqual(self.pad.point_count, 0)

    def test_pinch_draws_and_release_validates(self):
        self.assertEqual(self.pointer.update(pinched(0.5, 0.15)), "press")
        self.assertTrue(self.pad.is_drawing)
        for i in range(1, 15):
            self.assertEqual(self.pointer.update(pinched(0.5, 0.15 + i * 0.05)), "move")
        first = self.pad.points()[0]
        self.assertAlmostEqual(first.x, 100.0)
        self.assertAlmostEqual(first.y, 30.0)
        self.assertEqual(self.pointer.update(open_hand(0.5, 0.85)), "release")
        self.assertTrue(self.pad.is_complete)

    def test_losing_hand_releases(self):
        self.pointer.update(pinched(0.5, 0.5))
        self.assertEqual(self.pointer.update(None), "release")
        self.assertFalse(self.pad.is_drawing)

    def test_mouse_stroke_blocks_hand(self):
        self.pad.press(10, 10)
        self.assertIsNone(self.pointer.update(pinched(0.5, 0.5)))
        self.assertFalse(self.pointer.down)
        self.pad.move(10, 50)
        self.assertEqual(self.pad.session.stroke_count, 1)
        self.assertNotEqual(self.pointer.pointer_id, 0)
        self.assertEqual(self.pointer.pointer_id, HAND_POINTER_ID)


class TestModel(unittest.TestCase):
    def test_existing_model_is_not_downloaded(self):
        with tempfile.NamedTemporaryFile(suffix=".task") as f:
            self.assertEqual(ensure_model(f.name, url="http://invalid.invalid/model"), f.name)


if __name__ == "__main__":
    unittest.main()
