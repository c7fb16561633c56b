"""
test_letter_templates.py
Unit tests for the waypoint table and case-folding lookup.
"""
import sys
import os
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
import string
import unittest

from letter_templates import (
    DEFAULT_LIBRARY,
    LETTER_WAYPOINTS,
    TemplateLibrary,
    available_characters,
    has_template,
    lookup,
    waypoints_to_pixels,
)


class TestTemplateCoverage(unittest.TestCase):
    def test_letters_digits_and_ten(self):
        required = list(string.ascii_lowercase) + list(string.ascii_uppercase) + list(string.digits) + ["10"]
        for char in required:
            with self.subTest(char=char):
                self.assertIn(char, LETTER_WAYPOINTS)
                self.assertIsNotNone(lookup(char))
        self.assertEqual(len(available_characters()), 63)

    def test_waypoints_are_normalized(self):
        for char, waypoints in LETTER_WAYPOINTS.items():
            with self.subTest(char=char):
                self.assertGreaterEqual(len(waypoints), 1)
                for x, y in waypoints:
                    self.assertTrue(0.0 <= x <= 1.0)
                    self.assertTrue(0.0 <= y <= 1.0)

    def test_simple_letters_have_three_waypoints(self):
        self.assertEqual(lookup("I"), ((0.5, 0.15), (0.5, 0.5), (0.5, 0.85)))
        for char in ("I", "i", "l", "1"):
            self.assertEqual(len(lookup(char)), 3)
        self.assertEqual(len(lookup("o")), 6)


class TestLookup(unittest.TestCase):
    def test_exact_match_wins(self):
        self.assertEqual(lookup("b"), LETTER_WAYPOINTS["b"])
        self.assertNotEqual(lookup("b"), LETTER_WAYPOINTS["B"])

    def test_uppercase_retry(self):
        lib = TemplateLibrary({"A": [(0.5, 0.1), (0.2, 0.9), (0.8, 0.9)]})
        self.assertEqual(lib.lookup("a"), lib.lookup("A"))
        self.assertIn("a", lib)

    def test_absent_is_none_not_error(self):
        for char in ("?", "", "ß", "ab", "11", "é"):
            with self.subTest(char=char):
                self.assertIsNone(lookup(char))
                self.assertFalse(has_template(char))

    def test_empty_waypoints_count_as_absent(self):
        lib = TemplateLibrary({"x": [], "Y": [(0.5, 0.5)]})
        self.assertIsNone(lib.lookup("x"))
        self.assertIsNone(lib.lookup("X"))
        self.assertEqual(lib.characters(), ["Y"])

    def test_empty_exact_key_does_not_borrow_uppercase(self):
        lib = TemplateLibrary({"a": [], "A": [(0.5, 0.5)]})
        self.assertIsNone(lib.lookup("a"))
        self.assertFalse(lib.has_template("a"))
        self.assertEqual(lib.lookup("A"), ((0.5, 0.5),))

    def test_non_string_is_caller_error(self):
        with self.assertRaises(TypeError):
            lookup(1)

    def test_library_is_read_only(self):
        with self.assertRaises(TypeError):
            DEFAULT_LIBRARY.templates["Z"] = ((0.0, 0.0),)
        self.assertIsInstance(lookup("A"), tuple)

    def test_library_copies_its_input(self):
        source = {"A": [(0.1, 0.2)]}
        lib = TemplateLibrary(source)
        source["A"].append((0.3, 0.4))
        self.assertEqual(lib.lookup("A"), ((0.1, 0.2),))

    def test_index_access(self):
        chars = DEFAULT_LIBRARY.characters()
        self.assertEqual(DEFAULT_LIBRARY.get_character_by_index(0), chars[0])
        self.assertIsNone(DEFAULT_LIBRARY.get_character_by_index(len(chars)))
        self.assertIn(DEFAULT_LIBRARY.get_random_character(), chars)


class TestPixels(unittest.TestCase):
    def test_square_and_rectangular(self):
        self.assertEqual(waypoints_to_pixels(((0.5, 0.15),), 200), [(100, 30)])
        self.assertEqual(waypoints_to_pixels(((0.5, 0.5),), (400, 200)), [(200, 100)])


if __name__ == "__main__":
    unittest.main()
