"""
Tests for the particle palette and the exercise catalog.
"""

import unittest

from breathease.model.exercises import EXERCISES, get_exercise
from breathease.model.palette import DEFAULT_PALETTE, ParticleColor, hex_to_rgb, hex_to_rgba


class TestHexParsing(unittest.TestCase):

    def test_six_digit(self):
        self.assertEqual(hex_to_rgb("4158D0"), (65, 88, 208))
        self.assertEqual(hex_to_rgb("#FFCC70"), (255, 204, 112))

    def test_three_digit(self):
        self.assertEqual(hex_to_rgba("#F80"), (255, 136, 0, 255))

    def test_eight_digit_has_leading_alpha(self):
        self.assertEqual(hex_to_rgba("80FF0000"), (255, 0, 0, 128))

    def test_unparseable_is_opaque_black(self):
        for value in ("", "12345", "zzzzzz"):
            with self.subTest(value=value):
                self.assertEqual(hex_to_rgba(value), (0, 0, 0, 255))


class TestParticleColor(unittest.TestCase):

    def test_palette_colours(self):
        self.assertEqual(ParticleColor.ORCHID.rgb, (200, 80, 192))
        self.assertEqual(len(DEFAULT_PALETTE), 3)
        self.assertEqual(ParticleColor("#4158D0"), ParticleColor.INDIGO)


class TestExercises(unittest.TestCase):

    def test_catalog(self):
        names = [e.name for e in EXERCISES]
        self.assertEqual(names, ["Deep Breathing", "Box Breathing", "4-7-8 Technique", "Alternate Nostril"])
        self.assertEqual([e.duration_minutes for e in EXERCISES], [5, 8, 10, 7])

    def test_duration_seconds(self):
        self.assertEqual(get_exercise("4-7-8 Technique").duration_seconds, 600.0)

    def test_lookup_ignores_case_and_whitespace(self):
        self.assertIs(get_exercise("  deep breathing "), EXERCISES[0])

    def test_unknown_exercise(self):
        with self.assertRaises(KeyError):
            get_exercise("Holotropic")


if __name__ == "__main__":
    unittest.main(verbosity=2)
