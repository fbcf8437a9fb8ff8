import unittest

from gradebook.core.scales import (
    GENERAL_SCALE,
    NEB_SCALE,
    GradeBand,
    GradeScale,
    grade_from_percentage,
)


class GradeScaleTests(unittest.TestCase):
    def test_every_hundredth_maps_to_exactly_one_band(self):
        for scale in (GENERAL_SCALE, NEB_SCALE):
            for step in range(0, 10001):
                pct = step / 100
                matches = [band for band in scale.bands if band.contains(pct)]
                self.assertEqual(len(matches), 1, f"{scale.name} {pct}")

    def test_gpa_never_decreases(self):
        for scale in (GENERAL_SCALE, NEB_SCALE):
            previous = -1.0
            for step in range(0, 1001):
                point = grade_from_percentage(step / 10, scale).gpa_point
                self.assertGreaterEqual(point, previous)
                previous = point

    def test_band_edges(self):
        self.assertEqual(grade_from_percentage(90).grade, "A+")
        self.assertEqual(grade_from_percentage(89.999).grade, "A")
        self.assertEqual(grade_from_percentage(100).grade, "A+")
        self.assertEqual(grade_from_percentage(35).grade, "D")
        self.assertEqual(grade_from_percentage(34.99).grade, "NG")

    def test_general_and_neb_floors_differ(self):
        self.assertEqual(grade_from_percentage(32, GENERAL_SCALE).grade, "NG")
        self.assertEqual(grade_from_percentage(32, NEB_SCALE).grade, "D")
        self.assertEqual(grade_from_percentage(29.5, NEB_SCALE).grade, "NG")
        self.assertEqual(GENERAL_SCALE.pass_percentage, 35)
        self.assertEqual(NEB_SCALE.pass_percentage, 30)

    def test_lookup_fields(self):
        lookup = grade_from_percentage(85)
        self.assertEqual(lookup.grade, "A")
        self.assertAlmostEqual(lookup.gpa_point, 3.6)
        self.assertEqual(lookup.description, "Excellent")
        self.assertTrue(lookup.is_passed)

    def test_non_numeric_is_not_graded(self):
        for value in (None, "85", float("nan"), True, object()):
            lookup = grade_from_percentage(value)
            self.assertEqual(lookup.grade, "NG")
            self.assertEqual(lookup.gpa_point, 0.0)
            self.assertFalse(lookup.is_passed)

    def test_out_of_range_is_clamped(self):
        self.assertEqual(grade_from_percentage(120).grade, "A+")
        self.assertEqual(grade_from_percentage(-5).grade, "NG")
        self.assertEqual(grade_from_percentage(float("inf")).grade, "A+")

    def test_scale_with_gap_is_rejected(self):
        with self.assertRaises(ValueError):
            GradeScale(
                name="broken",
                bands=(
                    GradeBand("A", 4.0, "Top", 50, 100),
                    GradeBand("NG", 0.0, "Not Graded", 0, 49),
                ),
            )


if __name__ == "__main__":
    unittest.main()
