import unittest

from gradebook.config.settings import settings
from gradebook.core.errors import InvalidInput
from gradebook.core.grades import (
    DEFAULT_CREDIT_HOURS,
    MarkInput,
    compose_subject_grade,
    grade_from_marks,
)
from gradebook.core.scales import NEB_SCALE


class GradeFromMarksTests(unittest.TestCase):
    def test_full_score_band(self):
        result = grade_from_marks(90, 100)
        self.assertAlmostEqual(result.percentage, 90.00, places=2)
        self.assertEqual(result.grade, "A+")
        self.assertAlmostEqual(result.gpa_point, 4.0)
        self.assertTrue(result.is_passed)

    def test_zero_or_negative_full_marks(self):
        for full in (0, -10, None):
            result = grade_from_marks(50, full)
            self.assertEqual(result.grade, "NG")
            self.assertEqual(result.gpa_point, 0.0)
            self.assertEqual(result.percentage, 0)
            self.assertEqual(result.description, "Invalid")

    def test_banding_uses_unrounded_percentage(self):
        # 89.996% reports as 90.0 but is still an A
        result = grade_from_marks(89.996, 100)
        self.assertAlmostEqual(result.percentage, 90.0, places=2)
        self.assertEqual(result.grade, "A")

    def test_percentage_rounded_to_two_places(self):
        self.assertEqual(grade_from_marks(20, 75).percentage, 26.67)


class ComposeSubjectGradeTests(unittest.TestCase):
    def test_theory_only(self):
        result = compose_subject_grade(MarkInput(theory_marks_obtained=72, theory_full_marks=100))
        self.assertEqual(result.final_grade, "B+")
        self.assertAlmostEqual(result.final_gpa, 3.2)
        self.assertTrue(result.is_passed)
        self.assertEqual(result.remark, "Very Good")
        self.assertIsNone(result.practical_marks)
        self.assertIsNone(result.practical_percentage)
        self.assertEqual(result.total_full_marks, 100)

    def test_theory_and_practical_pass(self):
        result = compose_subject_grade(
            MarkInput(
                theory_marks_obtained=30,
                theory_full_marks=75,
                practical_marks_obtained=20,
                practical_full_marks=25,
                has_practical=True,
            )
        )
        self.assertAlmostEqual(result.theory_percentage, 40.0)
        self.assertAlmostEqual(result.practical_percentage, 80.0)
        self.assertAlmostEqual(result.final_percentage, 50.0)
        self.assertEqual(result.final_grade, "C+")
        self.assertAlmostEqual(result.final_gpa, 2.4)
        self.assertTrue(result.is_passed)
        self.assertEqual(result.remark, "Satisfactory")

    def test_theory_failure_overrides_combined_band(self):
        result = compose_subject_grade(
            MarkInput(
                theory_marks_obtained=20,
                theory_full_marks=75,
                practical_marks_obtained=24,
                practical_full_marks=25,
                has_practical=True,
            )
        )
        self.assertAlmostEqual(result.final_percentage, 44.0)
        self.assertFalse(result.is_passed)
        self.assertEqual(result.final_grade, "NG")
        self.assertEqual(result.final_gpa, 0.0)
        self.assertEqual(result.remark, "Theory Failed")
        self.assertEqual(result.theory_percentage, 26.67)

    def test_practical_failure_remark(self):
        result = compose_subject_grade(
            MarkInput(
                theory_marks_obtained=60,
                theory_full_marks=75,
                practical_marks_obtained=5,
                practical_full_marks=25,
                has_practical=True,
            )
        )
        self.assertFalse(result.is_passed)
        self.assertEqual(result.final_grade, "NG")
        self.assertEqual(result.remark, "Practical Failed")

    def test_practical_remark_wins_when_both_fail(self):
        result = compose_subject_grade(
            MarkInput(
                theory_marks_obtained=10,
                theory_full_marks=75,
                practical_marks_obtained=2,
                practical_full_marks=25,
                has_practical=True,
            )
        )
        self.assertEqual(result.remark, "Practical Failed")

    def test_absent(self):
        result = compose_subject_grade(
            MarkInput(
                theory_marks_obtained=70,
                theory_full_marks=75,
                practical_marks_obtained=25,
                practical_full_marks=25,
                has_practical=True,
                is_absent=True,
            )
        )
        self.assertEqual(result.final_grade, "AB")
        self.assertEqual(result.final_gpa, 0.0)
        self.assertFalse(result.is_passed)
        self.assertTrue(result.is_absent)
        self.assertEqual(result.remark, "Absent")
        self.assertEqual(result.practical_marks, 0)
        self.assertEqual(result.practical_grade, "AB")
        self.assertEqual(result.total_full_marks, 100)

    def test_absent_without_practical(self):
        result = compose_subject_grade(MarkInput(theory_marks_obtained=99, is_absent=True))
        self.assertEqual(result.final_grade, "AB")
        self.assertIsNone(result.practical_marks)
        self.assertIsNone(result.practical_grade)

    def test_practical_ignored_without_flag(self):
        result = compose_subject_grade(
            MarkInput(
                theory_marks_obtained=80,
                theory_full_marks=100,
                practical_marks_obtained=1,
                practical_full_marks=25,
                has_practical=False,
            )
        )
        self.assertTrue(result.is_passed)
        self.assertEqual(result.total_marks, 80)
        self.assertEqual(result.total_full_marks, 100)
        self.assertIsNone(result.practical_full_marks)

    def test_practical_without_full_marks_is_skipped(self):
        result = compose_subject_grade(
            MarkInput(
                theory_marks_obtained=50,
                theory_full_marks=100,
                practical_marks_obtained=0,
                practical_full_marks=0,
                has_practical=True,
            )
        )
        self.assertTrue(result.is_passed)
        self.assertIsNone(result.practical_percentage)
        self.assertIsNone(result.practical_grade)
        self.assertEqual(result.practical_marks, 0)

    def test_missing_theory_full_marks_defaults_to_100(self):
        result = compose_subject_grade(MarkInput(theory_marks_obtained=45, theory_full_marks=0))
        self.assertEqual(result.theory_full_marks, 100)
        self.assertAlmostEqual(result.final_percentage, 45.0)

    def test_neb_scale_uses_thirty_percent_floor(self):
        mark = MarkInput(theory_marks_obtained=32, theory_full_marks=100)
        self.assertFalse(compose_subject_grade(mark).is_passed)
        neb = compose_subject_grade(mark, NEB_SCALE)
        self.assertTrue(neb.is_passed)
        self.assertEqual(neb.final_grade, "D")

    def test_defaults_follow_settings(self):
        mark = MarkInput(theory_marks_obtained=50)
        self.assertEqual(mark.credit_hours, settings.default_credit_hours)
        self.assertEqual(mark.theory_full_marks, settings.default_theory_full_marks)
        self.assertEqual(DEFAULT_CREDIT_HOURS, settings.default_credit_hours)

    def test_credit_hours_carried_through(self):
        result = compose_subject_grade(MarkInput(theory_marks_obtained=50, credit_hours=5))
        self.assertEqual(result.credit_hours, 5)

    def test_rejects_non_mark_input(self):
        with self.assertRaises(InvalidInput):
            compose_subject_grade(None)
        with self.assertRaises(InvalidInput):
            compose_subject_grade({"theory_marks_obtained": 50})


if __name__ == "__main__":
    unittest.main()
