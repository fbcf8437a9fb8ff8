from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from gradebook.config.settings import settings
from gradebook.core.errors import InvalidInput
from gradebook.core.rounding import round_half_up
from gradebook.core.scales import (
    ABSENT,
    GENERAL_SCALE,
    NOT_GRADED,
    GradeScale,
    grade_from_percentage,
    is_numeric,
)

DEFAULT_CREDIT_HOURS = settings.default_credit_hours
DEFAULT_THEORY_FULL_MARKS = settings.default_theory_full_marks

THEORY_FAILED = "Theory Failed"
PRACTICAL_FAILED = "Practical Failed"
ABSENT_REMARK = "Absent"


@dataclass(frozen=True)
class MarkInput:
    theory_marks_obtained: float
    theory_full_marks: float = DEFAULT_THEORY_FULL_MARKS
    practical_marks_obtained: Optional[float] = None
    practical_full_marks: Optional[float] = None
    has_practical: bool = False
    is_absent: bool = False
    credit_hours: float = DEFAULT_CREDIT_HOURS


@dataclass(frozen=True)
class MarkGrade:
    grade: str
    gpa_point: float
    description: str
    is_passed: bool
    percentage: float


@dataclass(frozen=True)
class SubjectGradeResult:
    theory_marks: float
    theory_full_marks: float
    theory_percentage: float
    theory_grade: str
    theory_gpa: float
    practical_marks: Optional[float]
    practical_full_marks: Optional[float]
    practical_percentage: Optional[float]
    practical_grade: Optional[str]
    practical_gpa: Optional[float]
    total_marks: float
    total_full_marks: float
    final_percentage: float
    final_grade: str
    final_gpa: float
    is_passed: bool
    is_absent: bool
    remark: str
    credit_hours: float = DEFAULT_CREDIT_HOURS


def _round2(value: float) -> float:
    return round_half_up(value, 2)


def calculate_percentage(marks_obtained: Any, full_marks: Any) -> float:
    """Unrounded percentage; 0 when full marks are missing or not positive."""
    if not is_numeric(full_marks) or full_marks <= 0:
        return 0.0
    if not is_numeric(marks_obtained):
        return 0.0
    return (marks_obtained / full_marks) * 100


def grade_from_marks(
    marks_obtained: Any,
    full_marks: Any,
    scale: GradeScale = GENERAL_SCALE,
) -> MarkGrade:
    if not is_numeric(full_marks) or full_marks <= 0:
        return MarkGrade(
            grade=NOT_GRADED,
            gpa_point=0.0,
            description="Invalid",
            is_passed=False,
            percentage=0.0,
        )

    percentage = calculate_percentage(marks_obtained, full_marks)
    # band on the raw value; rounding first could lift 89.996 into A+
    lookup = grade_from_percentage(percentage, scale)
    return MarkGrade(
        grade=lookup.grade,
        gpa_point=lookup.gpa_point,
        description=lookup.description,
        is_passed=lookup.is_passed,
        percentage=_round2(percentage),
    )


def _absent_result(mark: MarkInput, theory_full: float) -> SubjectGradeResult:
    practical_full = (mark.practical_full_marks or 0.0) if mark.has_practical else None
    return SubjectGradeResult(
        theory_marks=0.0,
        theory_full_marks=theory_full,
        theory_percentage=0.0,
        theory_grade=ABSENT,
        theory_gpa=0.0,
        practical_marks=0.0 if mark.has_practical else None,
        practical_full_marks=practical_full,
        practical_percentage=0.0 if mark.has_practical else None,
        practical_grade=ABSENT if mark.has_practical else None,
        practical_gpa=0.0 if mark.has_practical else None,
        total_marks=0.0,
        total_full_marks=theory_full + (practical_full or 0.0),
        final_percentage=0.0,
        final_grade=ABSENT,
        final_gpa=0.0,
        is_passed=False,
        is_absent=True,
        remark=ABSENT_REMARK,
        credit_hours=mark.credit_hours,
    )


def compose_subject_grade(mark: MarkInput, scale: GradeScale = GENERAL_SCALE) -> SubjectGradeResult:
    """
    Grade one subject from its theory and (optional) practical marks.

    Nepal rule: the subject fails when either component falls below the
    scale's pass floor, whatever the combined percentage says. A failed
    subject is reported as NG / 0.0.
    """
    if not isinstance(mark, MarkInput):
        raise InvalidInput(f"Expected MarkInput, got {type(mark).__name__}")

    theory_full = mark.theory_full_marks or DEFAULT_THEORY_FULL_MARKS
    if mark.is_absent:
        return _absent_result(mark, theory_full)

    theory = mark.theory_marks_obtained or 0.0
    practical = (mark.practical_marks_obtained or 0.0) if mark.has_practical else 0.0
    practical_full = (mark.practical_full_marks or 0.0) if mark.has_practical else 0.0

    theory_percentage = calculate_percentage(theory, theory_full)
    theory_lookup = grade_from_percentage(theory_percentage, scale)

    practical_percentage: Optional[float] = None
    practical_lookup = None
    if mark.has_practical and practical_full > 0:
        practical_percentage = calculate_percentage(practical, practical_full)
        practical_lookup = grade_from_percentage(practical_percentage, scale)

    total_marks = theory + practical
    total_full_marks = theory_full + practical_full
    final_percentage = calculate_percentage(total_marks, total_full_marks)
    final_lookup = grade_from_percentage(final_percentage, scale)

    is_passed = final_lookup.is_passed
    remark = final_lookup.description

    floor = scale.pass_percentage
    if theory_percentage < floor:
        is_passed = False
        remark = THEORY_FAILED

    if practical_percentage is not None and practical_percentage < floor:
        is_passed = False
        remark = PRACTICAL_FAILED

    return SubjectGradeResult(
        theory_marks=_round2(theory),
        theory_full_marks=theory_full,
        theory_percentage=_round2(theory_percentage),
        theory_grade=theory_lookup.grade,
        theory_gpa=theory_lookup.gpa_point,
        practical_marks=_round2(practical) if mark.has_practical else None,
        practical_full_marks=practical_full if mark.has_practical else None,
        practical_percentage=(
            _round2(practical_percentage) if practical_percentage is not None else None
        ),
        practical_grade=practical_lookup.grade if practical_lookup else None,
        practical_gpa=practical_lookup.gpa_point if practical_lookup else None,
        total_marks=_round2(total_marks),
        total_full_marks=total_full_marks,
        final_percentage=_round2(final_percentage),
        final_grade=final_lookup.grade if is_passed else NOT_GRADED,
        final_gpa=final_lookup.gpa_point if is_passed else 0.0,
        is_passed=is_passed,
        is_absent=False,
        remark=remark,
        credit_hours=mark.credit_hours,
    )
