from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Tuple

from gradebook.core.errors import InvalidInput
from gradebook.core.grades import DEFAULT_CREDIT_HOURS, SubjectGradeResult
from gradebook.core.rounding import round_half_up
from gradebook.core.scales import (
    GENERAL_SCALE,
    NEB_SCALE,
    NOT_GRADED,
    grade_from_percentage,
    is_numeric,
)


@dataclass(frozen=True)
class OverallResult:
    gpa: float
    grade: str
    is_passed: bool
    total_subjects: int
    passed_subjects: int
    failed_subjects: int
    average_percentage: float
    total_credits: float


# (minimum gpa, overall grade), highest first
NEB_GPA_GRADES: Tuple[Tuple[float, str], ...] = (
    (3.6, "A+"),
    (3.2, "A"),
    (2.8, "B+"),
    (2.4, "B"),
    (2.0, "C+"),
    (1.6, "C"),
    (1.2, "D"),
)


def _credit_hours(value) -> float:
    if not is_numeric(value) or value <= 0:
        return DEFAULT_CREDIT_HOURS
    return float(value)


def _number_or_zero(value) -> float:
    return float(value) if is_numeric(value) else 0.0


def aggregate_overall(
    subjects: Iterable[SubjectGradeResult],
    *,
    use_credit_weighting: bool = False,
) -> OverallResult:
    """
    Combine per-subject results into one verdict.

    use_credit_weighting=True (NEB grade 11-12):
        GPA = Σ(final_gpa * credit_hours) / Σ(credit_hours)
    use_credit_weighting=False (grade 1-10):
        GPA = mean(final_gpa)

    The display grade comes from the mean final percentage, not from the GPA.
    Any failed subject fails the whole result.
    """
    if subjects is None:
        raise InvalidInput("subjects must be a list of SubjectGradeResult, got None")
    try:
        subjects = list(subjects)
    except TypeError as exc:
        raise InvalidInput(f"subjects must be iterable, got {type(subjects).__name__}") from exc

    if not subjects:
        return OverallResult(
            gpa=0.0,
            grade=NOT_GRADED,
            is_passed=False,
            total_subjects=0,
            passed_subjects=0,
            failed_subjects=0,
            average_percentage=0.0,
            total_credits=0.0,
        )

    total_gpa = 0.0
    total_percentage = 0.0
    weighted_gpa = 0.0
    total_credits = 0.0
    passed_subjects = 0
    failed_subjects = 0

    for subject in subjects:
        if not isinstance(subject, SubjectGradeResult):
            raise InvalidInput(f"Expected SubjectGradeResult, got {type(subject).__name__}")
        gpa = _number_or_zero(subject.final_gpa)
        credits = _credit_hours(subject.credit_hours)

        total_gpa += gpa
        total_percentage += _number_or_zero(subject.final_percentage)
        weighted_gpa += gpa * credits
        total_credits += credits

        if subject.is_passed:
            passed_subjects += 1
        else:
            failed_subjects += 1

    if use_credit_weighting and total_credits > 0:
        gpa = weighted_gpa / total_credits
    else:
        gpa = total_gpa / len(subjects)

    average_percentage = total_percentage / len(subjects)
    rounded_gpa = round_half_up(gpa, 2)

    is_passed = failed_subjects == 0 and rounded_gpa > 0
    display = grade_from_percentage(average_percentage, GENERAL_SCALE)

    return OverallResult(
        gpa=rounded_gpa,
        grade=display.grade if is_passed else NOT_GRADED,
        is_passed=is_passed,
        total_subjects=len(subjects),
        passed_subjects=passed_subjects,
        failed_subjects=failed_subjects,
        average_percentage=round_half_up(average_percentage, 2),
        total_credits=round_half_up(total_credits, 1),
    )


def calculate_neb_gpa(results: Iterable[Tuple[float, float]], *, round_to: int = 2) -> float:
    """
    results: iterable of (percentage, credit_hours)
    GPA = Σ(grade_point * credit_hours) / Σ(credit_hours), NEB scale
    """
    weighted_sum = 0.0
    total_credits = 0.0

    for percentage, credit_hours in results:
        point = grade_from_percentage(percentage, NEB_SCALE).gpa_point
        weighted_sum += point * credit_hours
        total_credits += credit_hours

    if total_credits == 0:
        return 0.0

    return round_half_up(weighted_sum / total_credits, round_to)


def grade_from_gpa(gpa: float) -> str:
    if not is_numeric(gpa):
        return NOT_GRADED
    for minimum, grade in NEB_GPA_GRADES:
        if gpa >= minimum:
            return grade
    return NOT_GRADED
