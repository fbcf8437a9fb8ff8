from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional

from gradebook.core.errors import InvalidInput
from gradebook.core.gpa import calculate_neb_gpa
from gradebook.core.grades import calculate_percentage
from gradebook.core.rounding import round_half_up
from gradebook.core.scales import NEB_SCALE, grade_from_percentage


class ComponentType(str, Enum):
    THEORY = "THEORY"
    PRACTICAL = "PRACTICAL"


@dataclass(frozen=True)
class ComponentMark:
    component_id: str
    type: ComponentType
    marks_obtained: float
    full_marks: float
    pass_marks: float
    credit_hours: float


@dataclass(frozen=True)
class ComponentGrade:
    component_id: str
    type: ComponentType
    marks_obtained: float
    full_marks: float
    pass_marks: float
    credit_hours: float
    percentage: float
    grade: str
    gpa: float
    passed: bool


@dataclass(frozen=True)
class ComponentResult:
    component_grades: List[ComponentGrade]
    subject_gpa: float
    passed: bool


def is_component_passed(marks_obtained: float, pass_marks: float) -> bool:
    return marks_obtained >= pass_marks


def is_subject_passed(theory: ComponentMark, practical: Optional[ComponentMark] = None) -> bool:
    """Theory must always pass; a practical, when present, must pass too."""
    if not is_component_passed(theory.marks_obtained, theory.pass_marks):
        return False
    if practical is not None:
        return is_component_passed(practical.marks_obtained, practical.pass_marks)
    return True


def process_component_marks(components: Iterable[ComponentMark]) -> ComponentResult:
    if components is None:
        raise InvalidInput("components must be a list of ComponentMark, got None")

    graded: List[ComponentGrade] = []
    raw_percentages: List[float] = []
    for cm in components:
        if not isinstance(cm, ComponentMark):
            raise InvalidInput(f"Expected ComponentMark, got {type(cm).__name__}")
        percentage = calculate_percentage(cm.marks_obtained, cm.full_marks)
        lookup = grade_from_percentage(percentage, NEB_SCALE)
        raw_percentages.append(percentage)
        graded.append(
            ComponentGrade(
                component_id=cm.component_id,
                type=cm.type,
                marks_obtained=cm.marks_obtained,
                full_marks=cm.full_marks,
                pass_marks=cm.pass_marks,
                credit_hours=cm.credit_hours,
                percentage=round_half_up(percentage, 2),
                grade=lookup.grade,
                gpa=lookup.gpa_point,
                passed=is_component_passed(cm.marks_obtained, cm.pass_marks),
            )
        )

    theory = [c for c in graded if c.type == ComponentType.THEORY]
    practical = [c for c in graded if c.type == ComponentType.PRACTICAL]
    # practical failure fails the subject just like theory failure
    passed = all(c.passed for c in theory) and all(c.passed for c in practical)

    subject_gpa = calculate_neb_gpa(
        (pct, c.credit_hours) for pct, c in zip(raw_percentages, graded)
    )

    return ComponentResult(component_grades=graded, subject_gpa=subject_gpa, passed=passed)
