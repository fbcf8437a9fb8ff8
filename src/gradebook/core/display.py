from typing import Dict, List, Optional

from gradebook.core.scales import GENERAL_SCALE, NOT_GRADED, GradeScale

GRADE_COLORS: Dict[str, Dict[str, str]] = {
    "A+": {"bg": "#dcfce7", "text": "#166534"},
    "A": {"bg": "#d1fae5", "text": "#065f46"},
    "B+": {"bg": "#dbeafe", "text": "#1e40af"},
    "B": {"bg": "#e0e7ff", "text": "#3730a3"},
    "C+": {"bg": "#fef3c7", "text": "#92400e"},
    "C": {"bg": "#fef9c3", "text": "#854d0e"},
    "D": {"bg": "#fed7aa", "text": "#9a3412"},
    "NG": {"bg": "#fee2e2", "text": "#991b1b"},
    "AB": {"bg": "#f3f4f6", "text": "#6b7280"},
}


def format_gpa(gpa: Optional[float]) -> str:
    if gpa is None:
        return "0.00"
    return f"{float(gpa):.2f}"


def result_status(is_passed: bool) -> str:
    return "PASSED" if is_passed else "FAILED"


def grade_color(grade: str) -> Dict[str, str]:
    return dict(GRADE_COLORS.get(grade, GRADE_COLORS[NOT_GRADED]))


def grade_reference(scale: GradeScale = GENERAL_SCALE) -> List[Dict]:
    """Band table printed at the foot of a report card."""
    return [
        {
            "grade": band.grade,
            "gpa": band.gpa_point,
            "description": band.description,
            "min": band.lower,
            "max": band.upper,
        }
        for band in scale.bands
    ]
