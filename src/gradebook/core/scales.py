"""
Percentage-to-grade banding for the Nepal grading system.

Two scales are published and callers pick one deliberately:

    GENERAL_SCALE  grades 1-10 report cards, D band starts at 35%
    NEB_SCALE      NEB grade 11-12 components, D band starts at 30%

Band edges: every band covers [lower, upper) except the top band, which
covers [90, 100]. Ported tables that print 89.99 or 89 as the upper edge
describe the same band; fractional values such as 89.995 still belong to A.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from numbers import Real
from typing import Any, Tuple

NOT_GRADED = "NG"
ABSENT = "AB"


@dataclass(frozen=True)
class GradeBand:
    grade: str
    gpa_point: float
    description: str
    lower: float
    upper: float

    def contains(self, percentage: float) -> bool:
        if self.upper >= 100:
            return self.lower <= percentage <= self.upper
        return self.lower <= percentage < self.upper


@dataclass(frozen=True)
class GradeLookup:
    grade: str
    gpa_point: float
    description: str
    is_passed: bool


@dataclass(frozen=True)
class GradeScale:
    name: str
    bands: Tuple[GradeBand, ...]

    def __post_init__(self) -> None:
        if not self.bands:
            raise ValueError(f"Grade scale {self.name!r} has no bands")
        if self.bands[0].upper != 100 or self.bands[-1].lower != 0:
            raise ValueError(f"Grade scale {self.name!r} must cover 0-100")
        for higher, lower in zip(self.bands, self.bands[1:]):
            if lower.upper != higher.lower:
                raise ValueError(
                    f"Grade scale {self.name!r} has a gap or overlap at {higher.lower}"
                )
        if self.bands[-1].grade != NOT_GRADED:
            raise ValueError(f"Grade scale {self.name!r} must end with {NOT_GRADED}")

    @property
    def lowest(self) -> GradeBand:
        return self.bands[-1]

    @property
    def pass_percentage(self) -> float:
        """Lowest percentage that still earns a passing grade."""
        return self.lowest.upper


GENERAL_SCALE = GradeScale(
    name="general",
    bands=(
        GradeBand("A+", 4.0, "Outstanding", 90, 100),
        GradeBand("A", 3.6, "Excellent", 80, 90),
        GradeBand("B+", 3.2, "Very Good", 70, 80),
        GradeBand("B", 2.8, "Good", 60, 70),
        GradeBand("C+", 2.4, "Satisfactory", 50, 60),
        GradeBand("C", 2.0, "Acceptable", 40, 50),
        GradeBand("D", 1.6, "Partially Acceptable", 35, 40),
        GradeBand(NOT_GRADED, 0.0, "Not Graded", 0, 35),
    ),
)

NEB_SCALE = GradeScale(
    name="neb",
    bands=(
        GradeBand("A+", 4.0, "Outstanding", 90, 100),
        GradeBand("A", 3.6, "Excellent", 80, 90),
        GradeBand("B+", 3.2, "Very Good", 70, 80),
        GradeBand("B", 2.8, "Good", 60, 70),
        GradeBand("C+", 2.4, "Satisfactory", 50, 60),
        GradeBand("C", 2.0, "Acceptable", 40, 50),
        GradeBand("D", 1.6, "Partially Acceptable", 30, 40),
        GradeBand(NOT_GRADED, 0.0, "Not Graded", 0, 30),
    ),
)


def clamp_0_100(value: float) -> float:
    return max(0.0, min(100.0, value))


def is_numeric(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, Real):
        return False
    return not math.isnan(value)


def _lookup(band: GradeBand) -> GradeLookup:
    return GradeLookup(
        grade=band.grade,
        gpa_point=band.gpa_point,
        description=band.description,
        is_passed=band.grade != NOT_GRADED,
    )


def grade_from_percentage(percentage: Any, scale: GradeScale = GENERAL_SCALE) -> GradeLookup:
    if not is_numeric(percentage):
        return _lookup(scale.lowest)

    pct = clamp_0_100(float(percentage))
    for band in scale.bands:
        if band.contains(pct):
            return _lookup(band)
    return _lookup(scale.lowest)
