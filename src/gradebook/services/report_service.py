import logging
from dataclasses import dataclass, replace
from typing import Any, Iterable, List, Mapping, Optional, Union

from gradebook.config.settings import settings
from gradebook.core.display import result_status
from gradebook.core.errors import InvalidInput
from gradebook.core.gpa import OverallResult, aggregate_overall
from gradebook.core.grades import SubjectGradeResult, compose_subject_grade
from gradebook.core.rounding import round_half_up
from gradebook.services.validation import (
    SubjectEntryPayload,
    mark_input_from_payload,
    parse_subject_entry,
)

logger = logging.getLogger(__name__)


class ReportServiceError(Exception):
    pass


@dataclass(frozen=True)
class SubjectReportRow:
    subject_id: Union[int, str]
    subject_name: str
    subject_code: str
    credit_hours: float
    theory_credit_hours: float
    internal_credit_hours: float
    result: SubjectGradeResult
    theory_subject_code: Optional[str] = None
    practical_subject_code: Optional[str] = None


@dataclass(frozen=True)
class StudentReport:
    student_id: Union[int, str]
    is_neb: bool
    rows: List[SubjectReportRow]
    overall: OverallResult
    total_obtained: float
    total_full: float
    result_status: str
    rank: Optional[int] = None


def is_neb_class(grade_level: int) -> bool:
    return grade_level >= settings.neb_min_grade_level


class ReportCardService:
    def __init__(self, neb_theory_credit_share: float = settings.neb_theory_credit_share) -> None:
        if not 0 <= neb_theory_credit_share <= 1:
            raise ReportServiceError("NEB theory credit share must be between 0 and 1")
        self.neb_theory_credit_share = neb_theory_credit_share

    def _credit_split(self, entry: SubjectEntryPayload, credit_hours: float, is_neb: bool):
        if is_neb:
            theory = round_half_up(credit_hours * self.neb_theory_credit_share, 2)
            internal = round_half_up(credit_hours * (1 - self.neb_theory_credit_share), 2)
            return theory, internal

        theory = entry.theory_credit_hours
        internal = entry.practical_credit_hours
        if theory == 0 and internal == 0:
            theory = credit_hours
        return theory, internal

    def build_subject_rows(
        self,
        entries: Iterable[Union[Mapping[str, Any], SubjectEntryPayload]],
        *,
        is_neb: bool = False,
    ) -> List[SubjectReportRow]:
        if entries is None:
            raise InvalidInput("entries must be a list of subject entries, got None")

        rows: List[SubjectReportRow] = []
        for raw in entries:
            entry = parse_subject_entry(raw)
            mark = mark_input_from_payload(entry, settings.report_default_credit_hours)
            result = compose_subject_grade(mark)
            if not entry.credit_hours:
                logger.warning(
                    "Subject %s has no credit hours, using default %.1f",
                    entry.subject_id,
                    mark.credit_hours,
                )
            theory_credits, internal_credits = self._credit_split(entry, mark.credit_hours, is_neb)

            # NEB sheets print the theory paper code in place of the subject code
            subject_code = entry.subject_code
            if is_neb and entry.theory_subject_code:
                subject_code = entry.theory_subject_code

            rows.append(
                SubjectReportRow(
                    subject_id=entry.subject_id,
                    subject_name=entry.subject_name,
                    subject_code=subject_code,
                    credit_hours=mark.credit_hours,
                    theory_credit_hours=theory_credits,
                    internal_credit_hours=internal_credits,
                    result=result,
                    theory_subject_code=entry.theory_subject_code if is_neb else None,
                    practical_subject_code=entry.practical_subject_code if is_neb else None,
                )
            )
        return rows

    def build_student_report(
        self,
        student_id: Union[int, str],
        entries: Iterable[Union[Mapping[str, Any], SubjectEntryPayload]],
        *,
        grade_level: int,
    ) -> StudentReport:
        is_neb = is_neb_class(grade_level)
        rows = self.build_subject_rows(entries, is_neb=is_neb)
        overall = aggregate_overall([row.result for row in rows], use_credit_weighting=is_neb)

        total_obtained = sum(row.result.total_marks for row in rows)
        total_full = sum(row.result.total_full_marks for row in rows)

        logger.info(
            "Built report for student %s: %d subjects, gpa %.2f, %s",
            student_id,
            overall.total_subjects,
            overall.gpa,
            result_status(overall.is_passed),
        )
        return StudentReport(
            student_id=student_id,
            is_neb=is_neb,
            rows=rows,
            overall=overall,
            total_obtained=round_half_up(total_obtained, 2),
            total_full=total_full,
            result_status=result_status(overall.is_passed),
        )

    def rank_students(self, reports: Iterable[StudentReport]) -> List[StudentReport]:
        """
        Order by GPA, then average percentage, both descending; ranks start at 1.

        Returns ranked copies. Reports without graded subjects are left out.
        """
        if reports is None:
            raise InvalidInput("reports must be a list of StudentReport, got None")

        ordered = sorted(
            (r for r in reports if r.rows),
            key=lambda r: (r.overall.gpa, r.overall.average_percentage),
            reverse=True,
        )
        ranked = [replace(report, rank=rank) for rank, report in enumerate(ordered, start=1)]

        logger.info("Ranked %d students", len(ranked))
        return ranked
