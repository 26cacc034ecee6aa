"""
Eligibility evaluation against a department's three cutoffs.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional

from .exceptions import MissingDepartmentError
from .grading import GradingTable, SubjectGrade, aggregate_olevel
from .scoring import compose_final_score

ACTIVE = "ACTIVE"
INACTIVE = "INACTIVE"

MAX_ALTERNATIVES = 5


@dataclass(frozen=True)
class DepartmentRules:
    """Cutoffs and weights of one department, detached from the ORM."""
    id: object
    name: str
    utme_cutoff_mark: Optional[int]
    olevel_cutoff_aggregate: Optional[int]
    final_cutoff_mark: Optional[int]
    exam_percentage: Optional[int]
    olevel_percentage: Optional[int]
    code: str = ""
    status: str = ACTIVE

    @property
    def is_active(self) -> bool:
        return self.status == ACTIVE


@dataclass(frozen=True)
class CandidateScores:
    utme_score: int
    olevel_aggregate: int
    olevel_percentage: int
    exam_percentage: int
    # Final score for the department being evaluated; composed from that
    # department's weights when left as None.
    final_score: Optional[int] = None


@dataclass(frozen=True)
class Eligibility:
    meets_utme: bool
    meets_olevel: bool
    meets_final: bool

    @property
    def meets_minimum(self) -> bool:
        return self.meets_utme and self.meets_olevel

    def as_dict(self):
        return {
            "meets_utme_cutoff": self.meets_utme,
            "meets_olevel_cutoff": self.meets_olevel,
            "meets_final_cutoff": self.meets_final,
        }


def has_cutoffs(department: DepartmentRules) -> bool:
    return None not in (
        department.utme_cutoff_mark,
        department.olevel_cutoff_aggregate,
        department.final_cutoff_mark,
    )


def require_cutoffs(department: Optional[DepartmentRules]) -> DepartmentRules:
    if department is None:
        raise MissingDepartmentError("Candidate has no department to evaluate against")
    missing = [
        name
        for name in ("utme_cutoff_mark", "olevel_cutoff_aggregate", "final_cutoff_mark")
        if getattr(department, name) is None
    ]
    if missing:
        raise MissingDepartmentError(f"Department '{department.name}' is missing {', '.join(missing)}")
    return department


def require_weights(department: Optional[DepartmentRules]) -> DepartmentRules:
    department = require_cutoffs(department)
    if department.exam_percentage is None or department.olevel_percentage is None:
        raise MissingDepartmentError(f"Department '{department.name}' has no exam/O'Level weights")
    return department


def final_score_for(scores: CandidateScores, department: DepartmentRules) -> int:
    department = require_weights(department)
    return compose_final_score(
        scores.exam_percentage,
        scores.olevel_percentage,
        department.exam_percentage,
        department.olevel_percentage,
    )


def evaluate_eligibility(scores: CandidateScores, department: DepartmentRules) -> Eligibility:
    department = require_cutoffs(department)
    final_score = scores.final_score
    if final_score is None:
        final_score = final_score_for(scores, department)

    return Eligibility(
        meets_utme=scores.utme_score >= department.utme_cutoff_mark,
        meets_olevel=scores.olevel_aggregate >= department.olevel_cutoff_aggregate,
        meets_final=final_score >= department.final_cutoff_mark,
    )


@dataclass(frozen=True)
class RegistrationCheck:
    department: DepartmentRules
    utme_score: int
    olevel_aggregate: int
    meets_utme: bool
    meets_olevel: bool
    alternatives: List[DepartmentRules]

    @property
    def eligible(self) -> bool:
        return self.meets_utme and self.meets_olevel

    @property
    def message(self) -> str:
        if self.eligible:
            return f"Congratulations! You meet the requirements for {self.department.name}."
        return (
            f"Sorry, you don't meet the minimum requirements for {self.department.name}. "
            f"UTME: {self.utme_score}/{self.department.utme_cutoff_mark}, "
            f"O'Level: {self.olevel_aggregate}/{self.department.olevel_cutoff_aggregate}"
        )


def check_registration_eligibility(
    utme_score: int,
    results: Iterable[SubjectGrade],
    department: DepartmentRules,
    table: GradingTable,
    departments: Iterable[DepartmentRules] = (),
    max_alternatives: int = MAX_ALTERNATIVES,
) -> RegistrationCheck:
    """
    Pre-registration check of the UTME and O'Level bars only.

    When the applicant misses either bar, up to `max_alternatives` other
    active departments whose bars they do meet are suggested.
    """
    department = require_cutoffs(department)
    olevel = aggregate_olevel(results, table)
    scores = CandidateScores(
        utme_score=utme_score,
        olevel_aggregate=olevel.aggregate,
        olevel_percentage=olevel.percentage,
        exam_percentage=0,
        final_score=0,
    )
    verdict = evaluate_eligibility(scores, department)

    alternatives = []
    if not verdict.meets_minimum:
        for other in departments:
            if len(alternatives) >= max_alternatives:
                break
            if other.id == department.id or not other.is_active or not has_cutoffs(other):
                continue
            if evaluate_eligibility(scores, other).meets_minimum:
                alternatives.append(other)

    return RegistrationCheck(
        department=department,
        utme_score=utme_score,
        olevel_aggregate=olevel.aggregate,
        meets_utme=verdict.meets_utme,
        meets_olevel=verdict.meets_olevel,
        alternatives=alternatives,
    )
