"""
Cross-department recommendations.

Runs the eligibility evaluator against every active department as if the
candidate had applied there, and ranks the results. Nothing here touches
the candidate's own department or status.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional

from .eligibility import CandidateScores, DepartmentRules, Eligibility, evaluate_eligibility, final_score_for

DEFAULT_MARGIN = 10


class DepartmentEligibility(str, Enum):
    HIGHLY_RECOMMENDED = "HIGHLY_RECOMMENDED"
    ELIGIBLE = "ELIGIBLE"
    MAYBE_ELIGIBLE = "MAYBE_ELIGIBLE"
    NOT_ELIGIBLE = "NOT_ELIGIBLE"


PRIORITY = {
    DepartmentEligibility.HIGHLY_RECOMMENDED: 1,
    DepartmentEligibility.ELIGIBLE: 2,
    DepartmentEligibility.MAYBE_ELIGIBLE: 3,
    DepartmentEligibility.NOT_ELIGIBLE: 4,
}

RECOMMENDATION_TEXT = {
    DepartmentEligibility.HIGHLY_RECOMMENDED: "Strong candidate - exceeds requirements significantly",
    DepartmentEligibility.ELIGIBLE: "Meets all admission requirements",
    DepartmentEligibility.MAYBE_ELIGIBLE: "Close to requirements - consider if cutoff is flexible",
    DepartmentEligibility.NOT_ELIGIBLE: "Does not meet minimum UTME or O'Level requirements",
}


@dataclass(frozen=True)
class DepartmentVerdict:
    department: DepartmentRules
    final_score: int
    exam_percentage: int
    olevel_percentage: int
    requirements: Eligibility
    eligibility: DepartmentEligibility
    is_current_department: bool = False

    @property
    def priority(self) -> int:
        return PRIORITY[self.eligibility]

    @property
    def recommendation(self) -> str:
        return RECOMMENDATION_TEXT[self.eligibility]

    @property
    def is_eligible(self) -> bool:
        return self.eligibility in (DepartmentEligibility.ELIGIBLE, DepartmentEligibility.HIGHLY_RECOMMENDED)


@dataclass(frozen=True)
class RecommendationSummary:
    total_departments: int
    eligible_departments: int
    highly_recommended: int
    best: Optional[DepartmentVerdict]


def classify(requirements: Eligibility, final_score: int, department: DepartmentRules, margin: int) -> DepartmentEligibility:
    if not requirements.meets_minimum:
        return DepartmentEligibility.NOT_ELIGIBLE
    if not requirements.meets_final:
        return DepartmentEligibility.MAYBE_ELIGIBLE
    if final_score >= department.final_cutoff_mark + margin:
        return DepartmentEligibility.HIGHLY_RECOMMENDED
    return DepartmentEligibility.ELIGIBLE


def recommend_departments(
    scores: CandidateScores,
    departments: Iterable[DepartmentRules],
    margin: int = DEFAULT_MARGIN,
    current_department_id=None,
) -> List[DepartmentVerdict]:
    verdicts = []
    for department in departments:
        if not department.is_active:
            continue
        final_score = final_score_for(scores, department)
        requirements = evaluate_eligibility(
            CandidateScores(
                utme_score=scores.utme_score,
                olevel_aggregate=scores.olevel_aggregate,
                olevel_percentage=scores.olevel_percentage,
                exam_percentage=scores.exam_percentage,
                final_score=final_score,
            ),
            department,
        )
        verdicts.append(
            DepartmentVerdict(
                department=department,
                final_score=final_score,
                exam_percentage=scores.exam_percentage,
                olevel_percentage=scores.olevel_percentage,
                requirements=requirements,
                eligibility=classify(requirements, final_score, department, margin),
                is_current_department=(
                    current_department_id is not None and department.id == current_department_id
                ),
            )
        )

    # sorted() is stable: equal priorities keep the departments' given order
    return sorted(verdicts, key=lambda v: v.priority)


def summarize_recommendations(verdicts: List[DepartmentVerdict]) -> RecommendationSummary:
    best = next((v for v in verdicts if v.eligibility != DepartmentEligibility.NOT_ELIGIBLE), None)
    return RecommendationSummary(
        total_departments=len(verdicts),
        eligible_departments=sum(1 for v in verdicts if v.is_eligible),
        highly_recommended=sum(1 for v in verdicts if v.eligibility == DepartmentEligibility.HIGHLY_RECOMMENDED),
        best=best,
    )
