"""
One-shot assessment of a candidate: every derived field from raw inputs.

The recomputation service calls this with everything it read under the
candidate lock and writes the result back in a single update.
"""

from dataclasses import dataclass
from typing import Iterable

from .eligibility import CandidateScores, DepartmentRules, Eligibility, evaluate_eligibility, final_score_for
from .grading import GradingTable, SubjectGrade, aggregate_olevel
from .scoring import AttemptResult, ExamScore, has_completed_tests, score_exam
from .status import AdmissionStatus, derive_admission_status


@dataclass(frozen=True)
class CandidateAssessment:
    olevel_aggregate: int
    olevel_percentage: int
    exam: ExamScore
    final_score: int
    eligibility: Eligibility
    has_completed_tests: bool
    derived_status: AdmissionStatus

    @property
    def exam_percentage(self) -> int:
        return self.exam.percentage


def assess_candidate(
    utme_score: int,
    results: Iterable[SubjectGrade],
    attempts: Iterable[AttemptResult],
    department: DepartmentRules,
    table: GradingTable,
) -> CandidateAssessment:
    attempts = list(attempts)
    olevel = aggregate_olevel(results, table)
    exam = score_exam(attempts)

    scores = CandidateScores(
        utme_score=utme_score,
        olevel_aggregate=olevel.aggregate,
        olevel_percentage=olevel.percentage,
        exam_percentage=exam.percentage,
    )
    final_score = final_score_for(scores, department)
    eligibility = evaluate_eligibility(
        CandidateScores(
            utme_score=utme_score,
            olevel_aggregate=olevel.aggregate,
            olevel_percentage=olevel.percentage,
            exam_percentage=exam.percentage,
            final_score=final_score,
        ),
        department,
    )
    completed = has_completed_tests(attempts)

    return CandidateAssessment(
        olevel_aggregate=olevel.aggregate,
        olevel_percentage=olevel.percentage,
        exam=exam,
        final_score=final_score,
        eligibility=eligibility,
        has_completed_tests=completed,
        derived_status=derive_admission_status(completed, eligibility),
    )
