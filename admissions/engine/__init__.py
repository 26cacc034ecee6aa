"""
Admission decision engine.

Plain-data functions that turn a candidate's UTME score, O'Level grades
and test attempts into percentages, a final score and an admission
verdict. Nothing in this package imports Django.
"""

from .assessment import CandidateAssessment, assess_candidate
from .eligibility import (
    CandidateScores,
    DepartmentRules,
    Eligibility,
    RegistrationCheck,
    check_registration_eligibility,
    evaluate_eligibility,
)
from .exceptions import (
    AdmissionEngineError,
    ConcurrentUpdateError,
    DuplicateSubjectError,
    InvalidGradingTableError,
    MissingDepartmentError,
    UnknownGradeError,
)
from .grading import GradingTable, OLevelScore, SubjectGrade, aggregate_olevel
from .recommendations import (
    DepartmentEligibility,
    DepartmentVerdict,
    RecommendationSummary,
    recommend_departments,
    summarize_recommendations,
)
from .scoring import (
    AttemptResult,
    ExamScore,
    GradedAnswer,
    GradedSubmission,
    QuestionKey,
    compose_final_score,
    grade_answers,
    score_exam,
)
from .status import (
    AdministrativeOverride,
    AdmissionStatus,
    AutomaticRecompute,
    StatusOrigin,
    apply_status_event,
    derive_admission_status,
)

__all__ = [
    "AdministrativeOverride",
    "AdmissionEngineError",
    "AdmissionStatus",
    "AttemptResult",
    "AutomaticRecompute",
    "CandidateAssessment",
    "CandidateScores",
    "ConcurrentUpdateError",
    "DepartmentEligibility",
    "DepartmentRules",
    "DepartmentVerdict",
    "DuplicateSubjectError",
    "Eligibility",
    "ExamScore",
    "GradedAnswer",
    "GradedSubmission",
    "GradingTable",
    "InvalidGradingTableError",
    "MissingDepartmentError",
    "OLevelScore",
    "QuestionKey",
    "RecommendationSummary",
    "RegistrationCheck",
    "StatusOrigin",
    "SubjectGrade",
    "UnknownGradeError",
    "aggregate_olevel",
    "apply_status_event",
    "assess_candidate",
    "check_registration_eligibility",
    "compose_final_score",
    "derive_admission_status",
    "evaluate_eligibility",
    "grade_answers",
    "recommend_departments",
    "score_exam",
    "summarize_recommendations",
]
