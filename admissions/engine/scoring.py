"""
Exam scoring and final score composition.
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Mapping, Optional

from .grading import round_percentage

PENDING = "PENDING"
IN_PROGRESS = "IN_PROGRESS"
SUBMITTED = "SUBMITTED"
COMPLETED = "COMPLETED"

TERMINAL_ATTEMPT_STATUSES = frozenset({SUBMITTED, COMPLETED})


@dataclass(frozen=True)
class AttemptResult:
    """A test attempt as the scorer sees it: status, score and the examination's total."""
    status: str
    score: Optional[int]
    total_marks: int

    @property
    def is_scored(self) -> bool:
        return self.score is not None and self.status in TERMINAL_ATTEMPT_STATUSES


@dataclass(frozen=True)
class ExamScore:
    obtained: int
    total: int
    percentage: int


@dataclass(frozen=True)
class QuestionKey:
    question_id: int
    correct_answer: int
    marks: int


@dataclass(frozen=True)
class GradedAnswer:
    question_id: int
    selected_answer: int
    is_correct: bool
    marks_obtained: int


@dataclass
class GradedSubmission:
    answers: List[GradedAnswer] = field(default_factory=list)
    score: int = 0
    total_marks: int = 0

    @property
    def percentage(self) -> int:
        if self.total_marks <= 0:
            return 0
        return round_percentage(self.score, self.total_marks)


def has_completed_tests(attempts: Iterable[AttemptResult]) -> bool:
    return any(a.is_scored for a in attempts)


def score_exam(attempts: Iterable[AttemptResult]) -> ExamScore:
    obtained = 0
    total = 0
    for attempt in attempts:
        if not attempt.is_scored:
            continue
        obtained += attempt.score
        total += attempt.total_marks

    percentage = round_percentage(obtained, total) if total > 0 else 0
    return ExamScore(obtained=obtained, total=total, percentage=percentage)


def grade_answers(
    questions: Iterable[QuestionKey],
    selections: Mapping[int, int],
    total_marks: Optional[int] = None,
) -> GradedSubmission:
    """
    Grade one submission against its examination's questions.

    `selections` maps question id to the selected option index. Questions
    without a selection score zero and produce no answer; selections for
    questions outside the examination are ignored.

    `total_marks` is the examination's declared total, the same
    denominator score_exam uses. Without it the question marks are summed.
    """
    submission = GradedSubmission()
    question_marks = 0
    for question in questions:
        question_marks += question.marks
        selected = selections.get(question.question_id)
        if selected is None:
            continue
        is_correct = selected == question.correct_answer
        marks = question.marks if is_correct else 0
        submission.score += marks
        submission.answers.append(
            GradedAnswer(
                question_id=question.question_id,
                selected_answer=selected,
                is_correct=is_correct,
                marks_obtained=marks,
            )
        )
    submission.total_marks = question_marks if total_marks is None else total_marks
    return submission


def weighted_component(percentage: int, weight: int) -> int:
    """round(percentage * weight / 100), halves rounded up."""
    return (2 * percentage * weight + 100) // 200


def compose_final_score(exam_percentage: int, olevel_percentage: int, exam_weight: int, olevel_weight: int) -> int:
    # Each component is rounded on its own before summing. Weights are taken
    # literally even when they do not add up to 100.
    return weighted_component(exam_percentage, exam_weight) + weighted_component(olevel_percentage, olevel_weight)
