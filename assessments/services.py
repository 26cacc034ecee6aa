import logging

from django.db import transaction
from django.utils import timezone

from admissions.engine import MissingDepartmentError, grade_answers
from admissions.models import Candidate
from admissions.services import lock_candidate, recompute_candidate
from cores.models import AuditLog
from exams.models import Examination

from .models import TestAnswer, TestAttempt

logger = logging.getLogger(__name__)


class TestSubmissionError(Exception):
    """Raised when an attempt cannot be started or submitted."""


class TestAssignmentError(Exception):
    """Raised when departmental tests cannot be assigned to a candidate."""


def departmental_examinations(department_id):
    return (
        Examination.objects
        .filter(department_id=department_id, is_active=True, questions__isnull=False)
        .distinct()
        .order_by('id')
    )


def assign_departmental_tests(candidate_id):
    """
    Create a PENDING attempt for every active examination of the
    candidate's department that has questions. Examinations the candidate
    already has an attempt for are skipped. Returns the new attempts.
    """
    with transaction.atomic():
        candidate = lock_candidate(candidate_id)
        if candidate.department_id is None:
            raise MissingDepartmentError(f"Candidate {candidate.pk} has no department")

        examinations = list(departmental_examinations(candidate.department_id))
        if not examinations:
            raise TestAssignmentError(f"No active examinations with questions for department {candidate.department_id}")

        created_attempts = []
        for examination in examinations:
            attempt, created = TestAttempt.objects.get_or_create(
                candidate=candidate,
                examination=examination,
                defaults={'total_marks': examination.total_marks},
            )
            if created:
                created_attempts.append(attempt)

    logger.info(
        "Assigned %s test(s) to candidate %s (%s already assigned)",
        len(created_attempts), candidate.pk, len(examinations) - len(created_attempts),
    )
    return created_attempts


def assign_tests_to_candidates_without_tests(actor=None):
    """
    Assign departmental tests to every candidate with a department and no
    attempts yet. Returns {candidate_id: number of tests assigned}.
    """
    candidate_ids = list(
        Candidate.objects
        .filter(department__isnull=False, test_attempts__isnull=True)
        .order_by('id')
        .values_list('id', flat=True)
    )

    assigned = {}
    for candidate_id in candidate_ids:
        try:
            assigned[candidate_id] = len(assign_departmental_tests(candidate_id))
        except (TestAssignmentError, MissingDepartmentError) as e:
            logger.warning("Skipping candidate %s: %s", candidate_id, e)

    AuditLog.record(
        actor, 'ASSIGN_TESTS', 'TestAttempt',
        details=f"Assigned {sum(assigned.values())} test(s) to {len(assigned)} candidate(s)",
    )
    return assigned


def start_test(attempt_id, candidate):
    """PENDING -> IN_PROGRESS. Starting an attempt already in progress is a no-op."""
    with transaction.atomic():
        attempt = TestAttempt.objects.select_for_update().get(pk=attempt_id, candidate=candidate)
        if attempt.is_terminal:
            raise TestSubmissionError("Test already submitted")
        if not attempt.examination.is_active:
            raise TestSubmissionError("Examination is not active")

        if attempt.status == TestAttempt.Status.PENDING:
            attempt.status = TestAttempt.Status.IN_PROGRESS
            attempt.start_time = timezone.now()
            attempt.save(update_fields=['status', 'start_time'])
    return attempt


def submit_test(attempt_id, candidate, selections):
    """
    Grade a submission, store the answers and recompute the candidate.

    `selections` maps question id to the chosen option index. Submitting
    again regrades the attempt: existing answers are overwritten and
    answers for questions left out this time are removed.

    Returns (attempt, submission, recompute outcome).
    """
    with transaction.atomic():
        # Candidate first: concurrent submissions for one candidate queue here
        lock_candidate(candidate.pk)
        attempt = (
            TestAttempt.objects.select_for_update()
            .select_related('examination')
            .get(pk=attempt_id, candidate=candidate)
        )
        if attempt.status == TestAttempt.Status.PENDING:
            raise TestSubmissionError("Test has not been started")

        submission = grade_answers(
            attempt.examination.answer_key(), selections, total_marks=attempt.examination.total_marks
        )

        for answer in submission.answers:
            TestAnswer.objects.update_or_create(
                attempt=attempt,
                question_id=answer.question_id,
                defaults={
                    'selected_answer': answer.selected_answer,
                    'is_correct': answer.is_correct,
                    'marks_obtained': answer.marks_obtained,
                },
            )
        attempt.answers.exclude(question_id__in=[a.question_id for a in submission.answers]).delete()

        attempt.status = TestAttempt.Status.SUBMITTED
        attempt.score = submission.score
        attempt.end_time = timezone.now()
        attempt.save(update_fields=['status', 'score', 'end_time'])

        outcome = recompute_candidate(candidate.pk)

    logger.info(
        "Candidate %s submitted attempt %s: %s/%s",
        candidate.pk, attempt.pk, submission.score, submission.total_marks,
    )
    return attempt, submission, outcome
