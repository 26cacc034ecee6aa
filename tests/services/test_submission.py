"""
Tests for assessments.services: assignment, start and submission.
"""

import pytest

from admissions.engine import AdmissionStatus, MissingDepartmentError
from assessments import services
from assessments.models import TestAnswer, TestAttempt
from cores.models import AuditLog
from exams.models import Examination, Question

pytestmark = pytest.mark.django_db


class TestSubmitTest:

    def test_submit_when_three_of_five_right_then_graded_and_recomputed(self, candidate, attempt, answer_sheet):
        attempt, submission, outcome = services.submit_test(attempt.pk, candidate, answer_sheet(3))

        assert submission.score == 6
        assert submission.percentage == 60
        attempt.refresh_from_db()
        assert attempt.status == TestAttempt.Status.SUBMITTED
        assert attempt.score == 6
        assert attempt.end_time is not None
        assert attempt.answers.count() == 5
        assert attempt.answers.filter(is_correct=True).count() == 3
        assert outcome.assessment.final_score == 67
        candidate.refresh_from_db()
        assert candidate.admission_status == AdmissionStatus.IN_PROGRESS.value

    def test_submit_when_repeated_then_no_duplicate_answers(self, candidate, attempt, answer_sheet):
        services.submit_test(attempt.pk, candidate, answer_sheet(3))

        _, submission, _ = services.submit_test(attempt.pk, candidate, answer_sheet(3))

        assert submission.score == 6
        assert TestAnswer.objects.filter(attempt=attempt).count() == 5
        attempt.refresh_from_db()
        assert attempt.score == 6

    def test_submit_when_resubmitted_with_fewer_answers_then_stale_rows_removed(
        self, candidate, attempt, examination, answer_sheet
    ):
        services.submit_test(attempt.pk, candidate, answer_sheet(5))
        first_two = dict(list(answer_sheet(5).items())[:2])

        _, submission, _ = services.submit_test(attempt.pk, candidate, first_two)

        assert submission.score == 4
        assert sorted(attempt.answers.values_list("question_id", flat=True)) == sorted(first_two)

    def test_submit_when_not_started_then_rejected(self, candidate, attempt, answer_sheet):
        TestAttempt.objects.filter(pk=attempt.pk).update(status=TestAttempt.Status.PENDING)

        with pytest.raises(services.TestSubmissionError):
            services.submit_test(attempt.pk, candidate, answer_sheet(5))

        assert not TestAnswer.objects.filter(attempt=attempt).exists()

    def test_submit_when_other_candidates_attempt_then_not_found(self, make_candidate, attempt, answer_sheet):
        intruder = make_candidate(full_name="Someone Else")

        with pytest.raises(TestAttempt.DoesNotExist):
            services.submit_test(attempt.pk, intruder, answer_sheet(5))


    def test_submit_when_exam_total_differs_from_question_marks_then_percentages_agree(
        self, candidate, attempt, examination, answer_sheet
    ):
        Examination.objects.filter(pk=examination.pk).update(total_marks=20)

        _, submission, outcome = services.submit_test(attempt.pk, candidate, answer_sheet(5))

        assert submission.score == 10
        assert submission.total_marks == 20
        assert submission.percentage == 50
        assert outcome.assessment.exam_percentage == submission.percentage


class TestStartTest:

    def test_start_when_pending_then_in_progress(self, candidate, examination):
        attempt = TestAttempt.objects.create(candidate=candidate, examination=examination, total_marks=10)

        started = services.start_test(attempt.pk, candidate)

        assert started.status == TestAttempt.Status.IN_PROGRESS
        assert started.start_time is not None

    def test_start_when_already_submitted_then_rejected(self, candidate, attempt):
        TestAttempt.objects.filter(pk=attempt.pk).update(status=TestAttempt.Status.SUBMITTED, score=4)

        with pytest.raises(services.TestSubmissionError):
            services.start_test(attempt.pk, candidate)


class TestAssignDepartmentalTests:

    def test_assign_when_called_twice_then_single_attempt(self, candidate, examination):
        first = services.assign_departmental_tests(candidate.pk)
        second = services.assign_departmental_tests(candidate.pk)

        assert len(first) == 1
        assert second == []
        assert TestAttempt.objects.filter(candidate=candidate, examination=examination).count() == 1
        assert first[0].status == TestAttempt.Status.PENDING
        assert first[0].total_marks == 10

    def test_assign_when_exam_inactive_or_empty_then_skipped(self, candidate, department, examination):
        Examination.objects.create(department=department, title="Empty", total_marks=5, duration_minutes=10)
        retired = Examination.objects.create(
            department=department, title="Retired", total_marks=5, duration_minutes=10, is_active=False
        )
        Question.objects.create(examination=retired, text="Old", options=["a", "b"], correct_answer=0)

        attempts = services.assign_departmental_tests(candidate.pk)

        assert [a.examination for a in attempts] == [examination]

    def test_assign_when_no_examinations_then_raises(self, candidate):
        with pytest.raises(services.TestAssignmentError):
            services.assign_departmental_tests(candidate.pk)

    def test_assign_when_no_department_then_raises(self, make_candidate, examination):
        candidate = make_candidate(department=None)

        with pytest.raises(MissingDepartmentError):
            services.assign_departmental_tests(candidate.pk)

    def test_assign_all_when_some_have_tests_then_only_new_candidates(self, make_candidate, attempt, examination):
        newcomer = make_candidate(full_name="New Candidate")
        make_candidate(full_name="Undecided", department=None)

        assigned = services.assign_tests_to_candidates_without_tests()

        assert assigned == {newcomer.pk: 1}
        assert AuditLog.objects.filter(action="ASSIGN_TESTS").exists()
