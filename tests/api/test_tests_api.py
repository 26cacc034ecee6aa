"""
HTTP tests for the candidate test flow and test assignment.
"""

import pytest

from assessments.models import TestAttempt

pytestmark = pytest.mark.django_db


class TestCandidateTestFlow:

    @pytest.fixture
    def pending(self, candidate, examination):
        return TestAttempt.objects.create(candidate=candidate, examination=examination, total_marks=10)

    def test_list_when_candidate_then_own_attempts(self, candidate_client, pending):
        response = candidate_client.get("/api/candidate/tests/")

        assert response.status_code == 200
        assert [a["id"] for a in response.json()] == [pending.pk]

    def test_detail_when_candidate_then_questions_without_answers(self, candidate_client, pending):
        response = candidate_client.get(f"/api/candidate/tests/{pending.pk}/")

        assert response.status_code == 200
        questions = response.json()["examination"]["questions"]
        assert len(questions) == 5
        assert "correct_answer" not in questions[0]

    def test_start_then_submit_when_candidate_then_graded(self, candidate_client, pending, answer_sheet):
        started = candidate_client.post(f"/api/candidate/tests/{pending.pk}/start/")
        assert started.status_code == 200
        assert started.json()["status"] == "IN_PROGRESS"

        answers = {str(k): v for k, v in answer_sheet(5).items()}
        response = candidate_client.post(f"/api/candidate/tests/{pending.pk}/submit/", {"answers": answers}, format="json")

        assert response.status_code == 200
        body = response.json()
        assert body["score"] == 10
        assert body["percentage"] == 100
        assert body["final_score"] == 95
        assert body["admission_status"] == "ADMITTED"

    def test_submit_when_not_started_then_400(self, candidate_client, pending, answer_sheet):
        answers = {str(k): v for k, v in answer_sheet(5).items()}

        response = candidate_client.post(f"/api/candidate/tests/{pending.pk}/submit/", {"answers": answers}, format="json")

        assert response.status_code == 400

    def test_submit_when_attempt_belongs_to_other_then_404(self, candidate_client, make_candidate, examination):
        other = make_candidate(full_name="Other Candidate")
        foreign = TestAttempt.objects.create(candidate=other, examination=examination, total_marks=10)

        response = candidate_client.post(f"/api/candidate/tests/{foreign.pk}/submit/", {"answers": {}}, format="json")

        assert response.status_code == 404


class TestAdminAssignTests:

    def test_assign_when_candidate_given_then_created_once(self, officer_client, candidate, examination):
        first = officer_client.post("/api/admin/assign-tests/", {"candidate_id": candidate.pk}, format="json")
        second = officer_client.post("/api/admin/assign-tests/", {"candidate_id": candidate.pk}, format="json")

        assert first.status_code == 201
        assert first.json()["tests_assigned"] == 1
        assert second.status_code == 200
        assert second.json()["tests_assigned"] == 0

    def test_assign_when_no_candidate_given_then_all_without_tests(self, officer_client, candidate, examination):
        response = officer_client.post("/api/admin/assign-tests/", {}, format="json")

        assert response.status_code == 200
        assert response.json() == {"candidates": 1, "tests_assigned": 1}

    def test_assign_when_candidate_user_then_403(self, candidate_client, candidate):
        response = candidate_client.post("/api/admin/assign-tests/", {}, format="json")

        assert response.status_code == 403
