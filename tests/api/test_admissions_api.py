"""
HTTP tests for the admissions endpoints.
"""

import pytest
from rest_framework.test import APIClient

from admissions import services
from admissions.models import Candidate, Department, OLevelResult
from assessments.models import TestAttempt
from users.models import User

pytestmark = pytest.mark.django_db

SCENARIO_PAYLOAD = [
    {"subject": "Mathematics", "grade": "B2"},
    {"subject": "English Language", "grade": "a1"},
    {"subject": "Physics", "grade": "B3"},
    {"subject": "Chemistry", "grade": "C4"},
    {"subject": "Biology", "grade": "B2"},
]


class TestPublicEndpoints:

    def test_departments_when_anonymous_then_only_active_listed(self, anon_client, department):
        Department.objects.create(
            name="Archaeology", code="ARC", utme_cutoff_mark=180, olevel_cutoff_aggregate=15,
            final_cutoff_mark=40, status=Department.Status.INACTIVE,
        )

        response = anon_client.get("/api/public/departments/")

        assert response.status_code == 200
        assert [d["code"] for d in response.json()] == ["CSC"]

    def test_eligibility_check_when_bars_met_then_eligible(self, anon_client, grading_rules, department):
        payload = {"utme_score": 265, "olevel_results": SCENARIO_PAYLOAD, "department_id": department.pk}

        response = anon_client.post("/api/eligibility/check/", payload, format="json")

        assert response.status_code == 200
        body = response.json()
        assert body["eligible"] is True
        assert body["olevel"]["achieved"] == 38
        assert body["alternatives"] == []

    def test_eligibility_check_when_grade_unknown_then_400(self, anon_client, grading_rules, department):
        results = SCENARIO_PAYLOAD[:4] + [{"subject": "Biology", "grade": "Q9"}]
        payload = {"utme_score": 265, "olevel_results": results, "department_id": department.pk}

        response = anon_client.post("/api/eligibility/check/", payload, format="json")

        assert response.status_code == 400
        assert "Q9" in response.json()["error"]

    def test_eligibility_check_when_department_missing_then_400(self, anon_client, grading_rules):
        payload = {"utme_score": 265, "olevel_results": SCENARIO_PAYLOAD, "department_id": 9999}

        response = anon_client.post("/api/eligibility/check/", payload, format="json")

        assert response.status_code == 400
        assert "department_id" in response.json()

    def test_eligibility_check_when_too_few_subjects_then_400(self, anon_client, grading_rules, department):
        payload = {"utme_score": 265, "olevel_results": SCENARIO_PAYLOAD[:3], "department_id": department.pk}

        response = anon_client.post("/api/eligibility/check/", payload, format="json")

        assert response.status_code == 400


class TestCandidateEndpoints:

    def test_result_when_candidate_then_scores_and_requirements(self, candidate_client, candidate):
        services.recompute_candidate(candidate.pk)

        response = candidate_client.get("/api/candidate/result/")

        assert response.status_code == 200
        body = response.json()
        assert body["olevel_aggregate"] == 38
        assert body["admission_status"] == "NOT_ADMITTED"
        assert body["requirements"] == {
            "meets_utme_cutoff": True,
            "meets_olevel_cutoff": True,
            "meets_final_cutoff": False,
        }

    def test_result_when_officer_without_candidate_then_403(self, officer_client):
        response = officer_client.get("/api/candidate/result/")

        assert response.status_code == 403

    def test_recalculate_when_test_submitted_then_in_progress(self, candidate_client, candidate, attempt):
        TestAttempt.objects.filter(pk=attempt.pk).update(status=TestAttempt.Status.SUBMITTED, score=6)

        response = candidate_client.post("/api/candidate/recalculate/")

        assert response.status_code == 200
        body = response.json()
        assert body["final_score"] == 67
        assert body["exam"] == {"obtained": 6, "total": 10, "percentage": 60}
        assert body["admission_status"] == "IN_PROGRESS"

    def test_recalculate_when_grade_unknown_then_400(self, candidate_client, candidate):
        OLevelResult.objects.filter(candidate=candidate, subject="Physics").update(grade="Z1")

        response = candidate_client.post("/api/candidate/recalculate/")

        assert response.status_code == 400

    def test_recommendations_when_candidate_then_ranked_with_summary(self, candidate_client, candidate, attempt):
        TestAttempt.objects.filter(pk=attempt.pk).update(status=TestAttempt.Status.SUBMITTED, score=6)
        Department.objects.create(
            name="Agriculture", code="AGR", utme_cutoff_mark=180, olevel_cutoff_aggregate=15, final_cutoff_mark=50
        )

        response = candidate_client.get("/api/candidate/recommendations/")

        assert response.status_code == 200
        body = response.json()
        assert [r["department"]["code"] for r in body["recommendations"]] == ["AGR", "CSC"]
        assert body["recommendations"][0]["eligibility"] == "HIGHLY_RECOMMENDED"
        assert body["recommendations"][1]["is_current_department"] is True
        assert body["best_recommendation"]["department"]["code"] == "AGR"
        assert body["summary"]["total_departments"] == 2
        # Read-only: nothing about the candidate changes
        candidate.refresh_from_db()
        assert candidate.version == 0


class TestAdminEndpoints:

    def test_candidate_recalculate_when_candidate_user_then_403(self, candidate_client, candidate):
        response = candidate_client.post(f"/api/admin/candidates/{candidate.pk}/recalculate/")

        assert response.status_code == 403

    def test_candidate_recalculate_when_unknown_candidate_then_404(self, officer_client):
        response = officer_client.post("/api/admin/candidates/424242/recalculate/")

        assert response.status_code == 404

    def test_candidate_recalculate_when_version_conflict_then_409(self, officer_client, candidate, monkeypatch):
        stale = Candidate.objects.get(pk=candidate.pk)
        Candidate.objects.filter(pk=candidate.pk).update(version=3)
        monkeypatch.setattr(services, "lock_candidate", lambda candidate_id: stale)

        response = officer_client.post(f"/api/admin/candidates/{candidate.pk}/recalculate/")

        assert response.status_code == 409
        assert response.json()["retryable"] is True

    def test_batch_recalculate_when_one_fails_then_reported(self, officer_client, make_candidate):
        make_candidate(full_name="Fine")
        orphan = make_candidate(full_name="Orphan", department=None)

        response = officer_client.post("/api/admin/candidates/recalculate/", {}, format="json")

        assert response.status_code == 200
        body = response.json()
        assert body["processed"] == 2
        assert body["succeeded"] == 1
        assert body["failures"][0]["candidate_id"] == orphan.pk

    def test_override_when_officer_then_status_set_and_history_listed(self, officer_client, candidate):
        response = officer_client.post(
            f"/api/admin/candidates/{candidate.pk}/override/",
            {"status": "ADMITTED", "reason": "Merit list"},
            format="json",
        )

        assert response.status_code == 200
        assert response.json()["admission_status"] == "ADMITTED"

        history = officer_client.get(f"/api/admin/candidates/{candidate.pk}/decisions/")
        assert history.status_code == 200
        entry = history.json()[0]
        assert entry["origin"] == "OVERRIDE"
        assert entry["actor_email"] == "officer@example.com"

    def test_override_when_status_invalid_then_400(self, officer_client, candidate):
        response = officer_client.post(
            f"/api/admin/candidates/{candidate.pk}/override/", {"status": "WAITLISTED"}, format="json"
        )

        assert response.status_code == 400

    def test_olevel_results_when_officer_replaces_then_recomputed(self, officer_client, candidate):
        payload = [dict(item) for item in SCENARIO_PAYLOAD]
        payload[2]["grade"] = "A1"

        response = officer_client.put(
            f"/api/admin/candidates/{candidate.pk}/olevel-results/", {"olevel_results": payload}, format="json"
        )

        assert response.status_code == 200
        body = response.json()
        assert body["olevel_aggregate"] == 40
        assert body["olevel_percentage"] == 89
        assert body["final_score"] == 27
        assert OLevelResult.objects.get(candidate=candidate, subject="Physics").grade == "A1"

    def test_olevel_results_when_subject_repeated_then_400_and_results_kept(self, officer_client, candidate):
        payload = SCENARIO_PAYLOAD + [{"subject": "physics", "grade": "A1"}]

        response = officer_client.put(
            f"/api/admin/candidates/{candidate.pk}/olevel-results/", {"olevel_results": payload}, format="json"
        )

        assert response.status_code == 400
        assert "more than once" in response.json()["error"]
        assert OLevelResult.objects.filter(candidate=candidate).count() == 5
        assert OLevelResult.objects.get(candidate=candidate, subject="Physics").grade == "B3"

    def test_olevel_results_when_empty_then_400(self, officer_client, candidate):
        response = officer_client.put(
            f"/api/admin/candidates/{candidate.pk}/olevel-results/", {"olevel_results": []}, format="json"
        )

        assert response.status_code == 400
        assert OLevelResult.objects.filter(candidate=candidate).count() == 5

    def test_olevel_results_when_candidate_user_then_403(self, candidate_client, candidate):
        response = candidate_client.put(
            f"/api/admin/candidates/{candidate.pk}/olevel-results/", {"olevel_results": SCENARIO_PAYLOAD}, format="json"
        )

        assert response.status_code == 403

    @pytest.mark.parametrize("extra", [{"is_staff": True}, {"role": User.Role.ADMIN}])
    def test_admin_endpoint_when_staff_or_admin_role_then_allowed(self, extra):
        user = User.objects.create_user(username="manager", email="manager@example.com", password="s3cret-pass", **extra)
        client = APIClient()
        client.force_authenticate(user=user)

        response = client.get("/api/admin/stats/")

        assert response.status_code == 200

    def test_stats_when_officer_then_counts_per_status(self, officer_client, candidate, officer):
        services.override_admission_status(candidate.pk, "REJECTED", actor=officer)

        response = officer_client.get("/api/admin/stats/")

        assert response.status_code == 200
        body = response.json()
        assert body["total_candidates"] == 1
        assert body["by_status"]["REJECTED"] == 1
        assert body["by_status"]["ADMITTED"] == 0

    def test_settings_when_weights_do_not_add_up_then_400(self, officer_client):
        response = officer_client.put(
            "/api/admin/settings/", {"default_exam_weight": 80, "default_olevel_weight": 30}, format="json"
        )

        assert response.status_code == 400

    def test_settings_when_margin_updated_then_audited(self, officer_client):
        response = officer_client.put("/api/admin/settings/", {"recommendation_margin": 15}, format="json")

        assert response.status_code == 200
        assert response.json()["recommendation_margin"] == 15
        logs = officer_client.get("/api/admin/audit-logs/").json()
        assert logs[0]["action"] == "SETTINGS"
