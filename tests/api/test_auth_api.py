import pytest

pytestmark = pytest.mark.django_db


def test_login_when_candidate_then_token_with_admission_status(anon_client, candidate):
    response = anon_client.post(
        "/api/auth/login/", {"email": "AMINA@example.com", "password": "s3cret-pass"}, format="json"
    )

    assert response.status_code == 200
    body = response.json()
    assert "access" in body and "refresh" in body
    assert body["user"]["candidate"]["department"] == "Computer Science"
    assert body["user"]["candidate"]["admission_status"] == "NOT_ADMITTED"


def test_login_when_wrong_password_then_401(anon_client, candidate_user):
    response = anon_client.post(
        "/api/auth/login/", {"email": "amina@example.com", "password": "nope"}, format="json"
    )

    assert response.status_code == 401


def test_profile_when_authenticated_then_returns_user(candidate_client):
    response = candidate_client.get("/api/auth/me/")

    assert response.status_code == 200
    assert response.json()["email"] == "amina@example.com"
