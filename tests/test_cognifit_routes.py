"""
Tests for the Cognitive Gym proxy routes and webhook
"""
from unittest.mock import patch

from cognifit_service import CognifitAPIError, CognifitConfigError
from firestore_handler import get_user


def test_register_user_persists_token(client, auth_headers, db, user_id):
    with patch("routes.cognifit_routes.register_user", return_value="gym-token") as register:
        response = client.post("/api/cognifit/register-user", json={"locale": "es"}, headers=auth_headers)

    assert response.status_code == 200
    assert response.get_json() == {"userToken": "gym-token"}
    register.assert_called_once_with(user_id, "Ada", "Lovelace", "1990-12-10", 2, "es")
    assert get_user(db, user_id)["cognifitUserToken"] == "gym-token"


def test_register_user_reuses_existing_token(client, auth_headers):
    with patch("routes.cognifit_routes.register_user", return_value="gym-token"):
        client.post("/api/cognifit/register-user", headers=auth_headers)

    with patch("routes.cognifit_routes.register_user") as register:
        response = client.post("/api/cognifit/register-user", headers=auth_headers)

    assert response.get_json() == {"userToken": "gym-token"}
    register.assert_not_called()


def test_register_user_rejects_invalid_details(client, auth_headers):
    with patch("routes.cognifit_routes.register_user") as register:
        response = client.post("/api/cognifit/register-user", json={"sex": "3"}, headers=auth_headers)

    assert response.status_code == 400
    register.assert_not_called()


def test_register_user_hides_service_errors(client, auth_headers, db, user_id):
    with patch("routes.cognifit_routes.register_user", side_effect=CognifitAPIError("Cognitive Gym API error: boom")):
        response = client.post("/api/cognifit/register-user", headers=auth_headers)

    assert response.status_code == 500
    assert "boom" not in response.get_json()["error"]
    assert get_user(db, user_id)["cognifitUserToken"] is None


def test_register_user_reports_configuration_errors(client, auth_headers):
    with patch("routes.cognifit_routes.register_user", side_effect=CognifitConfigError("no secret")):
        response = client.post("/api/cognifit/register-user", headers=auth_headers)

    assert response.status_code == 500
    assert response.get_json()["error"] == "Cognitive Gym service configuration error."


def test_issue_access_token_defaults_to_stored_token(client, auth_headers):
    with patch("routes.cognifit_routes.register_user", return_value="gym-token"):
        client.post("/api/cognifit/register-user", headers=auth_headers)

    with patch("routes.cognifit_routes.issue_access_token", return_value="access-1") as issue:
        response = client.post("/api/cognifit/issue-access-token", headers=auth_headers)

    assert response.status_code == 200
    assert response.get_json() == {"accessToken": "access-1"}
    issue.assert_called_once_with("gym-token")


def test_issue_access_token_without_any_token(client, auth_headers):
    with patch("routes.cognifit_routes.issue_access_token") as issue:
        response = client.post("/api/cognifit/issue-access-token", json={}, headers=auth_headers)

    assert response.status_code == 400
    issue.assert_not_called()


def test_sdk_version(client):
    with patch("routes.cognifit_routes.get_sdk_version", return_value="4.1.2"):
        response = client.get("/api/cognifit/sdk-version")
    assert response.get_json() == {"version": "4.1.2"}

    with patch("routes.cognifit_routes.get_sdk_version", side_effect=CognifitAPIError("down")):
        response = client.get("/api/cognifit/sdk-version")
    assert response.status_code == 500
    assert response.get_json()["error"] == "Could not connect to Cognitive Gym services to load the game SDK. Please try again later."


def test_webhook_accepts_json(client):
    response = client.post("/api/cognifit-webhook", json={"event": "session_completed", "user_token": "gym-token"})

    assert response.status_code == 200
    assert response.get_json() == {"message": "Webhook received successfully"}


def test_webhook_rejects_invalid_json(client):
    response = client.post("/api/cognifit-webhook", data="{not json", content_type="application/json")

    assert response.status_code == 400
    assert response.get_json() == {"error": "Invalid JSON payload"}


def test_webhook_get_reports_status(client):
    response = client.get("/api/cognifit-webhook")

    assert response.status_code == 200
    assert "active" in response.get_json()["message"]


def test_non_object_bodies_are_rejected(client, auth_headers):
    with patch("routes.cognifit_routes.register_user") as register, \
            patch("routes.cognifit_routes.issue_access_token") as issue:
        assert client.post("/api/cognifit/register-user", json=["Ada"], headers=auth_headers).status_code == 400
        assert client.post("/api/cognifit/issue-access-token", json=["tok"], headers=auth_headers).status_code == 400

    register.assert_not_called()
    issue.assert_not_called()
