# cognifit_service.py

import logging
import os
import re

import requests

DEFAULT_API_BASE_URL = "https://api.cognifit.com"
# Gym accounts are created with an internal e-mail derived from our user id.
INTERNAL_EMAIL_SUFFIX = "@xillo.us"
REQUEST_TIMEOUT = 10
VALID_SEXES = (1, 2)
_VERSION_PATTERN = re.compile(r"^\d+\.\d+\.\d+.*$")


class CognifitError(Exception):
    pass


class CognifitConfigError(CognifitError):
    pass


class CognifitAPIError(CognifitError):
    pass


def _base_url() -> str:
    return os.getenv("COGNIFIT_API_BASE_URL", DEFAULT_API_BASE_URL).rstrip("/")


def _client_credentials():
    client_id = os.getenv("COGNIFIT_CLIENT_ID")
    client_secret = os.getenv("COGNIFIT_CLIENT_SECRET")
    if not client_id or not client_secret:
        raise CognifitConfigError("Cognitive Gym API client ID or secret is not configured.")
    return client_id, client_secret


def _error_detail(response) -> str:
    try:
        data = response.json()
    except ValueError:
        return response.text or response.reason
    if isinstance(data, dict):
        return data.get("errorMessage") or data.get("error") or response.reason
    return response.reason


def _post(path: str, payload: dict) -> dict:
    url = f"{_base_url()}{path}"
    try:
        response = requests.post(url, json=payload, timeout=REQUEST_TIMEOUT)
    except requests.exceptions.RequestException as e:
        logging.error(f"Cognitive Gym request to {path} FAILED: {e}")
        raise CognifitAPIError(f"Cognitive Gym API error: {e}") from e

    if not response.ok:
        detail = _error_detail(response)
        logging.error(f"Cognitive Gym API error response from {path} ({response.status_code}): {detail}")
        raise CognifitAPIError(f"Cognitive Gym API error: {detail}")

    try:
        return response.json()
    except ValueError as e:
        raise CognifitAPIError(f"Cognitive Gym API error: invalid JSON from {path}") from e


def register_user(app_user_id: str, first_name: str, last_name: str, birth_date: str, sex: int, locale: str = "en") -> str:
    """
    Registers a new user with the Cognitive Gym and returns their user_token.
    birth_date is "YYYY-MM-DD"; sex is 1 (male) or 2 (female).
    """
    client_id, client_secret = _client_credentials()
    if sex not in VALID_SEXES:
        raise ValueError("Invalid sex value for Cognitive Gym registration.")

    internal_email = f"{app_user_id}{INTERNAL_EMAIL_SUFFIX}"
    data = _post("/users", {
        "client_id": client_id,
        "client_secret": client_secret,
        "user_name": first_name,
        "user_lastname": last_name,
        "user_email": internal_email,
        "user_password": os.getenv("COGNIFIT_USER_PASSWORD", ""),
        "user_birthday": birth_date,
        "user_sex": sex,
        "user_locale": locale,
    })

    user_token = data.get("user_token") if isinstance(data, dict) else None
    if not user_token:
        detail = (data.get("errorMessage") or data.get("error")) if isinstance(data, dict) else None
        logging.error(f"Cognitive Gym did not return a user_token: {data}")
        raise CognifitAPIError(f"Cognitive Gym API error: {detail or 'No user_token received.'}")

    logging.info(f"Registered {internal_email} with the Cognitive Gym.")
    return user_token


def issue_access_token(user_token: str) -> str:
    """Exchanges a stored user_token for a short-lived SDK access token."""
    client_id, client_secret = _client_credentials()
    if not user_token:
        raise ValueError("User token is missing.")

    data = _post("/issue-access-token", {
        "client_id": client_id,
        "client_secret": client_secret,
        "user_token": user_token,
    })
    access_token = data.get("access_token") if isinstance(data, dict) else None
    if not access_token:
        logging.error(f"Cognitive Gym did not return an access_token: {data}")
        raise CognifitAPIError("Cognitive Gym API error: No access_token received.")
    return access_token


def get_sdk_version() -> str:
    """
    Fetches the current HTML5 SDK version. The endpoint answers either with
    JSON ({"version": ...} or a bare string) or with a plain-text version.
    """
    url = f"{_base_url()}/description/versions/sdkjs"
    try:
        response = requests.get(url, params={"v": "2.0"}, timeout=REQUEST_TIMEOUT)
        response.raise_for_status()
    except requests.exceptions.RequestException as e:
        logging.error(f"Failed to fetch Cognitive Gym SDK version: {e}")
        raise CognifitAPIError(f"Cognitive Gym API error: {e}") from e

    if "application/json" in response.headers.get("content-type", ""):
        try:
            data = response.json()
        except ValueError:
            data = None
        if isinstance(data, dict) and isinstance(data.get("version"), str):
            return data["version"].strip()
        if isinstance(data, str) and data.strip():
            return data.strip()

    text = response.text.strip().strip('"')
    if _VERSION_PATTERN.match(text):
        return text

    logging.error(f"Unexpected SDK version response format: {response.text!r}")
    raise CognifitAPIError("Cognitive Gym API error: Could not parse SDK version.")


def client_error_message(error: Exception, action: str) -> str:
    """Generic, user-facing message for a failed gym-service call."""
    if isinstance(error, CognifitConfigError):
        return "Cognitive Gym service configuration error."
    if isinstance(error, CognifitAPIError):
        return f"Could not connect to Cognitive Gym services to {action}. Please try again later."
    return f"Failed to {action} with Cognitive Gym."
