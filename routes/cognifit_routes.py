import json

from flask import Blueprint, jsonify, request, current_app

from auth_utils import get_db, token_required
from cognifit_service import (
    CognifitError,
    client_error_message,
    get_sdk_version,
    issue_access_token,
    register_user,
)
from firestore_handler import get_user, set_cognifit_user_token

cognifit_bp = Blueprint('cognifit_bp', __name__, url_prefix='/api')


@cognifit_bp.route('/cognifit/register-user', methods=['POST'])
@token_required
def register_user_route(current_user_id):
    """
    Creates the user's Cognitive Gym account the first time it is needed and
    keeps the returned user token on their profile. Body fields are optional
    and default to what was given at signup.
    """
    db = get_db()
    user = get_user(db, current_user_id)
    if not user:
        return jsonify({"error": "User not found."}), 404
    if user.get('cognifitUserToken'):
        return jsonify({"userToken": user['cognifitUserToken']}), 200

    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        return jsonify({"error": "Request body must be a JSON object"}), 400
    first_name = str(data.get('firstName') or user.get('firstName') or '').strip()
    last_name = str(data.get('lastName') or user.get('lastName') or '').strip()
    birth_date = str(data.get('birthDate') or user.get('birthDate') or '').strip()
    sex = str(data.get('sex') or user.get('sex') or '')
    locale = str(data.get('locale') or 'en').strip()

    if not first_name or not last_name or not birth_date or sex not in ('1', '2') or not locale:
        return jsonify({"error": "Missing or invalid required user details for Cognitive Gym registration."}), 400

    try:
        user_token = register_user(current_user_id, first_name, last_name, birth_date, int(sex), locale)
    except CognifitError as e:
        current_app.logger.error(f"Cognitive Gym registration failed for user {current_user_id}: {e}")
        return jsonify({"error": client_error_message(e, "register")}), 500

    user_token = set_cognifit_user_token(db, current_user_id, user_token)
    return jsonify({"userToken": user_token}), 200


@cognifit_bp.route('/cognifit/issue-access-token', methods=['POST'])
@token_required
def issue_access_token_route(current_user_id):
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        return jsonify({"error": "Request body must be a JSON object"}), 400
    user_token = data.get('userToken')
    if not user_token:
        user = get_user(get_db(), current_user_id) or {}
        user_token = user.get('cognifitUserToken')
    if not user_token:
        return jsonify({"error": "User token is required."}), 400

    try:
        access_token = issue_access_token(user_token)
    except CognifitError as e:
        current_app.logger.error(f"Cognitive Gym token issuance failed for user {current_user_id}: {e}")
        return jsonify({"error": client_error_message(e, "obtain a session token")}), 500
    return jsonify({"accessToken": access_token}), 200


@cognifit_bp.route('/cognifit/sdk-version', methods=['GET'])
def sdk_version_route():
    try:
        return jsonify({"version": get_sdk_version()}), 200
    except CognifitError as e:
        current_app.logger.error(f"Could not fetch Cognitive Gym SDK version: {e}")
        return jsonify({"error": client_error_message(e, "load the game SDK")}), 500


@cognifit_bp.route('/cognifit-webhook', methods=['POST'])
def cognifit_webhook():
    # Events are only logged for now; nothing downstream consumes them.
    current_app.logger.info("Cognitive Gym webhook: received a POST request")
    payload = request.get_json(silent=True)
    if payload is None:
        return jsonify({"error": "Invalid JSON payload"}), 400
    current_app.logger.info(f"Cognitive Gym webhook payload: {json.dumps(payload, indent=2)}")
    return jsonify({"message": "Webhook received successfully"}), 200


@cognifit_bp.route('/cognifit-webhook', methods=['GET'])
def cognifit_webhook_status():
    return jsonify({"message": "Cognitive Gym webhook endpoint is active. Use POST for events."}), 200
