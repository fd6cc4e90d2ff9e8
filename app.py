# app.py

import base64
import json
import os
import re
from datetime import datetime, timedelta

import firebase_admin
from dotenv import load_dotenv
from firebase_admin import credentials, firestore
from flask import Flask, jsonify, request
from flask_cors import CORS
from google.api_core import exceptions
from werkzeug.security import generate_password_hash, check_password_hash

from auth_utils import create_access_token, get_db, limiter, token_required
from firestore_handler import (
    create_user,
    delete_user_account,
    find_user_by_email,
    get_user_profile_data,
)
from routes.cognifit_routes import cognifit_bp
from routes.game_routes import game_bp
from routes.insight_routes import insight_bp

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
MIN_PASSWORD_LENGTH = 6

load_dotenv()
app = Flask(__name__)
cors_origins = [origin.strip() for origin in os.getenv('CORS_ORIGINS', 'http://localhost:3000,http://127.0.0.1:3000').split(',') if origin.strip()]
CORS(app, resources={r"/*": {"origins": cors_origins}}, supports_credentials=True, expose_headers=["Content-Type", "Authorization"], allow_headers=["Content-Type", "Authorization", "X-Requested-With"])
app.config['JWT_SECRET_KEY'] = os.getenv('JWT_SECRET_KEY', 'fallback_secret_key_for_dev_only_change_me')
app.config['JWT_ACCESS_TOKEN_EXPIRES'] = timedelta(hours=24)

# --- Firebase Initialization ---
service_account_key_base64 = os.getenv('FIREBASE_SERVICE_ACCOUNT_KEY_BASE64')
db = None
if service_account_key_base64:
    try:
        decoded_key_bytes = base64.b64decode(service_account_key_base64)
        service_account_info = json.loads(decoded_key_bytes.decode('utf-8'))
        if not firebase_admin._apps:
            cred = credentials.Certificate(service_account_info)
            firebase_admin.initialize_app(cred)
        db = firestore.client()
        app.logger.info("Firebase Admin SDK initialized successfully.")
    except Exception as e:
        app.logger.error(f"Failed to initialize Firebase Admin SDK: {e}")
else:
    app.logger.warning("FIREBASE_SERVICE_ACCOUNT_KEY_BASE64 not found.")
app.config['FIRESTORE_DB'] = db

limiter.init_app(app)

app.register_blueprint(game_bp)
app.register_blueprint(insight_bp)
app.register_blueprint(cognifit_bp)


@app.errorhandler(429)
def ratelimit_handler(e):
    return jsonify(error=f"Rate limit exceeded: {e.description}"), 429


def _validate_signup(data):
    """Returns an error message, or None when the registration form is valid."""
    required = ['firstName', 'lastName', 'email', 'password', 'birthDate', 'sex']
    if not all(str(data.get(field) or '').strip() for field in required):
        return "First name, last name, email, password, birth date and sex are required"
    if not EMAIL_PATTERN.match(str(data['email']).strip()):
        return "Invalid email address"
    if len(str(data['password'])) < MIN_PASSWORD_LENGTH:
        return f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
    try:
        birth_date = datetime.strptime(str(data['birthDate']).strip(), "%Y-%m-%d")
    except ValueError:
        return "Birth date must be in YYYY-MM-DD format"
    if birth_date > datetime.now():
        return "Birth date cannot be in the future"
    if str(data['sex']) not in ('1', '2'):
        return "Sex must be '1' (male) or '2' (female)"
    return None


@app.route('/health', methods=['GET'])
def health():
    return jsonify({"status": "ok"}), 200


@app.route('/signup', methods=['POST'])
@limiter.limit("5 per hour")
def signup_user():
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        return jsonify({"error": "Request body must be a JSON object"}), 400
    error = _validate_signup(data)
    if error:
        return jsonify({"error": error}), 400

    try:
        user_id = create_user(get_db(), {
            'firstName': str(data['firstName']).strip(),
            'lastName': str(data['lastName']).strip(),
            'email': str(data['email']),
            'birthDate': str(data['birthDate']).strip(),
            'sex': str(data['sex']),
            'password_hash': generate_password_hash(str(data['password'])),
        })
    except ValueError as e:
        return jsonify({"error": str(e)}), 409
    except Exception as e:
        app.logger.error(f"Signup failed for {data.get('email')}: {e}")
        return jsonify({"error": "Registration failed. Please try again."}), 500

    return jsonify({"message": "User created successfully", "id": user_id}), 201


@app.route('/login', methods=['POST'])
@limiter.limit("30 per minute")
def login_user():
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        return jsonify({"error": "Request body must be a JSON object"}), 400
    email = str(data.get('email', '')).strip().lower()
    password = str(data.get('password') or '')
    if not email or not password:
        return jsonify({"error": "Missing email or password"}), 400

    found = find_user_by_email(get_db(), email)
    if not found:
        return jsonify({"error": "Invalid credentials"}), 401
    user_id, user_data = found
    if not check_password_hash(user_data.get('password_hash', ''), password):
        return jsonify({"error": "Invalid credentials"}), 401

    return jsonify({
        "message": "Login successful", "access_token": create_access_token(user_id),
        "user": {
            "id": user_id,
            "email": user_data.get('email'),
            "firstName": user_data.get('firstName'),
            "lastName": user_data.get('lastName'),
            "cognifitUserToken": user_data.get('cognifitUserToken'),
        }
    }), 200


@app.route('/profile', methods=['GET'])
@token_required
def get_user_profile(current_user_id):
    try:
        profile_data = get_user_profile_data(get_db(), current_user_id)
        return jsonify(profile_data), 200
    except ValueError:
        return jsonify({"error": "User not found."}), 404
    except Exception as e:
        app.logger.error(f"Failed to fetch profile for user {current_user_id}: {e}")
        return jsonify({"error": "Failed to fetch profile."}), 500


@app.route('/delete_account', methods=['POST'])
@token_required
def delete_account_route(current_user_id):
    """
    Handles the permanent deletion of a user's account and all associated data.
    """
    try:
        delete_user_account(get_db(), current_user_id)
        app.logger.info(f"Successfully deleted account and all data for user_id: {current_user_id}")
        return jsonify({"message": "Account successfully deleted."}), 200
    except exceptions.NotFound:
        return jsonify({"error": "User not found."}), 404
    except Exception as e:
        app.logger.error(f"Error deleting account for user {current_user_id}: {e}")
        return jsonify({"error": "An internal error occurred while deleting the account."}), 500


if __name__ == '__main__':
    port = int(os.environ.get('PORT', 5001))
    app.run(host='0.0.0.0', port=port)
