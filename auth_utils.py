# auth_utils.py

from datetime import datetime, timezone
from functools import wraps

import jwt
from flask import current_app, g, jsonify, request
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address


def get_db():
    """The Firestore client set up in app.py (tests swap in their own)."""
    return current_app.config.get('FIRESTORE_DB')


def create_access_token(user_id: str) -> str:
    token_payload = {
        'user_id': user_id,
        'exp': datetime.now(timezone.utc) + current_app.config['JWT_ACCESS_TOKEN_EXPIRES'],
    }
    return jwt.encode(token_payload, current_app.config['JWT_SECRET_KEY'], algorithm='HS256')


def _bearer_token():
    header = request.headers.get('Authorization', '')
    return header.split(' ')[-1] if header.startswith('Bearer ') else None


def _get_user_from_token(token):
    try:
        data = jwt.decode(token, current_app.config['JWT_SECRET_KEY'], algorithms=["HS256"])
    except jwt.PyJWTError:
        return None
    user_id = data.get('user_id')
    db = get_db()
    if not user_id or db is None:
        return None
    if not db.collection('users').document(user_id).get().exists:
        return None
    g.user_id = user_id
    return user_id


def token_required(f):
    @wraps(f)
    def decorated(*args, **kwargs):
        token = _bearer_token()
        if not token: return jsonify({"error": "Token is missing"}), 401
        user_id = _get_user_from_token(token)
        if not user_id: return jsonify({"error": "Token is invalid or expired"}), 401
        return f(user_id, *args, **kwargs)
    return decorated


def get_request_identifier():
    # Key by user_id for logged-in users, or IP for guests
    return g.get("user_id") or get_remote_address()


# Initialised against the app in app.py
limiter = Limiter(key_func=get_request_identifier)
