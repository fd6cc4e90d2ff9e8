# firestore_handler.py

from firebase_admin import firestore
from datetime import datetime
from google.cloud.firestore_v1.base_query import FieldFilter
import logging

USERS = 'users'
ACTIVITIES = 'activities'
ANALYSES = 'aiAnalyses'


def _iso(value):
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value) if value else None


def _user_ref(db, user_id: str):
    return db.collection(USERS).document(user_id)


def delete_collection(coll_ref, batch_size: int = 50) -> int:
    """Recursively delete a collection in batches. Returns the number of top-level docs removed."""
    deleted = 0
    while True:
        batch_deleted = 0
        for doc in coll_ref.limit(batch_size).stream():
            for sub_coll_ref in doc.reference.collections():
                delete_collection(sub_coll_ref, batch_size)
            doc.reference.delete()
            batch_deleted += 1
        deleted += batch_deleted
        if batch_deleted < batch_size:
            return deleted


# --- Users ---

def find_user_by_email(db, email: str):
    """Returns (user_id, user_data) or None."""
    docs = db.collection(USERS).where(filter=FieldFilter('email', '==', email.strip().lower())).limit(1).stream()
    user_doc = next(iter(docs), None)
    if not user_doc:
        return None
    return user_doc.id, user_doc.to_dict()


def create_user(db, user_fields: dict) -> str:
    """
    Creates the user document. user_fields must already hold the password hash;
    raises ValueError if the email is taken.
    """
    email = user_fields['email'].strip().lower()
    if find_user_by_email(db, email):
        raise ValueError("Email already registered")

    _, user_ref = db.collection(USERS).add({
        **user_fields,
        'email': email,
        'cognifitUserToken': None,
        'created_at': firestore.SERVER_TIMESTAMP,
    })
    logging.info(f"Created user {user_ref.id}")
    return user_ref.id


def get_user(db, user_id: str):
    user_doc = _user_ref(db, user_id).get()
    if not user_doc.exists:
        return None
    return user_doc.to_dict()


def get_user_profile_data(db, user_id: str):
    """
    Fetches and formats all profile data for a given user.
    """
    user_ref = _user_ref(db, user_id)
    user_doc = user_ref.get()
    if not user_doc.exists:
        raise ValueError("User not found")

    user_data = user_doc.to_dict()
    activity_count = len(list(user_ref.collection(ACTIVITIES).stream()))
    analysis_count = len(list(user_ref.collection(ANALYSES).stream()))

    return {
        "id": user_id,
        "firstName": user_data.get("firstName"),
        "lastName": user_data.get("lastName"),
        "email": user_data.get("email"),
        "birthDate": user_data.get("birthDate"),
        "sex": user_data.get("sex"),
        "hasCognifitAccount": bool(user_data.get("cognifitUserToken")),
        "totalActivities": activity_count,
        "totalAnalyses": analysis_count,
        "created_at": _iso(user_data.get("created_at")),
    }


def set_cognifit_user_token(db, user_id: str, token: str) -> str:
    """
    Stores the gym-service token the first time one is issued. An existing
    token is kept and returned instead.
    """
    user_ref = _user_ref(db, user_id)
    user_doc = user_ref.get()
    if not user_doc.exists:
        raise ValueError("User not found")

    existing = user_doc.to_dict().get('cognifitUserToken')
    if existing:
        logging.info(f"User {user_id} already has a Cognitive Gym token. Keeping it.")
        return existing

    user_ref.update({'cognifitUserToken': token})
    return token


def delete_user_account(db, user_id: str):
    user_ref = _user_ref(db, user_id)
    for collection_ref in user_ref.collections():
        delete_collection(collection_ref, 50)
    user_ref.delete()


# --- Activities ---

def _activity_from_doc(doc) -> dict:
    data = doc.to_dict()
    return {
        "id": doc.id,
        "gameId": data.get("gameId"),
        "gameTitle": data.get("gameTitle"),
        "score": data.get("score", 0),
        "activityDuration": data.get("activityDuration", 0),
        "timestamp": _iso(data.get("timestamp")),
    }


def add_activity(db, user_id: str, game_id: str, game_title: str, score, activity_duration) -> dict:
    activities_ref = _user_ref(db, user_id).collection(ACTIVITIES)
    _, doc_ref = activities_ref.add({
        'gameId': game_id,
        'gameTitle': game_title,
        'score': score,
        'activityDuration': activity_duration,
        'userId': user_id,
        'timestamp': firestore.SERVER_TIMESTAMP,
    })
    logging.info(f"Activity {doc_ref.id} for game {game_id} saved for user {user_id}")
    return _activity_from_doc(doc_ref.get())


def get_activities(db, user_id: str) -> list:
    query = _user_ref(db, user_id).collection(ACTIVITIES).order_by('timestamp', direction=firestore.Query.ASCENDING)
    return [_activity_from_doc(doc) for doc in query.stream()]


def get_activity(db, user_id: str, activity_id: str):
    doc = _user_ref(db, user_id).collection(ACTIVITIES).document(activity_id).get()
    if not doc.exists:
        return None
    return _activity_from_doc(doc)


def clear_activities(db, user_id: str) -> dict:
    """Deletes all activities together with every analysis derived from them."""
    user_ref = _user_ref(db, user_id)
    activities_deleted = delete_collection(user_ref.collection(ACTIVITIES))
    analyses_deleted = delete_collection(user_ref.collection(ANALYSES))
    logging.info(f"Cleared {activities_deleted} activities and {analyses_deleted} analyses for user {user_id}")
    return {"activitiesDeleted": activities_deleted, "analysesDeleted": analyses_deleted}


# --- AI analyses ---

def _analysis_from_doc(doc) -> dict:
    data = doc.to_dict()
    analysis = {
        "id": doc.id,
        "intelligenceScores": data.get("intelligenceScores") or [],
        "multipleIntelligencesSummary": data.get("multipleIntelligencesSummary") or '',
        "actionableRecommendations": data.get("actionableRecommendations") or '',
        "lastAnalyzed": _iso(data.get("lastAnalyzed")),
    }
    if data.get("broaderCognitiveInsights"):
        analysis["broaderCognitiveInsights"] = data["broaderCognitiveInsights"]
    return analysis


def save_analysis(db, user_id: str, analysis: dict) -> dict:
    payload = {key: value for key, value in analysis.items() if key not in ('id', 'lastAnalyzed')}
    payload['lastAnalyzed'] = firestore.SERVER_TIMESTAMP
    _, doc_ref = _user_ref(db, user_id).collection(ANALYSES).add(payload)
    return _analysis_from_doc(doc_ref.get())


def get_analysis_history(db, user_id: str) -> list:
    query = _user_ref(db, user_id).collection(ANALYSES).order_by('lastAnalyzed', direction=firestore.Query.ASCENDING)
    return [_analysis_from_doc(doc) for doc in query.stream()]


def get_latest_analysis(db, user_id: str):
    query = (_user_ref(db, user_id).collection(ANALYSES)
             .order_by('lastAnalyzed', direction=firestore.Query.DESCENDING)
             .limit(1))
    doc = next(iter(query.stream()), None)
    return _analysis_from_doc(doc) if doc else None
