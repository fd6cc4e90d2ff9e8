import math

from flask import Blueprint, jsonify, request, current_app

from auth_utils import get_db, token_required
from firestore_handler import add_activity, clear_activities, get_activities, get_activity
from game_catalog import (
    COGNITIVE_GAMES,
    ENHANCEMENT_GAME_IDS,
    MULTIPLE_INTELLIGENCES,
    get_game,
    get_games_for_intelligence,
    get_profiling_game_ids,
    is_enhancement_game,
    normalize_intelligence_id,
)

# Create a Blueprint for the game catalog and activity log
game_bp = Blueprint('game_bp', __name__)


def _non_negative_number(value):
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value) and value >= 0


def _with_flags(game):
    return {
        **game,
        "isProfiling": game["id"] in get_profiling_game_ids(),
        "isEnhancement": is_enhancement_game(game["id"]),
    }


@game_bp.route('/intelligences', methods=['GET'])
def list_intelligences():
    return jsonify({"intelligences": MULTIPLE_INTELLIGENCES}), 200


@game_bp.route('/games', methods=['GET'])
def list_games():
    intelligence = request.args.get('intelligence')
    if intelligence:
        intelligence_id = normalize_intelligence_id(intelligence)
        if not intelligence_id:
            return jsonify({"error": f"Unknown intelligence: {intelligence}"}), 400
        games = get_games_for_intelligence(intelligence_id)
    else:
        games = COGNITIVE_GAMES
    return jsonify({
        "games": [_with_flags(game) for game in games],
        "profilingGameIds": get_profiling_game_ids(),
        "enhancementGameIds": ENHANCEMENT_GAME_IDS,
    }), 200


@game_bp.route('/games/<game_id>', methods=['GET'])
def get_game_route(game_id):
    game = get_game(game_id)
    if not game:
        return jsonify({"error": "Game not found"}), 404
    return jsonify(_with_flags(game)), 200


@game_bp.route('/activities', methods=['POST'])
@token_required
def add_activity_route(current_user_id):
    """
    Logs one (simulated) play session. The title always comes from the catalog
    so that the analysis prompt sees the names it knows.
    """
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        return jsonify({"error": "Request body must be a JSON object"}), 400
    game_id = str(data.get('gameId', '')).strip()
    score = data.get('score')
    duration = data.get('activityDuration')

    if not game_id:
        return jsonify({"error": "gameId is required"}), 400
    game = get_game(game_id)
    if not game:
        return jsonify({"error": "Game not found"}), 404
    if not _non_negative_number(score) or not _non_negative_number(duration):
        return jsonify({"error": "score and activityDuration must be non-negative numbers"}), 400

    try:
        activity = add_activity(get_db(), current_user_id, game_id, game['title'], score, duration)
        return jsonify(activity), 201
    except Exception as e:
        current_app.logger.error(f"Failed to save activity for user {current_user_id}, game {game_id}: {e}")
        return jsonify({"error": "Failed to save activity."}), 500


@game_bp.route('/activities', methods=['GET'])
@token_required
def list_activities_route(current_user_id):
    try:
        activities = get_activities(get_db(), current_user_id)
        return jsonify({"activities": activities}), 200
    except Exception as e:
        current_app.logger.error(f"Failed to fetch activities for user {current_user_id}: {e}")
        return jsonify({"error": "Failed to fetch activities."}), 500


@game_bp.route('/activities/<activity_id>', methods=['GET'])
@token_required
def get_activity_route(current_user_id, activity_id):
    activity = get_activity(get_db(), current_user_id, activity_id)
    if not activity:
        return jsonify({"error": "Activity not found"}), 404
    return jsonify(activity), 200


@game_bp.route('/activities', methods=['DELETE'])
@token_required
def clear_activities_route(current_user_id):
    try:
        counts = clear_activities(get_db(), current_user_id)
        return jsonify({"message": "Activities and analyses cleared", **counts}), 200
    except Exception as e:
        current_app.logger.error(f"Failed to clear activities for user {current_user_id}: {e}")
        return jsonify({"error": "Failed to clear activities."}), 500
