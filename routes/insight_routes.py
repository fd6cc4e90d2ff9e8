from flask import Blueprint, jsonify, current_app

from ai_utils import AnalysisError
from analysis_flow import (
    AnalysisPreconditionError,
    key_cognitive_areas,
    missing_profiling_games,
    progress_trend,
    run_analysis,
)
from auth_utils import get_db, limiter, token_required
from firestore_handler import get_activities, get_analysis_history, get_latest_analysis, save_analysis

insight_bp = Blueprint('insight_bp', __name__, url_prefix='/insights')

ANALYSIS_FAILED_MESSAGE = "An error occurred during AI analysis. Please try again."


@insight_bp.route('/analyze', methods=['POST'])
@token_required
@limiter.limit("10/hour")
def analyze_route(current_user_id):
    """
    Runs the two-step AI analysis over everything the user has played and
    stores the merged result as the newest entry in their history.
    """
    db = get_db()
    try:
        activities = get_activities(db, current_user_id)
        results = run_analysis(activities)
    except AnalysisPreconditionError as e:
        return jsonify({"error": str(e)}), 400
    except AnalysisError as e:
        current_app.logger.error(f"AI analysis failed for user {current_user_id}: {e}")
        return jsonify({"error": ANALYSIS_FAILED_MESSAGE}), 500
    except Exception as e:
        current_app.logger.error(f"Unexpected error in /insights/analyze for user {current_user_id}: {e}")
        return jsonify({"error": ANALYSIS_FAILED_MESSAGE}), 500

    try:
        stored = save_analysis(db, current_user_id, results)
    except Exception as e:
        current_app.logger.error(f"Failed to store analysis for user {current_user_id}: {e}")
        return jsonify({"error": "Analysis completed but could not be saved."}), 500

    current_app.logger.info(f"Analysis {stored['id']} stored for user {current_user_id}")
    return jsonify(stored), 200


@insight_bp.route('/latest', methods=['GET'])
@token_required
def latest_route(current_user_id):
    latest = get_latest_analysis(get_db(), current_user_id)
    if not latest:
        return jsonify({"error": "No analysis available yet"}), 404
    return jsonify(latest), 200


@insight_bp.route('/history', methods=['GET'])
@token_required
def history_route(current_user_id):
    return jsonify({"history": get_analysis_history(get_db(), current_user_id)}), 200


@insight_bp.route('/dashboard', methods=['GET'])
@token_required
def dashboard_route(current_user_id):
    db = get_db()
    try:
        activities = get_activities(db, current_user_id)
        history = get_analysis_history(db, current_user_id)
    except Exception as e:
        current_app.logger.error(f"Failed to build dashboard for user {current_user_id}: {e}")
        return jsonify({"error": "Failed to load dashboard."}), 500

    latest = history[-1] if history else None
    return jsonify({
        "activityCount": len(activities),
        "latest": latest,
        "keyAreas": key_cognitive_areas(latest),
        "progressTrend": progress_trend(history),
        "missingProfilingGames": missing_profiling_games(activities),
    }), 200
