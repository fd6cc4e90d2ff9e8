# analysis_flow.py

import logging
from datetime import datetime, timezone

from ai_utils import AnalysisError, configure_gemini
from game_catalog import get_game, get_profiling_game_ids
from gameplay_analyzer import analyze_gameplay_and_map_to_intelligences
from insights_generator import generate_personalized_insights


class AnalysisPreconditionError(AnalysisError):
    """The user's activity is not enough to run an analysis yet."""


def missing_profiling_games(activities: list) -> list:
    played = {activity.get("gameId") for activity in activities}
    return [game_id for game_id in get_profiling_game_ids() if game_id not in played]


def run_analysis(activities: list, require_profiling: bool = True) -> dict:
    """
    Runs both AI calls in sequence and merges their outputs into one
    AIAnalysisResults dict. The first failure aborts the run.
    """
    if not activities:
        raise AnalysisPreconditionError("Play some games first to analyze your activity.")

    if require_profiling:
        missing = missing_profiling_games(activities)
        if missing:
            titles = ", ".join(get_game(game_id)["title"] for game_id in missing)
            raise AnalysisPreconditionError(
                f"Please complete all {len(get_profiling_game_ids())} Profiling Analysis Games before analyzing your activity. Missing: {titles}."
            )

    configure_gemini()

    gameplay_data = [
        {
            "gameTitle": activity.get("gameTitle"),
            "score": activity.get("score"),
            "activityDuration": activity.get("activityDuration"),
        }
        for activity in activities
    ]
    analysis_result = analyze_gameplay_and_map_to_intelligences(gameplay_data)
    logging.info(f"Gameplay analysis produced {len(analysis_result['intelligenceMappings'])} intelligence scores.")

    game_data = [
        {
            "gameId": activity.get("gameId"),
            "gameTitle": activity.get("gameTitle"),
            "score": activity.get("score"),
            "timestamp": activity.get("timestamp"),
        }
        for activity in activities
    ]
    personalized = generate_personalized_insights(game_data)

    results = {
        "intelligenceScores": [
            {"intelligence": m["intelligence"], "score": m["score"], "reasoning": m["reasoning"]}
            for m in analysis_result["intelligenceMappings"]
        ],
        "multipleIntelligencesSummary": personalized["multipleIntelligencesSummary"],
        "actionableRecommendations": personalized["actionableRecommendations"],
        "lastAnalyzed": datetime.now(timezone.utc).isoformat(),
    }
    if personalized.get("broaderCognitiveInsights"):
        results["broaderCognitiveInsights"] = personalized["broaderCognitiveInsights"]
    return results


def progress_trend(history: list) -> list:
    """Average intelligence score of each past analysis, oldest first."""
    trend = []
    for analysis in history:
        scores = analysis.get("intelligenceScores") or []
        average = sum(s.get("score", 0) for s in scores) / len(scores) if scores else 0
        trend.append({"lastAnalyzed": analysis.get("lastAnalyzed"), "averageScore": round(average, 1)})
    return trend


def key_cognitive_areas(analysis) -> dict:
    # Too few scores to tell strengths from opportunities.
    if not analysis or len(analysis.get("intelligenceScores") or []) < 3:
        return {"strengths": [], "opportunities": []}

    sorted_scores = sorted(analysis["intelligenceScores"], key=lambda s: s.get("score", 0), reverse=True)
    strengths = [sorted_scores[0]]
    opportunities = [sorted_scores[-1]]

    # A second pick on each side only makes sense with enough scores to choose from.
    if len(sorted_scores) >= 4:
        strengths.append(sorted_scores[1])
        runner_up = sorted_scores[-2]
        if runner_up.get("score", 0) < strengths[-1].get("score", 0):
            opportunities.append(runner_up)

    return {"strengths": strengths, "opportunities": opportunities}
