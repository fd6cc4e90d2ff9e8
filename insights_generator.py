# insights_generator.py

import json
import logging

from ai_utils import AnalysisError, generate_structured
from game_catalog import primary_intelligence_for

NO_GAME_DATA = "No game data found."

PERSONALIZED_INSIGHTS_SCHEMA = {
    "type": "object",
    "properties": {
        "multipleIntelligencesSummary": {"type": "string", "description": "A short summary of the user's profile across the Multiple Intelligences."},
        "broaderCognitiveInsights": {"type": "string", "description": "Personalized insights about strengths and weaknesses beyond the individual intelligences."},
        "actionableRecommendations": {"type": "string", "description": "Clear, actionable recommendations for improvement."},
    },
    "required": ["multipleIntelligencesSummary", "actionableRecommendations"],
}

PROMPT_TEMPLATE = """You are an AI expert in multiple intelligences. Analyze the user's game data and provide personalized insights and recommendations.

The user has played several games. Here's a summary of their performance, with games mapped to the primary intelligence they assess:
{summary}

Based on this summarized data (and the original game data if needed: {original}), generate:
1. `multipleIntelligencesSummary`: a few sentences describing the user's profile across the intelligences.
2. `broaderCognitiveInsights`: personalized insights about the user's strengths and weaknesses and any patterns across games.
3. `actionableRecommendations`: recommendations on how the user can improve their skills in specific areas, naming games from the data where relevant.

The insights and recommendations should be clear, concise, and actionable.
Focus on the patterns emerging from the summarized data.
Respond ONLY with a JSON object containing these three string fields.
"""


def summarize_game_data(game_data: list) -> str:
    """
    Maps each played game to the primary intelligence it assesses, e.g.
    "Game summaries: Game ID: JIGSAW_9, Score: 80, Assessed Intelligence: Visual-Spatial; ..."
    """
    if not game_data:
        return NO_GAME_DATA
    summaries = []
    for game in game_data:
        game_id = game.get("gameId") or game.get("title") or game.get("gameTitle")
        intelligence = primary_intelligence_for(game_id)
        summaries.append(f"Game ID: {game_id}, Score: {game.get('score')}, Assessed Intelligence: {intelligence}")
    return f"Game summaries: {'; '.join(summaries)}"


def generate_personalized_insights(game_data: list) -> dict:
    """
    AI call #2: free-text summary, insights and recommendations.

    game_data is a list of {gameId, gameTitle, score, timestamp}.
    """
    prompt = PROMPT_TEMPLATE.format(
        summary=summarize_game_data(game_data),
        original=json.dumps(game_data),
    )
    output = generate_structured(prompt, PERSONALIZED_INSIGHTS_SCHEMA)
    if not isinstance(output, dict):
        raise AnalysisError("AI returned an unexpected insights structure.")

    summary = output.get("multipleIntelligencesSummary")
    recommendations = output.get("actionableRecommendations")
    if not isinstance(summary, str) or not isinstance(recommendations, str):
        logging.error(f"Personalized insights missing required fields: {output!r}")
        raise AnalysisError("AI returned incomplete personalized insights.")

    insights = {
        "multipleIntelligencesSummary": summary.strip(),
        "actionableRecommendations": recommendations.strip(),
    }
    broader = output.get("broaderCognitiveInsights")
    if isinstance(broader, str) and broader.strip():
        insights["broaderCognitiveInsights"] = broader.strip()
    return insights
