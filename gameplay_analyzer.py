# gameplay_analyzer.py

import logging

from ai_utils import generate_structured
from game_catalog import (
    COGNITIVE_GAMES,
    ENHANCEMENT_GAME_IDS,
    INTELLIGENCE_IDS,
    PROFILING_GAMES_COUNT,
    normalize_intelligence_id,
)

NO_DATA_REASONING = "No gameplay data provided for analysis."
FALLBACK_REASONING = "AI analysis could not be completed or returned an unexpected result."

INTELLIGENCE_MAPPING_SCHEMA = {
    "type": "object",
    "properties": {
        "intelligenceMappings": {
            "type": "array",
            "description": "An array of intelligence mappings with scores (0-100) and reasoning.",
            "items": {
                "type": "object",
                "properties": {
                    "intelligence": {"type": "string", "description": "The name of the multiple intelligence."},
                    "score": {"type": "number", "description": "A score representing the strength in this intelligence (0-100)."},
                    "reasoning": {"type": "string", "description": "Reasoning for the intelligence score based on the gameplay data and rubric."},
                },
                "required": ["intelligence", "score", "reasoning"],
            },
        }
    },
    "required": ["intelligenceMappings"],
}

RUBRIC = """
SCORING RUBRIC AND GAME MAPPING:
Interpret the "Raw Score" from the input data for each game and map it to a 0-10 point scale based on the rubrics below.
If a game is "hybrid," it contributes to several intelligences; score it for each of them.

**Profiling Games (Primary Assessment):**

1.  **Game: Math Twins** - Assesses: Logical-Mathematical
    *   10 pts: 90-100% correct answers (or very high raw score), rapid responses (low activityDuration).
    *   7 pts: 70-89% correct (good raw score), moderate speed.
    *   4 pts: 50-69% correct (fair raw score), slow responses.
    *   0 pts: Below 50% correct (low raw score).
    *   If 'Raw Score' looks like a percentage (0-100), use that. If it is a larger number (e.g. >500), assume higher is better and map it to these tiers.

2.  **Game: Jigsaw 9** - Assesses: Visual-Spatial
    *   10 pts: Completes hardest puzzles quickly. 7 pts: Completes medium puzzles with few mistakes.
    *   4 pts: Struggles with assembly but finishes easy puzzles. 0 pts: Cannot complete simplest puzzles.

3.  **Game: Reaction Field** - Assesses: Bodily-Kinesthetic
    *   10 pts: >90% accuracy, fastest reaction tier. 7 pts: 75-89% accuracy, moderate speed.
    *   4 pts: 50-74% accuracy, slow reactions. 0 pts: Below 50% accuracy.

4.  **Game: Words Birds** - Assesses: Linguistic-Verbal
    *   10 pts: Recognizes 95-100% of words, fastest tier. 7 pts: 80-94% correct, minor delays.
    *   4 pts: 60-79% correct, frequent pauses. 0 pts: Below 60% correct.

5.  **Game: Melody Mayhem** - Assesses: Musical
    *   10 pts: Perfect rhythm/tone matching. 7 pts: Occasional errors but recovers quickly.
    *   4 pts: Struggles to match beats/pitches. 0 pts: No meaningful engagement.

6.  **Game: Chess** - Assesses: Interpersonal (primary), also Logical-Mathematical.
    *   10 pts: Wins consistently. 7 pts: Balanced win/loss ratio.
    *   4 pts: Loses often but shows basic understanding. 0 pts: No strategic play evident.

7.  **Game: Solitaire** - Assesses: Intrapersonal (primary), also Logical-Mathematical.
    *   10 pts: Completes >80% of games, efficient moves. 7 pts: Completes 50-79%.
    *   4 pts: Rarely completes games. 0 pts: No completion, quits early.

8.  **Game: Ant Escape** - Assesses: Naturalistic (primary), also Visual-Spatial.
    *   10 pts: Solves complex paths quickly, adapts to obstacles. 7 pts: Completes levels with minor struggles.
    *   4 pts: Needs hints/repeats for simple levels. 0 pts: No progress without help.

**Enhancement Games (Hybrid):**

9.  **Game: Word Quest** - Linguistic-Verbal AND Logical-Mathematical.
    *   Linguistic: 10 pts solves complex word puzzles rapidly; 7 pts needs hints for obscure words.
    *   Logical: 10 pts deduces word patterns instantly; 7 pts slow but correct logic.

10. **Game: Crossroads** - Logical-Mathematical, Visual-Spatial AND Interpersonal.
    *   10 pts: Keeps traffic flowing under rising complexity; 7 pts: occasional congestion but recovers.

11. **Game: Butterfly Hunter** - Visual-Spatial AND Bodily-Kinesthetic.
    *   10 pts: Predicts trajectories and captures targets quickly; 7 pts: occasional misses.

12. **Game: Lane Changer** - Bodily-Kinesthetic, Visual-Spatial AND Logical-Mathematical.
    *   10 pts: Rapid, correct lane decisions with no crashes; 7 pts: late adjustments but recovers.

**Other Catalog Games:**
Any other game contributes to the intelligences listed for it below, using the generic tiers
10 pts (very high raw score), 7 pts (good), 4 pts (fair), 0 pts (low).
{other_games}

**Calculation Steps:**
1.  For each game played in the gameplay data:
    a.  Identify the game from the lists above based on its title.
    b.  Using the corresponding rubric(s), convert the Raw Score to a 0-10 point score for the assessed intelligence(s). Consider Duration where the rubric mentions speed.
2.  For each of the 8 Multiple Intelligences:
    a.  Collect all 0-10 point scores assigned to this intelligence from all games played.
    b.  If multiple scores exist, calculate their average. This is the composite 0-10 score.
    c.  If no games contributing to an intelligence were played, assign a 0-10 score of 0.
    d.  Multiply the composite score by 10 to get the final 0-100 `score`.
    e.  Provide a concise `reasoning` mentioning the contributing games and the user's performance in them.
        Example: "User shows strong Visual-Spatial skills (80/100) based on quick completion of Jigsaw 9 (rated 8/10)."

**Output Format:**
Produce a JSON object with an `intelligenceMappings` array. Every one of the 8 intelligences must be
present exactly once, spelled exactly as listed above, with a score from 0-100 and reasoning.
"""


def _describe_other_games():
    special_ids = set(ENHANCEMENT_GAME_IDS) | {game["id"] for game in COGNITIVE_GAMES[:PROFILING_GAMES_COUNT]}
    lines = []
    for game in COGNITIVE_GAMES:
        if game["id"] in special_ids:
            continue
        lines.append(f"- {game['title']}: {', '.join(game['intelligences'])}")
    return "\n".join(lines)


def build_analysis_prompt(gameplay_data: list) -> str:
    intelligence_lines = "\n".join(f"- {intelligence}" for intelligence in INTELLIGENCE_IDS)
    gameplay_lines = "\n".join(
        f"- Game Title: {entry.get('gameTitle')}, Raw Score: {entry.get('score')}, Duration: {entry.get('activityDuration')} seconds"
        for entry in gameplay_data
    )
    return f"""You are an expert AI specializing in cognitive assessment and Multiple Intelligences theory.
Your task is to analyze the provided gameplay data and map the user's performance to the 8 Multiple Intelligences.
Use the detailed scoring rubric below to convert raw game scores into a normalized 0-10 point scale for the relevant intelligence(s) for each game.
Then, calculate a composite 0-10 score for each of the 8 Multiple Intelligences by averaging scores from all relevant games.
Finally, scale this composite 0-10 score to 0-100 for the output JSON. Provide clear reasoning for each intelligence's score.

The 8 Multiple Intelligences to assess are:
{intelligence_lines}

Gameplay Data Provided:
{gameplay_lines}
{RUBRIC.format(other_games=_describe_other_games())}"""


def default_mappings(reasoning: str) -> list:
    return [
        {"intelligence": intelligence, "score": 0, "reasoning": reasoning}
        for intelligence in INTELLIGENCE_IDS
    ]


def _clamp_score(value):
    try:
        score = float(value)
    except (TypeError, ValueError):
        return 0
    score = max(0.0, min(100.0, score))
    return int(score) if score.is_integer() else round(score, 1)


def normalize_mappings(raw_mappings) -> list:
    """
    Brings the model's mappings into shape: canonical names, one entry per
    intelligence, scores clamped to 0-100, missing intelligences filled with 0,
    canonical order.
    """
    by_intelligence = {}
    for mapping in raw_mappings or []:
        if not isinstance(mapping, dict):
            continue
        intelligence = normalize_intelligence_id(mapping.get("intelligence"))
        if not intelligence:
            logging.warning(f"Dropping mapping for unknown intelligence: {mapping.get('intelligence')!r}")
            continue
        if intelligence in by_intelligence:
            continue
        by_intelligence[intelligence] = {
            "intelligence": intelligence,
            "score": _clamp_score(mapping.get("score")),
            "reasoning": str(mapping.get("reasoning") or "").strip(),
        }

    for intelligence in INTELLIGENCE_IDS:
        if intelligence not in by_intelligence:
            by_intelligence[intelligence] = {
                "intelligence": intelligence,
                "score": 0,
                "reasoning": f"No games assessing {intelligence} were found in the provided data, or performance could not be determined.",
            }

    return [by_intelligence[intelligence] for intelligence in INTELLIGENCE_IDS]


def analyze_gameplay_and_map_to_intelligences(gameplay_data: list) -> dict:
    """
    AI call #1: scores the player on each of the 8 intelligences.

    gameplay_data is a list of {gameTitle, score, activityDuration}. Returns
    {"intelligenceMappings": [...]} with all 8 intelligences in canonical order.
    """
    if not gameplay_data:
        return {"intelligenceMappings": default_mappings(NO_DATA_REASONING)}

    prompt = build_analysis_prompt(gameplay_data)
    output = generate_structured(prompt, INTELLIGENCE_MAPPING_SCHEMA)

    raw_mappings = output.get("intelligenceMappings") if isinstance(output, dict) else None
    if not isinstance(raw_mappings, list) or not raw_mappings:
        logging.error(f"Gameplay analysis returned an unexpected structure: {output!r}")
        return {"intelligenceMappings": default_mappings(FALLBACK_REASONING)}

    return {"intelligenceMappings": normalize_mappings(raw_mappings)}
