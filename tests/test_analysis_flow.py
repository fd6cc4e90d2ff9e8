"""
Tests for the two-step analysis run and dashboard helpers
"""
import pytest

from ai_utils import AnalysisError
from analysis_flow import (
    AnalysisPreconditionError,
    key_cognitive_areas,
    missing_profiling_games,
    progress_trend,
    run_analysis,
)
from conftest import INSIGHTS_OUTPUT, full_mappings, gemini_response


def test_no_activities_is_a_precondition_error(gemini):
    with pytest.raises(AnalysisPreconditionError, match="Play some games first"):
        run_analysis([])
    gemini.generate_content.assert_not_called()


def test_missing_profiling_games_are_named(gemini, profiling_activities):
    partial = [a for a in profiling_activities if a["gameId"] != "SOLITAIRE"]

    assert missing_profiling_games(partial) == ["SOLITAIRE"]
    with pytest.raises(AnalysisPreconditionError, match="Missing: Solitaire"):
        run_analysis(partial)
    gemini.generate_content.assert_not_called()


def test_profiling_check_can_be_skipped(gemini):
    gemini.generate_content.side_effect = [gemini_response(full_mappings()), gemini_response(INSIGHTS_OUTPUT)]

    result = run_analysis([{"gameId": "JIGSAW_9", "gameTitle": "Jigsaw 9", "score": 85, "activityDuration": 120}], require_profiling=False)

    assert len(result["intelligenceScores"]) == 8


def test_both_calls_are_chained_and_merged(gemini, profiling_activities):
    gemini.generate_content.side_effect = [gemini_response(full_mappings(score=65)), gemini_response(INSIGHTS_OUTPUT)]

    result = run_analysis(profiling_activities)

    assert gemini.generate_content.call_count == 2
    first_prompt = gemini.generate_content.call_args_list[0].args[0]
    second_prompt = gemini.generate_content.call_args_list[1].args[0]
    assert "Raw Score: 70, Duration: 60 seconds" in first_prompt
    assert "Game ID: MATH_TWINS" in second_prompt

    assert [s["score"] for s in result["intelligenceScores"]] == [65] * 8
    assert result["multipleIntelligencesSummary"] == INSIGHTS_OUTPUT["multipleIntelligencesSummary"]
    assert result["broaderCognitiveInsights"] == INSIGHTS_OUTPUT["broaderCognitiveInsights"]
    assert result["actionableRecommendations"] == INSIGHTS_OUTPUT["actionableRecommendations"]
    assert result["lastAnalyzed"]


def test_failure_in_second_call_aborts(gemini, profiling_activities):
    gemini.generate_content.side_effect = [gemini_response(full_mappings()), RuntimeError("quota")]

    with pytest.raises(AnalysisError):
        run_analysis(profiling_activities)


def test_missing_api_key_raises(monkeypatch, profiling_activities):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)

    with pytest.raises(AnalysisError, match="API key"):
        run_analysis(profiling_activities)


def test_progress_trend_averages_each_analysis():
    history = [
        {"lastAnalyzed": "t1", "intelligenceScores": [{"score": 40}, {"score": 61}]},
        {"lastAnalyzed": "t2", "intelligenceScores": []},
    ]

    assert progress_trend(history) == [
        {"lastAnalyzed": "t1", "averageScore": 50.5},
        {"lastAnalyzed": "t2", "averageScore": 0},
    ]


def test_key_areas_pick_top_and_bottom_scores():
    scores = [{"intelligence": name, "score": score} for name, score in
              [("A", 90), ("B", 20), ("C", 75), ("D", 50), ("E", 10)]]

    areas = key_cognitive_areas({"intelligenceScores": scores})

    assert [s["intelligence"] for s in areas["strengths"]] == ["A", "C"]
    assert [s["intelligence"] for s in areas["opportunities"]] == ["E", "B"]


def test_key_areas_need_at_least_three_scores():
    empty = {"strengths": [], "opportunities": []}
    two_scores = [{"intelligence": "A", "score": 30}, {"intelligence": "B", "score": 70}]

    assert key_cognitive_areas({"intelligenceScores": two_scores}) == empty
    assert key_cognitive_areas(None) == empty


def test_key_areas_with_three_scores_pick_one_each():
    scores = [{"intelligence": "A", "score": 30}, {"intelligence": "B", "score": 70}, {"intelligence": "C", "score": 50}]

    areas = key_cognitive_areas({"intelligenceScores": scores})

    assert [s["intelligence"] for s in areas["strengths"]] == ["B"]
    assert [s["intelligence"] for s in areas["opportunities"]] == ["A"]
