"""
Tests for the Firestore persistence helpers
"""
import pytest

import firestore_handler as fh


@pytest.fixture
def stored_user(db):
    return fh.create_user(db, {
        "firstName": "Ada",
        "lastName": "Lovelace",
        "email": "Ada@Example.com ",
        "birthDate": "1990-12-10",
        "sex": "2",
        "password_hash": "hash",
    })


def test_create_user_normalizes_email_and_rejects_duplicates(db, stored_user):
    found_id, data = fh.find_user_by_email(db, "ada@example.com")
    assert found_id == stored_user
    assert data["email"] == "ada@example.com"
    assert data["cognifitUserToken"] is None

    with pytest.raises(ValueError):
        fh.create_user(db, {"email": "ADA@example.com", "password_hash": "x"})


def test_added_activity_is_retrievable_by_id(db, stored_user):
    activity = fh.add_activity(db, stored_user, "JIGSAW_9", "Jigsaw 9", 85, 120)

    assert activity["id"]
    assert activity["timestamp"]
    assert fh.get_activity(db, stored_user, activity["id"]) == activity
    assert fh.get_activity(db, stored_user, "missing") is None


def test_activities_are_listed_oldest_first(db, stored_user):
    first = fh.add_activity(db, stored_user, "JIGSAW_9", "Jigsaw 9", 10, 30)
    second = fh.add_activity(db, stored_user, "SOLITAIRE", "Solitaire", 20, 40)

    assert [a["id"] for a in fh.get_activities(db, stored_user)] == [first["id"], second["id"]]


def test_clearing_activities_also_clears_analyses(db, stored_user):
    fh.add_activity(db, stored_user, "JIGSAW_9", "Jigsaw 9", 85, 120)
    fh.save_analysis(db, stored_user, {"intelligenceScores": [], "multipleIntelligencesSummary": "s", "actionableRecommendations": "r"})

    counts = fh.clear_activities(db, stored_user)

    assert counts == {"activitiesDeleted": 1, "analysesDeleted": 1}
    assert fh.get_activities(db, stored_user) == []
    assert fh.get_analysis_history(db, stored_user) == []
    assert fh.get_latest_analysis(db, stored_user) is None
    assert fh.get_user(db, stored_user) is not None


def test_latest_analysis_is_most_recent(db, stored_user):
    fh.save_analysis(db, stored_user, {"intelligenceScores": [], "multipleIntelligencesSummary": "old", "actionableRecommendations": "r"})
    newest = fh.save_analysis(db, stored_user, {
        "intelligenceScores": [{"intelligence": "Musical", "score": 40, "reasoning": "x"}],
        "multipleIntelligencesSummary": "new",
        "broaderCognitiveInsights": "broader",
        "actionableRecommendations": "r",
        "lastAnalyzed": "ignored",
    })

    latest = fh.get_latest_analysis(db, stored_user)
    assert latest == newest
    assert latest["multipleIntelligencesSummary"] == "new"
    assert latest["broaderCognitiveInsights"] == "broader"
    assert latest["lastAnalyzed"] != "ignored"
    assert [a["multipleIntelligencesSummary"] for a in fh.get_analysis_history(db, stored_user)] == ["old", "new"]


def test_cognifit_token_is_only_set_once(db, stored_user):
    assert fh.set_cognifit_user_token(db, stored_user, "first") == "first"
    assert fh.set_cognifit_user_token(db, stored_user, "second") == "first"
    assert fh.get_user(db, stored_user)["cognifitUserToken"] == "first"

    with pytest.raises(ValueError):
        fh.set_cognifit_user_token(db, "nobody", "token")


def test_profile_reports_counts(db, stored_user):
    fh.add_activity(db, stored_user, "JIGSAW_9", "Jigsaw 9", 85, 120)

    profile = fh.get_user_profile_data(db, stored_user)

    assert profile["firstName"] == "Ada"
    assert profile["totalActivities"] == 1
    assert profile["totalAnalyses"] == 0
    assert profile["hasCognifitAccount"] is False
    assert profile["created_at"]


def test_delete_user_account_removes_everything(db, stored_user):
    fh.add_activity(db, stored_user, "JIGSAW_9", "Jigsaw 9", 85, 120)

    fh.delete_user_account(db, stored_user)

    assert fh.get_user(db, stored_user) is None
    assert db.docs == {}
