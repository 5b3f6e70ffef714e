"""Tests for the admin rollup."""

from datetime import datetime, timezone
from types import SimpleNamespace

from promptlab.services.admin_service import join_with_profiles, summarize

CREATED = datetime(2025, 3, 5, 12, 0, tzinfo=timezone.utc)


def _evaluation(eid, user_id, score):
    return SimpleNamespace(
        id=eid,
        user_id=user_id,
        use_case="Summarize meeting notes",
        custom_use_case=None,
        prompt="Summarize this.",
        score=score,
        created_at=CREATED,
    )


def test_average_and_unique_users_single_owner():
    """[8, 6, 4] from one email averages 6.0 with one user."""
    profiles = [SimpleNamespace(id="u1", name="Alice", email="alice@example.com")]
    evaluations = [_evaluation("e1", "u1", 8), _evaluation("e2", "u1", 6), _evaluation("e3", "u1", 4)]

    stats = summarize(join_with_profiles(evaluations, profiles))

    assert stats.total_evaluations == 3
    assert stats.average_score == "6.0"
    assert stats.unique_users == 1


def test_empty_rollup():
    stats = summarize([])
    assert stats.total_evaluations == 0
    assert stats.average_score == "0"
    assert stats.unique_users == 0


def test_average_rounds_to_one_decimal():
    profiles = [SimpleNamespace(id="u1", name="Alice", email="alice@example.com")]
    evaluations = [_evaluation("e1", "u1", 7), _evaluation("e2", "u1", 8), _evaluation("e3", "u1", 8)]

    assert summarize(join_with_profiles(evaluations, profiles)).average_score == "7.7"


def test_missing_profile_uses_placeholders():
    profiles = [SimpleNamespace(id="u1", name="Alice", email="alice@example.com")]
    evaluations = [_evaluation("e1", "u1", 8), _evaluation("e2", "ghost", 5)]

    rows = join_with_profiles(evaluations, profiles)

    assert rows[0].user_name == "Alice"
    assert rows[1].user_name == "Unknown User"
    assert rows[1].user_email == "Unknown Email"
    assert summarize(rows).unique_users == 2


def test_join_preserves_order():
    profiles = []
    evaluations = [_evaluation("e2", "u1", 9), _evaluation("e1", "u2", 3)]
    assert [row.id for row in join_with_profiles(evaluations, profiles)] == ["e2", "e1"]
