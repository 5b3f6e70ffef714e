"""Tests for form state and the edit hand-off."""

from types import SimpleNamespace
from urllib.parse import parse_qs, urlsplit

import pytest

from promptlab.models.workspace import EditHandoff, Workspace


def test_handoff_url_carries_parameters_and_fragment():
    handoff = EditHandoff(edit_id="e1", use_case="Summarize meeting notes", prompt="Summarize this.")

    url = handoff.to_url("https://app.example.com/dashboard?tab=history")
    parts = urlsplit(url)
    query = parse_qs(parts.query)

    assert parts.fragment == "evaluate"
    assert query["tab"] == ["history"]
    assert query["editId"] == ["e1"]
    assert query["useCase"] == ["Summarize meeting notes"]
    assert query["prompt"] == ["Summarize this."]
    assert "customUseCase" not in query


def test_consume_strips_parameters():
    url = EditHandoff(edit_id="e1", custom_use_case="Plan an offsite", prompt="Plan it.").to_url(
        "https://app.example.com/dashboard?tab=history"
    )

    handoff, cleaned = EditHandoff.consume(url)

    assert handoff.edit_id == "e1"
    assert handoff.custom_use_case == "Plan an offsite"
    assert handoff.prompt == "Plan it."
    assert cleaned == "https://app.example.com/dashboard?tab=history#evaluate"


def test_consume_is_one_time():
    url = EditHandoff(edit_id="e1", use_case="x", prompt="p").to_url("https://app.example.com/")
    _, cleaned = EditHandoff.consume(url)

    handoff, again = EditHandoff.consume(cleaned)

    assert handoff is None
    assert again == cleaned


@pytest.mark.parametrize("query", [
    "editId=e1&prompt=p",
    "editId=e1&useCase=x",
    "useCase=x&prompt=p",
])
def test_consume_rejects_incomplete_parameters(query):
    handoff, cleaned = EditHandoff.consume(f"https://app.example.com/?{query}")
    assert handoff is None
    assert cleaned == "https://app.example.com/#evaluate"


def test_handoff_from_evaluation_record():
    record = SimpleNamespace(id="e9", use_case=None, custom_use_case="Write a memo", prompt="You are...")
    handoff = EditHandoff.from_evaluation(record)
    assert handoff.edit_id == "e9"
    assert handoff.use_case is None
    assert handoff.custom_use_case == "Write a memo"


def test_apply_generated_use_case():
    workspace = Workspace(generated_use_cases=["Draft emails", "Summarize reports"])
    workspace.apply_handoff(EditHandoff(edit_id="e1", use_case="Summarize reports", prompt="p"))

    assert workspace.selected_use_case == "Summarize reports"
    assert workspace.custom_use_case == ""
    assert workspace.prompt == "p"
    assert workspace.editing_id == "e1"
    assert workspace.resolved_use_case() == "Summarize reports"


def test_apply_unknown_use_case_becomes_custom():
    workspace = Workspace(generated_use_cases=["Draft emails"])
    workspace.apply_handoff(EditHandoff(edit_id="e1", use_case="Old generated case", prompt="p"))

    assert workspace.selected_use_case == "custom"
    assert workspace.custom_use_case == "Old generated case"
    assert workspace.resolved_use_case() == "Old generated case"


def test_apply_custom_use_case():
    workspace = Workspace()
    workspace.apply_handoff(EditHandoff(edit_id="e1", custom_use_case="My case", prompt="p"))

    assert workspace.selected_use_case == "custom"
    assert workspace.custom_use_case == "My case"


@pytest.mark.asyncio
async def test_store_round_trip_and_ttl(workspace_store, fake_redis):
    assert await workspace_store.load("user-alice") == Workspace()

    await workspace_store.save("user-alice", Workspace(department="Accounting", prompt="draft"))

    loaded = await workspace_store.load("user-alice")
    assert loaded.department == "Accounting"
    assert loaded.prompt == "draft"
    assert fake_redis.ttls["workspace:user-alice"] == 60

    await workspace_store.clear("user-alice")
    assert await workspace_store.load("user-alice") == Workspace()
