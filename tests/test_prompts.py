"""Tests for the prompt templates sent to Gemini."""

import json
import logging

import pytest

from promptlab.models.evaluate import EvaluationResult
from promptlab.prompts.prompt_evaluation import (
    EVALUATION_RESPONSE_FORMAT,
    SCORING_RUBRIC,
    get_prompt_evaluation_prompt,
)
from promptlab.prompts.use_case_generation import (
    DEFAULT_TASKS_HINT,
    TEAM_RESPONSIBILITIES,
    USE_CASE_SYSTEM_INSTRUCTION,
    get_use_case_generation_prompt,
)


def test_evaluation_prompt_embeds_inputs():
    text = get_prompt_evaluation_prompt("Summarize meeting notes", "You are an assistant. Summarize this.")

    assert "Use Case: Summarize meeting notes" in text
    assert "Prompt to Evaluate: You are an assistant. Summarize this." in text
    assert SCORING_RUBRIC in text
    assert text.rstrip().endswith(EVALUATION_RESPONSE_FORMAT)


def test_response_format_lists_every_result_field():
    shape = json.loads(EVALUATION_RESPONSE_FORMAT.replace("numerical_score_out_of_10", "0"))

    assert list(shape) == ["role", "action", "context", "format", "tone",
                           "techniques", "mismatches", "suggestions", "score"]
    assert set(shape) == set(EvaluationResult.model_fields)
    assert shape["role"]["status"] == "present/partially present/missing"


def test_evaluation_prompt_is_deterministic():
    assert get_prompt_evaluation_prompt("a", "b") == get_prompt_evaluation_prompt("a", "b")


def test_builders_do_not_log(caplog):
    with caplog.at_level(logging.DEBUG):
        get_prompt_evaluation_prompt("a", "b")
        get_use_case_generation_prompt("Sales", "Cold outreach")
    assert caplog.records == []


def test_use_case_prompt_embeds_department_and_tasks():
    text = get_use_case_generation_prompt("Accounting", "  Invoice validation  ")

    assert "Department: **Accounting**" in text
    assert "**Accounting** department" in text
    assert "Invoice validation" in text
    assert DEFAULT_TASKS_HINT not in text
    assert TEAM_RESPONSIBILITIES in text


@pytest.mark.parametrize("tasks", [None, "", "   "])
def test_use_case_prompt_blank_tasks_use_default_hint(tasks):
    text = get_use_case_generation_prompt("Content Team", tasks)
    assert DEFAULT_TASKS_HINT in text


def test_use_case_prompt_asks_for_four_unnumbered_lines():
    text = get_use_case_generation_prompt("Sales")

    assert "exactly 4 use cases (one per line, no bullets or numbering)" in text
    assert "exactly 4 use cases, one per line, without numbering" in USE_CASE_SYSTEM_INSTRUCTION
