from datetime import datetime

import pytest

from promptlab.utils.presentation import format_date, score_band, status_band, truncate_text, use_case_label


@pytest.mark.parametrize("score, band", [(10, "high"), (8, "high"), (7, "medium"), (6, "medium"), (5, "low"), (0, "low")])
def test_score_band(score, band):
    assert score_band(score) == band


@pytest.mark.parametrize("status, band", [
    ("present", "positive"),
    ("Clearly Present", "positive"),
    ("partially present", "warning"),
    ("missing", "negative"),
    ("unknown", "neutral"),
    (None, "neutral"),
])
def test_status_band(status, band):
    assert status_band(status) == band


def test_truncate_text():
    assert truncate_text("short", 10) == "short"
    assert truncate_text("x" * 12, 10) == "x" * 10 + "..."


def test_use_case_label():
    assert use_case_label("Draft emails", None) == "Draft emails"
    assert use_case_label(None, "My case") == "My case"
    assert use_case_label(None, None) == "N/A"


def test_format_date():
    assert format_date(datetime(2025, 3, 5, 14, 30)) == "Mar 05, 2025, 02:30 PM"
