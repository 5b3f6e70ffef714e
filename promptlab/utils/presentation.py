from datetime import datetime
from typing import Optional

NOT_AVAILABLE = "N/A"


def score_band(score: int) -> str:
    """Colour band for a score badge"""
    if score >= 8:
        return "high"
    if score >= 6:
        return "medium"
    return "low"


def status_band(status: str) -> str:
    """Colour band for a dimension status badge"""
    status = (status or "").lower()
    if status in ("present", "clearly present"):
        return "positive"
    if status == "partially present":
        return "warning"
    if status == "missing":
        return "negative"
    return "neutral"


def truncate_text(text: str, max_length: int) -> str:
    if len(text) <= max_length:
        return text
    return text[:max_length] + "..."


def use_case_label(use_case: Optional[str], custom_use_case: Optional[str]) -> str:
    return use_case or custom_use_case or NOT_AVAILABLE


def format_date(value: datetime) -> str:
    # e.g. "Mar 05, 2025, 02:30 PM"
    return value.strftime("%b %d, %Y, %I:%M %p")
