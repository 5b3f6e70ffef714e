from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel


class AdminEvaluation(BaseModel):
    """Recent evaluation joined with its owner's identity"""
    id: str
    user_name: str
    user_email: str
    use_case: Optional[str] = None
    custom_use_case: Optional[str] = None
    prompt: str
    score: int
    created_at: datetime


class AdminStats(BaseModel):
    total_evaluations: int
    average_score: str
    unique_users: int


class AdminEvaluationRow(BaseModel):
    """Table row with display-ready fields"""
    id: str
    user_name: str
    user_email: str
    use_case: str
    prompt: str
    score: int
    score_band: str
    created_at: datetime
    created_at_display: str


class AdminOverview(BaseModel):
    window_hours: int
    stats: AdminStats
    evaluations: List[AdminEvaluationRow]
