import logging
from typing import Iterable, List

from promptlab.models.admin import AdminEvaluation, AdminStats

UNKNOWN_USER = "Unknown User"
UNKNOWN_EMAIL = "Unknown Email"


def join_with_profiles(evaluations: Iterable, profiles: Iterable) -> List[AdminEvaluation]:
    """
    Attach name/email to each evaluation by user id.
    Evaluations whose owner has no profile get placeholder identity.
    """
    by_id = {profile.id: profile for profile in profiles}
    rows = []
    for evaluation in evaluations:
        profile = by_id.get(evaluation.user_id)
        rows.append(AdminEvaluation(
            id=evaluation.id,
            user_name=(profile.name if profile else None) or UNKNOWN_USER,
            user_email=(profile.email if profile else None) or UNKNOWN_EMAIL,
            use_case=evaluation.use_case,
            custom_use_case=evaluation.custom_use_case,
            prompt=evaluation.prompt,
            score=evaluation.score,
            created_at=evaluation.created_at,
        ))
    logging.info(f"Joined {len(rows)} evaluations with {len(by_id)} profiles")
    return rows


def summarize(rows: List[AdminEvaluation]) -> AdminStats:
    if rows:
        average = sum(row.score for row in rows) / len(rows)
        average_score = f"{average:.1f}"
    else:
        average_score = "0"

    return AdminStats(
        total_evaluations=len(rows),
        average_score=average_score,
        unique_users=len({row.user_email for row in rows}),
    )
