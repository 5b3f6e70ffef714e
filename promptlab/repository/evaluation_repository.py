import logging
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from sqlalchemy.orm import Session

import promptlab.databases.postgres.model as models


def create_evaluation(
    db: Session,
    user_id: str,
    use_case: Optional[str],
    custom_use_case: Optional[str],
    prompt: str,
    evaluation_result: dict,
    score: int,
    created_at: Optional[datetime] = None,
) -> models.PromptEvaluation:
    """
    Insert a new evaluation record.
    Exactly one of use_case / custom_use_case must be set.
    """
    if (use_case is None) == (custom_use_case is None):
        raise ValueError("Exactly one of use_case or custom_use_case must be provided")

    evaluation = models.PromptEvaluation(
        user_id=user_id,
        use_case=use_case,
        custom_use_case=custom_use_case,
        prompt=prompt,
        evaluation_result=evaluation_result,
        score=score,
    )
    if created_at is not None:
        evaluation.created_at = created_at

    db.add(evaluation)
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(evaluation)
    logging.info(f"Stored evaluation {evaluation.id} for user {user_id} (score={score})")
    return evaluation


def find_by_user(db: Session, user_id: str) -> List[models.PromptEvaluation]:
    """Evaluations for one user, newest first"""
    result = (
        db.query(models.PromptEvaluation)
        .filter(models.PromptEvaluation.user_id == user_id)
        .order_by(models.PromptEvaluation.created_at.desc())
        .all()
    )
    logging.info(f"Found {len(result)} evaluations for user {user_id}")
    return result


def find_by_id_for_user(db: Session, evaluation_id: str, user_id: str) -> Optional[models.PromptEvaluation]:
    return (
        db.query(models.PromptEvaluation)
        .filter(models.PromptEvaluation.id == evaluation_id)
        .filter(models.PromptEvaluation.user_id == user_id)
        .first()
    )


def find_recent(
    db: Session,
    window: timedelta,
    now: Optional[datetime] = None,
) -> List[models.PromptEvaluation]:
    """
    Evaluations created within `window` of now.
    Highest score first; ties keep the earlier submission first.
    """
    now = now or datetime.now(timezone.utc)
    since = now - window
    result = (
        db.query(models.PromptEvaluation)
        .filter(models.PromptEvaluation.created_at >= since)
        .order_by(
            models.PromptEvaluation.score.desc(),
            models.PromptEvaluation.created_at.asc(),
        )
        .all()
    )
    logging.info(f"Found {len(result)} evaluations since {since.isoformat()}")
    return result
