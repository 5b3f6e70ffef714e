"""Admin rollup endpoints."""

from datetime import timedelta
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from promptlab.auth.dependencies import AdminUserDep
from promptlab.config import get_settings
from promptlab.databases.postgres.database import get_db
from promptlab.models.admin import AdminEvaluationRow, AdminOverview
from promptlab.repository import evaluation_repository, profile_repository
from promptlab.services import admin_service
from promptlab.utils.presentation import format_date, score_band, truncate_text, use_case_label
from promptlab.utils.response import create_response

router = APIRouter()
settings = get_settings()


@router.get("/evaluations")
async def recent_evaluations(
    admin_id: AdminUserDep,
    db: Annotated[Session, Depends(get_db)],
):
    """
    Evaluations from the admin window joined with user identity,
    plus count / average score / unique users.
    """
    window_hours = settings.admin_window_hours
    evaluations = evaluation_repository.find_recent(db, timedelta(hours=window_hours))
    profiles = profile_repository.find_by_ids(db, (e.user_id for e in evaluations))

    joined = admin_service.join_with_profiles(evaluations, profiles)
    stats = admin_service.summarize(joined)

    rows = [
        AdminEvaluationRow(
            id=row.id,
            user_name=row.user_name,
            user_email=row.user_email,
            use_case=truncate_text(use_case_label(row.use_case, row.custom_use_case), 50),
            prompt=truncate_text(row.prompt, 80),
            score=row.score,
            score_band=score_band(row.score),
            created_at=row.created_at,
            created_at_display=format_date(row.created_at),
        )
        for row in joined
    ]
    overview = AdminOverview(window_hours=window_hours, stats=stats, evaluations=rows)
    return create_response(True, f"Past {window_hours} hours", overview.model_dump(mode="json"))
