from fastapi import APIRouter, HTTPException, Path, Query, Depends
from fastapi.responses import JSONResponse
from redis.exceptions import RedisError
from sqlalchemy.orm import Session
import logging

from promptlab.auth.dependencies import CurrentUserDep
from promptlab.databases.postgres.database import get_db
from promptlab.databases.redis import WorkspaceStore, get_workspace_store
from promptlab.exceptions import PromptLabError
from promptlab.models.evaluate import (
    DIMENSIONS,
    EvaluateRequest,
    EvaluateResponse,
    EvaluationRecord,
    SubmitEvaluationRequest,
    SubmitEvaluationResponse,
)
from promptlab.models.workspace import EditHandoff
from promptlab.repository import evaluation_repository
from promptlab.services.evaluation_pipeline_service import EvaluationPipeline, get_evaluation_pipeline
from promptlab.utils.presentation import format_date, score_band, status_band, use_case_label
from promptlab.utils.response import create_response, error_body

router = APIRouter()

EVALUATION_FAILED = "Failed to evaluate prompt"


def _to_record(evaluation) -> EvaluationRecord:
    record = EvaluationRecord.model_validate(evaluation)
    record.use_case_label = use_case_label(evaluation.use_case, evaluation.custom_use_case)
    record.created_at_display = format_date(evaluation.created_at)
    record.score_band = score_band(evaluation.score)
    result = evaluation.evaluation_result or {}
    record.status_bands = {
        name: status_band((result.get(name) or {}).get("status"))
        for name in DIMENSIONS
    }
    return record


@router.post("/evaluate", response_model=EvaluateResponse)
async def evaluate_prompt(
    request: EvaluateRequest,
    pipeline: EvaluationPipeline = Depends(get_evaluation_pipeline),
):
    """
    Score a prompt against a use case without storing it
    """
    try:
        evaluation = await pipeline.evaluate(request.use_case, request.prompt)
    except PromptLabError as e:
        logging.error(f"Error in evaluate: {str(e)}")
        return JSONResponse(status_code=500, content=error_body(e, EVALUATION_FAILED))

    return EvaluateResponse(evaluation=evaluation)


@router.post("/evaluations", response_model=SubmitEvaluationResponse)
async def submit_evaluation(
    request: SubmitEvaluationRequest,
    user_id: CurrentUserDep,
    db: Session = Depends(get_db),
    pipeline: EvaluationPipeline = Depends(get_evaluation_pipeline),
    workspace_store: WorkspaceStore = Depends(get_workspace_store),
):
    """
    Evaluate a prompt and append it to the caller's history.
    Editing a previous evaluation also lands here and creates a new record.
    """
    try:
        evaluation, evaluation_id, error = await pipeline.submit(
            db=db,
            user_id=user_id,
            use_case=request.use_case,
            custom_use_case=request.custom_use_case,
            prompt=request.prompt,
        )
    except PromptLabError as e:
        logging.error(f"Error evaluating prompt: {str(e)}")
        return JSONResponse(status_code=500, content=error_body(e, EVALUATION_FAILED))

    if evaluation_id:
        try:
            workspace = await workspace_store.load(user_id)
            if workspace.editing_id:
                workspace.editing_id = None
                await workspace_store.save(user_id, workspace)
        except RedisError as e:
            logging.warning(f"Could not clear editing state for user {user_id}: {e}")

    return SubmitEvaluationResponse(
        evaluation=evaluation,
        stored=evaluation_id is not None,
        evaluation_id=evaluation_id,
        error=error,
    )


@router.get("/evaluations")
async def list_evaluations(user_id: CurrentUserDep, db: Session = Depends(get_db)):
    """Caller's evaluation history, newest first"""
    evaluations = evaluation_repository.find_by_user(db, user_id)
    data = [_to_record(evaluation).model_dump(mode="json") for evaluation in evaluations]
    return create_response(True, f"Your Evaluations ({len(data)})", data)


@router.get("/evaluations/{evaluation_id}")
async def get_evaluation(
    user_id: CurrentUserDep,
    evaluation_id: str = Path(...),
    db: Session = Depends(get_db),
):
    evaluation = evaluation_repository.find_by_id_for_user(db, evaluation_id, user_id)
    if not evaluation:
        raise HTTPException(
            status_code=404,
            detail=f"Evaluation not found: {evaluation_id}"
        )
    return create_response(True, "Evaluation Details", _to_record(evaluation).model_dump(mode="json"))


@router.get("/evaluations/{evaluation_id}/edit-link")
async def get_edit_link(
    user_id: CurrentUserDep,
    evaluation_id: str = Path(...),
    base_url: str = Query("/", description="Page that hosts the evaluation form"),
    db: Session = Depends(get_db),
):
    """Hand-off URL that loads this evaluation into the form for re-editing"""
    evaluation = evaluation_repository.find_by_id_for_user(db, evaluation_id, user_id)
    if not evaluation:
        raise HTTPException(
            status_code=404,
            detail=f"Evaluation not found: {evaluation_id}"
        )
    url = EditHandoff.from_evaluation(evaluation).to_url(base_url)
    return create_response(True, "Edit link created", {"url": url})
