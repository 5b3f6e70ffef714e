from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from redis.exceptions import RedisError
import logging

from promptlab.auth.dependencies import OptionalUserDep
from promptlab.databases.redis import WorkspaceStore, get_workspace_store
from promptlab.exceptions import PromptLabError
from promptlab.models.use_case import UseCaseRequest, UseCaseResponse
from promptlab.services.evaluation_pipeline_service import EvaluationPipeline, get_evaluation_pipeline
from promptlab.utils.response import error_body

router = APIRouter()


@router.post("/use-cases", response_model=UseCaseResponse)
async def generate_use_cases(
    request: UseCaseRequest,
    user_id: OptionalUserDep,
    pipeline: EvaluationPipeline = Depends(get_evaluation_pipeline),
    workspace_store: WorkspaceStore = Depends(get_workspace_store),
):
    """
    Generate 4 AI use cases for a department
    """
    try:
        use_cases = await pipeline.generate_use_cases(request.department, request.tasks)
    except PromptLabError as e:
        logging.error(f"Use case generation failed: {str(e)}")
        return JSONResponse(
            status_code=500,
            content=error_body(e, "Failed to generate use cases")
        )

    if user_id:
        try:
            workspace = await workspace_store.load(user_id)
            workspace.generated_use_cases = use_cases
            workspace.department = request.department
            workspace.daily_tasks = request.tasks or ""
            await workspace_store.save(user_id, workspace)
        except RedisError as e:
            logging.warning(f"Could not save generated use cases for user {user_id}: {e}")

    return UseCaseResponse(use_cases=use_cases)
