from fastapi import APIRouter, Depends
import logging

from promptlab.auth.dependencies import CurrentUserDep
from promptlab.databases.redis import WorkspaceStore, get_workspace_store
from promptlab.models.workspace import (
    ConsumeEditRequest,
    ConsumeEditResponse,
    EditHandoff,
    Workspace,
    WorkspaceUpdate,
)

router = APIRouter()


@router.get("/workspace", response_model=Workspace)
async def get_workspace(
    user_id: CurrentUserDep,
    workspace_store: WorkspaceStore = Depends(get_workspace_store),
):
    """Form state shared by the generator and evaluator tabs"""
    return await workspace_store.load(user_id)


@router.put("/workspace", response_model=Workspace)
async def update_workspace(
    update: WorkspaceUpdate,
    user_id: CurrentUserDep,
    workspace_store: WorkspaceStore = Depends(get_workspace_store),
):
    workspace = await workspace_store.load(user_id)
    workspace = workspace.model_copy(update=update.model_dump(exclude_none=True))
    await workspace_store.save(user_id, workspace)
    return workspace


@router.delete("/workspace", response_model=Workspace)
async def reset_workspace(
    user_id: CurrentUserDep,
    workspace_store: WorkspaceStore = Depends(get_workspace_store),
):
    await workspace_store.clear(user_id)
    return Workspace()


@router.post("/workspace/consume-edit", response_model=ConsumeEditResponse)
async def consume_edit(
    request: ConsumeEditRequest,
    user_id: CurrentUserDep,
    workspace_store: WorkspaceStore = Depends(get_workspace_store),
):
    """
    Load an edit hand-off URL into the evaluation form.
    Returns the URL with the hand-off parameters removed.
    """
    workspace = await workspace_store.load(user_id)
    handoff, cleaned_url = EditHandoff.consume(request.url)

    if handoff is None:
        return ConsumeEditResponse(loaded=False, url=cleaned_url, workspace=workspace)

    workspace.apply_handoff(handoff)
    await workspace_store.save(user_id, workspace)
    logging.info(f"Loaded evaluation {handoff.edit_id} for editing by user {user_id}")

    return ConsumeEditResponse(loaded=True, url=cleaned_url, workspace=workspace)
