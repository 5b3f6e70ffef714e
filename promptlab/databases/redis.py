from redis import asyncio as redis
import json
import logging
from typing import Optional
from promptlab.config import get_settings
from promptlab.models.workspace import Workspace

settings = get_settings()


def get_redis_client() -> redis.Redis:
    """
    Create a new Redis Client instance
    """
    return redis.from_url(
        settings.redis_url, encoding="utf-8", decode_responses=True
    )


class WorkspaceStore:
    """
    Per-user form state kept in Redis with a sliding TTL
    """

    def __init__(self, client: Optional[redis.Redis] = None, ttl: Optional[int] = None):
        self.client = client or get_redis_client()
        self.ttl = ttl or settings.workspace_ttl

    @staticmethod
    def _key(user_id: str) -> str:
        return f"workspace:{user_id}"

    async def load(self, user_id: str) -> Workspace:
        data_str = await self.client.get(self._key(user_id))
        if not data_str:
            return Workspace()
        return Workspace.model_validate(json.loads(data_str))

    async def save(self, user_id: str, workspace: Workspace) -> None:
        await self.client.setex(self._key(user_id), self.ttl, workspace.model_dump_json())
        logging.info(f"Saved workspace for user {user_id}")

    async def clear(self, user_id: str) -> None:
        await self.client.delete(self._key(user_id))
        logging.info(f"Cleared workspace for user {user_id}")


_workspace_store = None

def get_workspace_store() -> WorkspaceStore:
    global _workspace_store
    if _workspace_store is None:
        _workspace_store = WorkspaceStore()
    return _workspace_store
