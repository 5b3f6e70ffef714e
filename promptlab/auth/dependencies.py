"""Caller identity, as forwarded by the authenticating gateway."""

from typing import Annotated, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import APIKeyHeader
from sqlalchemy.orm import Session

from promptlab.databases.postgres.database import get_db
from promptlab.repository import profile_repository

USER_ID_HEADER = APIKeyHeader(name="X-User-Id", auto_error=False)


async def get_optional_user_id(user_id: Optional[str] = Depends(USER_ID_HEADER)) -> Optional[str]:
    if user_id and user_id.strip():
        return user_id.strip()
    return None


async def get_current_user_id(user_id: Optional[str] = Depends(get_optional_user_id)) -> str:
    """Require an authenticated caller."""
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing X-User-Id header",
        )
    return user_id


async def get_admin_user_id(
    user_id: Annotated[str, Depends(get_current_user_id)],
    db: Annotated[Session, Depends(get_db)],
) -> str:
    """Require a caller holding the admin role."""
    if not profile_repository.is_admin(db, user_id):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return user_id


# Type aliases for dependency injection
OptionalUserDep = Annotated[Optional[str], Depends(get_optional_user_id)]
CurrentUserDep = Annotated[str, Depends(get_current_user_id)]
AdminUserDep = Annotated[str, Depends(get_admin_user_id)]
