import logging
from sqlalchemy.orm import Session
from typing import Iterable, List
import promptlab.databases.postgres.model as models

ADMIN_ROLE = "admin"

def find_by_ids(db: Session, user_ids: Iterable[str]) -> List[models.Profile]:
    ids = list(set(user_ids))
    if not ids:
        return []
    result = db.query(models.Profile).filter(models.Profile.id.in_(ids)).all()
    logging.info(f"Fetched {len(result)} profiles for {len(ids)} user ids")
    return result

def is_admin(db: Session, user_id: str) -> bool:
    role = (
        db.query(models.UserRole)
        .filter(models.UserRole.user_id == user_id)
        .filter(models.UserRole.role == ADMIN_ROLE)
        .first()
    )
    return role is not None
