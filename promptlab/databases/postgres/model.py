import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, ForeignKey, Integer, JSON, String, Text, DateTime, CheckConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.sql import func

from .database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Profile(Base):
    """User identity, owned by the auth provider. Read-only here."""
    __tablename__ = "profiles"

    id = Column(String(36), primary_key=True, index=True)
    name = Column(String(255), nullable=True)
    email = Column(String(255), nullable=True, index=True)

    # Relationships
    roles = relationship("UserRole", back_populates="profile")
    evaluations = relationship("PromptEvaluation", back_populates="profile")


class UserRole(Base):
    __tablename__ = "user_roles"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(36), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    role = Column(String(50), nullable=False)

    # Relationships
    profile = relationship("Profile", back_populates="roles")


class PromptEvaluation(Base):
    """Append-only: edits are stored as new rows"""
    __tablename__ = "prompt_evaluations"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("profiles.id", ondelete="RESTRICT"), nullable=False, index=True)

    use_case = Column(Text, nullable=True)
    custom_use_case = Column(Text, nullable=True)
    prompt = Column(Text, nullable=False)

    evaluation_result = Column(JSON().with_variant(JSONB(), "postgresql"), nullable=False)
    score = Column(Integer, nullable=False)

    created_at = Column(
        DateTime(timezone=True),
        default=_utcnow,
        server_default=func.now(),
        nullable=False,
        index=True,
    )

    __table_args__ = (
        CheckConstraint(
            "(use_case IS NULL) <> (custom_use_case IS NULL)",
            name="ck_prompt_evaluations_one_use_case",
        ),
        CheckConstraint("score >= 0 AND score <= 10", name="ck_prompt_evaluations_score_range"),
    )

    # Relationships
    profile = relationship("Profile", back_populates="evaluations")
