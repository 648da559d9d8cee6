"""User ORM — one row per user, soft-deleted rows kept for audit.

Invariants:
    - seq is the insertion sequence: database-assigned, monotonic, never exposed
    - id is a unique 36-char string, assigned by the IdGenerator (no server default)
    - first_name / last_name are non-nullable (empty strings allowed)
    - deleted_at NULL means active; non-NULL means soft-deleted, never cleared

Design Decisions:
    - Timestamps written by the store from its Clock; server defaults only cover
      rows inserted outside the store
    - No onupdate hook: updated_at refresh is an explicit store rule
"""

from datetime import datetime, timezone

from sqlalchemy import Integer, String, DateTime, func
from sqlalchemy.orm import Mapped, mapped_column

from user_dal.core.domain_types import USER_ID_LENGTH, UserId
from user_dal.core.user_entity import Entity, User, UserEntity
from user_dal.db.base import Base


class UserRow(Base):
    """Persisted user record."""
    __tablename__ = "user"

    seq: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id: Mapped[str] = mapped_column(
        String(USER_ID_LENGTH), nullable=False, unique=True,
    )
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now(),
    )
    deleted_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )

    def to_entity(self) -> UserEntity:
        return UserEntity(
            entity=Entity(
                id=UserId(self.id),
                created_at=_as_utc(self.created_at),
                updated_at=_as_utc(self.updated_at),
                deleted_at=_as_utc(self.deleted_at),
            ),
            user=User(first_name=self.first_name, last_name=self.last_name),
        )


def _as_utc(value: datetime | None) -> datetime | None:
    """SQLite hands back naive datetimes; every stored timestamp is UTC."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
