"""User Repository — the entity store: CRUD with soft-delete visibility.

Invariants:
    - Ids are validated (type + length) before any session is opened
    - fetch_by_id / update / delete share one visibility check:
      no row -> UserNotFoundError, deleted_at set -> UserDeletedError
    - fetch_all silently skips soft-deleted rows and returns [] when none are active
    - Every mutation (update, delete) refreshes updated_at from the injected Clock
    - No upsert: update/delete against a missing id never inserts
    - No hard delete: delete only stamps deleted_at

Design Decisions:
    - One AsyncSession per call from the shared DatabaseSessionManager; no locks,
      concurrent writers are serialized by the database
    - Driver failures become PersistenceError inside DatabaseSessionManager.session()
    - fetch_all orders by the database-assigned seq column: insertion order
      even when the Clock repeats or steps backwards
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from user_dal.core.domain_types import StoreOperation, UserId, Visibility
from user_dal.core.errors import UserDeletedError, UserNotFoundError
from user_dal.core.repository_protocols import Clock, IdGenerator
from user_dal.core.user_entity import (
    User, UserEntity, merge_user, require_user, validate_user_id, visibility_of,
)
from user_dal.infrastructure.database import DatabaseSessionManager
from user_dal.models.user import UserRow

logger = logging.getLogger(__name__)


class SqlUserRepository:
    """UserStore implementation over SQLAlchemy async sessions."""

    def __init__(
        self,
        db_manager: DatabaseSessionManager,
        id_generator: IdGenerator,
        clock: Clock,
    ):
        self._db = db_manager
        self._ids = id_generator
        self._clock = clock

    async def create(self, user: User | None) -> UserEntity:
        op = StoreOperation.CREATE.value
        user = require_user(user, op)
        now = self._clock.now()
        row = UserRow(
            id=self._ids.generate(),
            first_name=user.first_name,
            last_name=user.last_name,
            created_at=now,
            updated_at=now,
        )
        async with self._db.session(op) as db:
            db.add(row)
            await db.commit()
        logger.info(
            f"User {row.id} created", extra={"user_id": row.id, "operation": op},
        )
        return row.to_entity()

    async def fetch_by_id(self, user_id: str) -> UserEntity:
        op = StoreOperation.FETCH_BY_ID.value
        uid = validate_user_id(user_id, op)
        async with self._db.session(op) as db:
            row = await _get_visible_row(db, uid)
            return row.to_entity()

    async def fetch_all(self) -> list[UserEntity]:
        op = StoreOperation.FETCH_ALL.value
        query = (
            select(UserRow)
            .where(UserRow.deleted_at.is_(None))
            .order_by(UserRow.seq)
        )
        async with self._db.session(op) as db:
            result = await db.execute(query)
            return [row.to_entity() for row in result.scalars().all()]

    async def update(self, user_id: str, partial: User | None) -> UserEntity:
        op = StoreOperation.UPDATE.value
        uid = validate_user_id(user_id, op)
        partial = require_user(partial, op)
        async with self._db.session(op) as db:
            row = await _get_visible_row(db, uid)
            merged = merge_user(
                User(first_name=row.first_name, last_name=row.last_name),
                partial,
            )
            row.first_name = merged.first_name
            row.last_name = merged.last_name
            row.updated_at = self._clock.now()
            await db.commit()
        logger.info(
            f"User {uid} updated", extra={"user_id": uid, "operation": op},
        )
        return row.to_entity()

    async def delete(self, user_id: str) -> None:
        op = StoreOperation.DELETE.value
        uid = validate_user_id(user_id, op)
        async with self._db.session(op) as db:
            row = await _get_visible_row(db, uid)
            now = self._clock.now()
            row.deleted_at = now
            row.updated_at = now
            await db.commit()
        logger.info(
            f"User {uid} soft-deleted", extra={"user_id": uid, "operation": op},
        )


async def _get_visible_row(db: AsyncSession, user_id: UserId) -> UserRow:
    """Load the row or raise the matching visibility error."""
    result = await db.execute(select(UserRow).where(UserRow.id == user_id))
    row = result.scalar_one_or_none()
    if row is None:
        raise UserNotFoundError(user_id)
    if visibility_of(row.deleted_at) is Visibility.SOFT_DELETED:
        raise UserDeletedError(user_id)
    return row
