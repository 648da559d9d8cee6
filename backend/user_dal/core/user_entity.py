"""User Entity — value types and pure rules for the user aggregate.

Invariants:
    - UserEntity composes Entity (identity + audit timestamps) with User (payload)
    - validate_user_id never touches IO; it only checks type and length
    - merge_user never replaces a field with an empty string

Design Decisions:
    - Frozen dataclasses: the store builds new values instead of mutating shared ones
    - Composition over inheritance: UserEntity.entity / UserEntity.user, with
      read-through properties for the common fields
"""

from dataclasses import dataclass, replace
from datetime import datetime

from user_dal.core.domain_types import USER_ID_LENGTH, UserId, Visibility
from user_dal.core.errors import ErrorContext, InvalidInputError


@dataclass(frozen=True)
class User:
    """Domain payload — the caller-supplied part of a user."""
    first_name: str = ""
    last_name: str = ""


@dataclass(frozen=True)
class Entity:
    """Identity and audit fields shared by every persisted record."""
    id: UserId
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None = None

    @property
    def visibility(self) -> Visibility:
        return visibility_of(self.deleted_at)


@dataclass(frozen=True)
class UserEntity:
    """Entity ⊕ User, returned by every successful store operation."""
    entity: Entity
    user: User

    @property
    def id(self) -> UserId:
        return self.entity.id

    @property
    def first_name(self) -> str:
        return self.user.first_name

    @property
    def last_name(self) -> str:
        return self.user.last_name

    @property
    def created_at(self) -> datetime:
        return self.entity.created_at

    @property
    def updated_at(self) -> datetime:
        return self.entity.updated_at

    @property
    def deleted_at(self) -> datetime | None:
        return self.entity.deleted_at

    def to_dict(self) -> dict:
        """Flat representation (the JSON shape of the HTTP layer)."""
        return {
            "id": self.id,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
            "deleted_at": self.deleted_at,
        }


def visibility_of(deleted_at: datetime | None) -> Visibility:
    """A record is soft-deleted exactly when deleted_at is set."""
    if deleted_at is None:
        return Visibility.ACTIVE
    return Visibility.SOFT_DELETED


def validate_user_id(user_id: object, operation: str) -> UserId:
    """Return user_id as a UserId, or raise InvalidInputError on a bad shape."""
    if not isinstance(user_id, str):
        raise InvalidInputError(
            f"user id must be a string, got {type(user_id).__name__}",
            "id", ErrorContext(operation=operation),
        )
    if len(user_id) != USER_ID_LENGTH:
        raise InvalidInputError(
            f"user {operation} id length {len(user_id)}",
            "id", ErrorContext(operation=operation),
        )
    return UserId(user_id)


def require_user(user: User | None, operation: str) -> User:
    """Reject a missing payload before any IO happens."""
    if user is None:
        raise InvalidInputError(
            "user can not be None", "user", ErrorContext(operation=operation),
        )
    return user


def merge_user(current: User, partial: User) -> User:
    """Field-level partial update: non-empty values replace, empty values keep."""
    return replace(
        current,
        first_name=partial.first_name or current.first_name,
        last_name=partial.last_name or current.last_name,
    )
