"""User Schemas — Pydantic models with field-level validation for API boundaries.

Invariants:
    - UserCreate: first_name / last_name stripped, non-empty, max 100 chars
    - UserPatch: both fields optional, "" means "leave unchanged"
    - UserEntityResponse is flat (id, names, three timestamps)

Design Decisions:
    - field_validator for side-effect-free transforms (strip) — keeps models pure
    - Schemas convert to/from core value types; the store never sees pydantic models
"""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from user_dal.core.user_entity import User, UserEntity


class UserCreate(BaseModel):
    """User creation — both names required."""
    first_name: str = Field(max_length=100)
    last_name: str = Field(max_length=100)

    @field_validator("first_name", "last_name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty or whitespace")
        return v

    def to_user(self) -> User:
        return User(first_name=self.first_name, last_name=self.last_name)


class UserPatch(BaseModel):
    """Partial update — blank fields are kept by the store."""
    first_name: str = Field("", max_length=100)
    last_name: str = Field("", max_length=100)

    @field_validator("first_name", "last_name", mode="before")
    @classmethod
    def none_to_blank(cls, v: object) -> object:
        if v is None:
            return ""
        return v.strip() if isinstance(v, str) else v

    def is_empty(self) -> bool:
        return not self.first_name and not self.last_name

    def to_user(self) -> User:
        return User(first_name=self.first_name, last_name=self.last_name)


class UserEntityResponse(BaseModel):
    """User entity response — public-facing user data."""
    id: str
    first_name: str
    last_name: str
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None = None

    @classmethod
    def from_entity(cls, entity: UserEntity) -> "UserEntityResponse":
        return cls(**entity.to_dict())


class ServiceInfo(BaseModel):
    name: str
    version: str
