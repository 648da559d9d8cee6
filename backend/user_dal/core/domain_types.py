"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserId is always a 36-char UUID-shaped string once validated
    - Visibility is two-valued and one-way: ACTIVE -> SOFT_DELETED

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", str)

USER_ID_LENGTH = 36


# ─── Enums ───────────────────────────────────────────────────────

class Visibility(str, Enum):
    """Row visibility — derived from deleted_at, never stored."""
    ACTIVE = "active"
    SOFT_DELETED = "soft_deleted"


class StoreOperation(str, Enum):
    """Store operations, used as the `operation` label in logs and errors."""
    CREATE = "create"
    FETCH_BY_ID = "fetch_by_id"
    FETCH_ALL = "fetch_all"
    UPDATE = "update"
    DELETE = "delete"
