"""ORM Models — SQLAlchemy declarative models for persisted rows.

Invariants:
    - All models inherit from Base (db/base.py)

Design Decisions:
    - All models imported here so Base.metadata is complete before create_all runs
"""

from user_dal.models.user import UserRow  # noqa: F401
