"""Identifier & Clock — production implementations of the core policy protocols.

Invariants:
    - UuidGenerator output is always 36 chars (canonical hyphenated UUID4)
    - SystemClock returns timezone-aware UTC datetimes
"""

import uuid
from datetime import datetime, timezone


class UuidGenerator:
    """IdGenerator backed by uuid4."""

    def generate(self) -> str:
        return str(uuid.uuid4())


class SystemClock:
    """Clock backed by the system wall clock."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)
