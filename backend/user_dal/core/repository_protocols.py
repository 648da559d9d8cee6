"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - Identifier generation and clock reads are injected, never hard-wired
    - UserStore is the only surface the HTTP layer talks to

Design Decisions:
    - Protocol over ABC: structural subtyping, test doubles need no inheritance
    - Async UserStore: implementations do IO and must honour task cancellation
"""

from datetime import datetime
from typing import Protocol

from user_dal.core.user_entity import User, UserEntity


class IdGenerator(Protocol):
    """Produces a globally-unique, 36-char identifier on each call."""
    def generate(self) -> str: ...


class Clock(Protocol):
    """Source of mutation timestamps."""
    def now(self) -> datetime: ...


class UserStore(Protocol):
    """Contract for user persistence — implemented by shell."""
    async def create(self, user: User | None) -> UserEntity: ...
    async def fetch_by_id(self, user_id: str) -> UserEntity: ...
    async def fetch_all(self) -> list[UserEntity]: ...
    async def update(self, user_id: str, partial: User | None) -> UserEntity: ...
    async def delete(self, user_id: str) -> None: ...
