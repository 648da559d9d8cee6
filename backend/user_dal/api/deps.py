"""API Dependencies — store lookup and per-request deadline.

Invariants:
    - Routes obtain the store only through get_user_store (overridable in tests)
    - Every store call made by a route is bounded by request_timeout_seconds

Design Decisions:
    - Store lives on app.state, built once by the lifespan
"""

import asyncio
from typing import Awaitable, TypeVar

from fastapi import Depends, Request

from user_dal.config import Settings, get_settings
from user_dal.core.repository_protocols import UserStore

T = TypeVar("T")


def get_user_store(request: Request) -> UserStore:
    store = getattr(request.app.state, "user_store", None)
    if store is None:
        raise RuntimeError("User store not initialized")
    return store


class Deadline:
    """Runs a store coroutine under the request deadline."""

    def __init__(self, seconds: float):
        self.seconds = seconds

    async def run(self, call: Awaitable[T]) -> T:
        return await asyncio.wait_for(call, timeout=self.seconds)


def get_deadline(settings: Settings = Depends(get_settings)) -> Deadline:
    return Deadline(settings.request_timeout_seconds)
