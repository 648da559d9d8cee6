"""User Routes — HTTP mapping of the user store operations.

Invariants:
    - POST /v1/user → 201, GET /v1/users[/{id}] → 200, PATCH → 200, DELETE → 204 (no body)
    - PATCH with no non-empty field → 400 before the store is called
    - Store errors are not caught here; error_handlers maps them to 400/404/410/500

Design Decisions:
    - Thin routes: decode body, await one store call under the deadline, encode result
    - Path id is a plain str; the store owns id validation (InvalidInputError → 400)
"""

from fastapi import APIRouter, Depends, Response, status

from user_dal.api.deps import Deadline, get_deadline, get_user_store
from user_dal.core.errors import ErrorContext, InvalidInputError
from user_dal.core.repository_protocols import UserStore
from user_dal.schemas.user import UserCreate, UserEntityResponse, UserPatch

router = APIRouter(prefix="/v1", tags=["users"])


@router.post(
    "/user", response_model=UserEntityResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_user(
    body: UserCreate,
    store: UserStore = Depends(get_user_store),
    deadline: Deadline = Depends(get_deadline),
):
    """Create a user."""
    entity = await deadline.run(store.create(body.to_user()))
    return UserEntityResponse.from_entity(entity)


@router.get("/users", response_model=list[UserEntityResponse])
async def list_users(
    store: UserStore = Depends(get_user_store),
    deadline: Deadline = Depends(get_deadline),
):
    """List every active user (empty list when none)."""
    entities = await deadline.run(store.fetch_all())
    return [UserEntityResponse.from_entity(e) for e in entities]


@router.get("/users/{user_id}", response_model=UserEntityResponse)
async def get_user(
    user_id: str,
    store: UserStore = Depends(get_user_store),
    deadline: Deadline = Depends(get_deadline),
):
    entity = await deadline.run(store.fetch_by_id(user_id))
    return UserEntityResponse.from_entity(entity)


@router.patch("/users/{user_id}", response_model=UserEntityResponse)
async def update_user(
    user_id: str,
    body: UserPatch,
    store: UserStore = Depends(get_user_store),
    deadline: Deadline = Depends(get_deadline),
):
    """Partially update a user; blank fields are left unchanged."""
    if body.is_empty():
        raise InvalidInputError(
            "user must have fields to update", "body",
            ErrorContext(user_id=user_id, operation="update"),
        )
    entity = await deadline.run(store.update(user_id, body.to_user()))
    return UserEntityResponse.from_entity(entity)


@router.delete("/users/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: str,
    store: UserStore = Depends(get_user_store),
    deadline: Deadline = Depends(get_deadline),
):
    """Soft-delete a user."""
    await deadline.run(store.delete(user_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
