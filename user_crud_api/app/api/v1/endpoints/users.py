"""
User endpoints for API v1.

Five CRUD routes over the ``User`` resource.  Request bodies and path
ids are validated by FastAPI before the handlers run; domain errors
raised by ``UserService`` (``NotFoundError``, ``ConflictError``) are
turned into 404/409 responses by the application's exception
handlers, so the handlers here contain no error mapping of their own.
"""

from typing import Annotated, List

from fastapi import APIRouter, Path, Response, status

from user_crud_api.app.schemas.user import UserCreate, UserRead, UserUpdate
from user_crud_api.app.services.user_service import MAX_USER_ID, UserService

router = APIRouter()

# Ids are positive and must fit in an SQLite INTEGER; anything else is a 400.
UserId = Annotated[int, Path(ge=1, le=MAX_USER_ID)]

ERROR_RESPONSES = {
    status.HTTP_400_BAD_REQUEST: {"description": "Malformed input"},
}


@router.post(
    "",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
    responses={**ERROR_RESPONSES, status.HTTP_409_CONFLICT: {"description": "Email already in use"}},
)
async def create_user(user: UserCreate) -> UserRead:
    """Create a new user and return it with its assigned id."""
    return await UserService.create_user(user)


@router.get("", response_model=List[UserRead])
async def list_users() -> List[UserRead]:
    """Return every user."""
    return await UserService.list_users()


@router.get(
    "/{user_id}",
    response_model=UserRead,
    responses={**ERROR_RESPONSES, status.HTTP_404_NOT_FOUND: {"description": "Unknown user"}},
)
async def get_user(user_id: UserId) -> UserRead:
    return await UserService.get_user(user_id)


@router.patch(
    "/{user_id}",
    response_model=UserRead,
    responses={
        **ERROR_RESPONSES,
        status.HTTP_404_NOT_FOUND: {"description": "Unknown user"},
        status.HTTP_409_CONFLICT: {"description": "Email already in use"},
    },
)
async def update_user(user_id: UserId, user: UserUpdate) -> UserRead:
    """Update some or all of a user's fields.

    Only the keys present in the body are changed.
    """
    return await UserService.update_user(user_id, user)


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={**ERROR_RESPONSES, status.HTTP_404_NOT_FOUND: {"description": "Unknown user"}},
)
async def delete_user(user_id: UserId) -> Response:
    """Delete a user permanently."""
    await UserService.delete_user(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
