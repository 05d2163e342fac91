"""Users Routes — HTTP binding for the four UserService operations.

Invariants:
    - GET list → 200 with a JSON array (empty array when there are no users)
    - GET by id → 200, or 404 when the service returns None
    - POST → 201 with body and Location header, or 400 when the service returns False
    - DELETE → 200, or 404 when the service returns False
    - Routes never touch the repository or the session directly
"""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Response, status

from users_api.api.dependencies import get_user_service
from users_api.core.domain_types import UserId
from users_api.core.errors import ErrorContext, ResourceNotFoundError
from users_api.schemas.user import (
    CreateUserRequest, UserResponse, to_user, to_user_response,
)
from users_api.services.user_service import UserService

router = APIRouter(prefix="/api/v1/users", tags=["users"])


def _not_found(user_id: UUID) -> HTTPException:
    return HTTPException(
        status.HTTP_404_NOT_FOUND,
        detail=ResourceNotFoundError(
            "User", str(user_id), ErrorContext(user_id=str(user_id)),
        ).to_response(),
    )


@router.get("", response_model=list[UserResponse])
async def get_all(service: UserService = Depends(get_user_service)):
    users = await service.get_all()
    return [to_user_response(user) for user in users]


@router.get("/{user_id}", response_model=UserResponse)
async def get_by_id(
    user_id: UUID, service: UserService = Depends(get_user_service),
):
    user = await service.get_by_id(UserId(user_id))
    if user is None:
        raise _not_found(user_id)
    return to_user_response(user)


@router.post(
    "", response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create(
    body: CreateUserRequest,
    response: Response,
    service: UserService = Depends(get_user_service),
):
    """Create a user with a server-assigned id."""
    user = to_user(body)
    created = await service.create(user)
    if not created:
        raise HTTPException(
            status.HTTP_400_BAD_REQUEST, detail="User could not be created",
        )
    response.headers["Location"] = f"{router.prefix}/{user.id}"
    return to_user_response(user)


@router.delete("/{user_id}", status_code=status.HTTP_200_OK)
async def delete_by_id(
    user_id: UUID, service: UserService = Depends(get_user_service),
):
    deleted = await service.delete_by_id(UserId(user_id))
    if not deleted:
        raise _not_found(user_id)
    return Response(status_code=status.HTTP_200_OK)
