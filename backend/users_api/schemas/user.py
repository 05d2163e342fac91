"""User Schemas — request/response contracts and their mapping to the ORM entity.

Invariants:
    - CreateUserRequest.full_name: 1-200 chars, stripped, non-empty
    - to_user() always assigns a fresh id; ids are never client-supplied
    - UserResponse mirrors User field for field

Design Decisions:
    - from_attributes on UserResponse: built straight from the ORM object
    - Mapping functions live beside the contracts they produce
"""

import uuid
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from users_api.models.user import User


class CreateUserRequest(BaseModel):
    """User creation — validates full_name length and whitespace."""
    full_name: str = Field(min_length=1, max_length=200)

    @field_validator("full_name")
    @classmethod
    def strip_full_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("full_name cannot be empty or whitespace")
        return v


class UserResponse(BaseModel):
    """User response — public-facing user data."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    full_name: str


def to_user(request: CreateUserRequest) -> User:
    return User(id=uuid.uuid4(), full_name=request.full_name)


def to_user_response(user: User) -> UserResponse:
    return UserResponse.model_validate(user)
