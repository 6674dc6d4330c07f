"""Pydantic schemas for user endpoints."""

from pydantic import BaseModel

from hoaxify.schemas.common import TextField


class UserCreateRequest(BaseModel):
    username: TextField = None
    email: TextField = None
    password: TextField = None


class UserUpdateRequest(BaseModel):
    username: TextField = None
    image: TextField = None


class UserResponse(BaseModel):
    id: int
    username: str
    email: str
    image: str | None = None

    model_config = {"from_attributes": True}


class UserPage(BaseModel):
    content: list[UserResponse]
    page: int
    size: int
    totalPages: int


class PasswordResetRequest(BaseModel):
    email: TextField = None


class PasswordUpdateRequest(BaseModel):
    passwordResetToken: TextField = None
    password: TextField = None
