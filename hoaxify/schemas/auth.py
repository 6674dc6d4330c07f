"""Pydantic schemas for authentication endpoints."""

from pydantic import BaseModel

from hoaxify.schemas.common import TextField


class LoginRequest(BaseModel):
    email: TextField = None
    password: TextField = None


class LoginResponse(BaseModel):
    id: int
    username: str
    image: str | None
    token: str
