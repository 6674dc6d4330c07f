"""Pydantic schemas for hoax and attachment endpoints."""

from typing import Any

from pydantic import BaseModel

from hoaxify.schemas.common import TextField
from hoaxify.schemas.user import UserResponse


class HoaxCreateRequest(BaseModel):
    content: TextField = None
    fileAttachment: Any = None


class FileAttachmentResponse(BaseModel):
    filename: str
    fileType: str | None = None


class HoaxResponse(BaseModel):
    id: int
    content: str
    timestamp: int
    user: UserResponse
    fileAttachment: FileAttachmentResponse | None = None


class HoaxPage(BaseModel):
    content: list[HoaxResponse]
    page: int
    size: int
    totalPages: int


class AttachmentResponse(BaseModel):
    id: int
