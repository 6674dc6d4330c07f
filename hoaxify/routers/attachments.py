"""Attachment upload endpoint."""

import logging

from fastapi import APIRouter, Depends, UploadFile
from sqlalchemy.orm import Session

from hoaxify.database import get_db
from hoaxify.schemas.hoax import AttachmentResponse
from hoaxify.services.file import get_file_service

logger = logging.getLogger("hoaxify")

router = APIRouter(prefix="/api/1.0/hoaxes/attachments", tags=["Attachments"])


@router.post("", response_model=AttachmentResponse)
async def upload_attachment(file: UploadFile, db: Session = Depends(get_db)) -> AttachmentResponse:
    """Store an upload (max 5 MB) until a hoax claims it."""
    service = get_file_service()
    data = await service.read_upload_limited(file)
    attachment_id = service.save_attachment(db, data)
    logger.info("Stored attachment %d (%d bytes)", attachment_id, len(data))
    return AttachmentResponse(id=attachment_id)
