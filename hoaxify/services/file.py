"""File service for profile images and hoax attachments."""

import base64
import binascii
import logging
import os
from datetime import datetime, timedelta
from pathlib import Path

import filetype
from fastapi import UploadFile
from sqlalchemy.orm import Session

from hoaxify.config import get_settings
from hoaxify.exceptions import FileSizeException
from hoaxify.models.file_attachment import FileAttachment
from hoaxify.models.hoax import Hoax
from hoaxify.models.user import User
from hoaxify.security import random_string

logger = logging.getLogger("hoaxify")

FILENAME_LENGTH = 32
SUPPORTED_IMAGE_TYPES = {"image/png", "image/jpeg"}
MB = 1024 * 1024


def decode_base64(value: object) -> bytes | None:
    """Decode a base64 string, returning None when it is not a valid base64 string."""
    if not isinstance(value, str):
        return None
    try:
        return base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError):
        return None


class FileService:
    """Stores uploaded files on disk and keeps attachment metadata in the database."""

    def __init__(self) -> None:
        settings = get_settings()
        self.upload_folder = Path(settings.UPLOAD_DIR)
        self.profile_folder = settings.profile_folder
        self.attachment_folder = settings.attachment_folder
        self.max_attachment_bytes = settings.MAX_ATTACHMENT_SIZE_MB * MB
        self.max_profile_image_bytes = settings.MAX_PROFILE_IMAGE_SIZE_MB * MB
        self.unused_attachment_ttl = timedelta(hours=settings.UNUSED_ATTACHMENT_TTL_HOURS)

    def create_folders(self) -> None:
        for folder in (self.upload_folder, self.profile_folder, self.attachment_folder):
            folder.mkdir(parents=True, exist_ok=True)

    # --- profile images ---

    def is_less_than_limit(self, data: bytes) -> bool:
        return len(data) < self.max_profile_image_bytes

    def is_supported_image(self, data: bytes) -> bool:
        """Accept PNG or JPEG, judged by the file's magic bytes."""
        kind = filetype.guess(data)
        return kind is not None and kind.mime in SUPPORTED_IMAGE_TYPES

    def save_profile_image(self, image_base64: str) -> str:
        """Write a base64 encoded image to the profile folder. Returns the stored filename."""
        filename = random_string(FILENAME_LENGTH)
        data = decode_base64(image_base64) or b""
        (self.profile_folder / filename).write_bytes(data)
        return filename

    def delete_profile_image(self, filename: str) -> None:
        self._remove_file(self.profile_folder / filename)

    # --- attachments ---

    async def read_upload_limited(self, upload: UploadFile) -> bytes:
        """Read an upload into memory, refusing anything above the attachment cap."""
        chunks = []
        size = 0
        chunk_size = 1024 * 64
        while True:
            chunk = await upload.read(chunk_size)
            if not chunk:
                break
            size += len(chunk)
            if size > self.max_attachment_bytes:
                raise FileSizeException()
            chunks.append(chunk)
        return b"".join(chunks)

    def save_attachment(self, db: Session, data: bytes) -> int:
        """Store an attachment under a random name and record it. Returns the attachment id.

        The type is sniffed from the content; when it is recognised its
        extension is appended to the stored filename.
        """
        kind = filetype.guess(data)
        filename = random_string(FILENAME_LENGTH)
        file_type = None
        if kind is not None:
            file_type = kind.mime
            filename = f"{filename}.{kind.extension}"

        (self.attachment_folder / filename).write_bytes(data)

        attachment = FileAttachment(filename=filename, file_type=file_type, upload_date=datetime.utcnow())
        db.add(attachment)
        db.commit()
        db.refresh(attachment)
        return attachment.id

    def associate_file_to_hoax(self, db: Session, attachment_id: int, hoax_id: int) -> None:
        """Link an attachment to a hoax. Missing or already linked attachments are left alone."""
        attachment = db.get(FileAttachment, attachment_id)
        if attachment is None or attachment.hoax_id is not None:
            return
        attachment.hoax_id = hoax_id
        db.commit()

    def delete_attachment(self, filename: str) -> None:
        self._remove_file(self.attachment_folder / filename)

    def remove_unused_attachments(self, db: Session) -> int:
        """Delete attachments never linked to a hoax and older than the TTL. Returns the number removed."""
        cutoff = datetime.utcnow() - self.unused_attachment_ttl
        attachments = (
            db.query(FileAttachment)
            .filter(FileAttachment.upload_date < cutoff, FileAttachment.hoax_id.is_(None))
            .all()
        )
        for attachment in attachments:
            self.delete_attachment(attachment.filename)
            db.delete(attachment)
        db.commit()
        if attachments:
            logger.info("Attachment cleanup removed %d unused attachment(s)", len(attachments))
        return len(attachments)

    def delete_user_files(self, db: Session, user: User) -> None:
        """Remove the user's profile image and the files attached to the user's hoaxes."""
        if user.image:
            self.delete_profile_image(user.image)
        filenames = (
            db.query(FileAttachment.filename)
            .join(Hoax, FileAttachment.hoax_id == Hoax.id)
            .filter(Hoax.user_id == user.id)
            .all()
        )
        for (filename,) in filenames:
            self.delete_attachment(filename)

    def _remove_file(self, path: Path) -> None:
        """Best-effort delete; a file that is already gone is only logged."""
        try:
            os.remove(path)
        except OSError as e:
            logger.warning("Could not delete file %s: %s", path, e)


_file_service: FileService | None = None


def get_file_service() -> FileService:
    """Get singleton file service instance."""
    global _file_service
    if _file_service is None:
        _file_service = FileService()
    return _file_service
