"""Hoax service for posting, listing and deleting hoaxes."""

import math
import time

from sqlalchemy.orm import Session

from hoaxify.exceptions import ForbiddenException, NotFoundException
from hoaxify.models.file_attachment import FileAttachment
from hoaxify.models.hoax import Hoax
from hoaxify.models.user import User
from hoaxify.services.file import get_file_service
from hoaxify.services.user import user_summary


class HoaxService:
    """Handles hoax CRUD."""

    def save_hoax(self, db: Session, content: str, user_id: int, file_attachment_id: int | None = None) -> Hoax:
        """Store a hoax and claim the given attachment, if it exists and is still free."""
        hoax = Hoax(content=content, timestamp=int(time.time() * 1000), user_id=user_id)
        db.add(hoax)
        db.commit()
        db.refresh(hoax)

        if file_attachment_id is not None:
            get_file_service().associate_file_to_hoax(db, file_attachment_id, hoax.id)
        return hoax

    def get_hoaxes(self, db: Session, page: int, size: int, user_id: int | None = None) -> dict:
        """Page through hoaxes newest first, optionally only one user's."""
        query = (
            db.query(Hoax, User, FileAttachment)
            .join(User, Hoax.user_id == User.id)
            .outerjoin(FileAttachment, FileAttachment.hoax_id == Hoax.id)
        )
        if user_id is not None:
            if db.get(User, user_id) is None:
                raise NotFoundException("user_not_found")
            query = query.filter(Hoax.user_id == user_id)

        total = query.count()
        rows = query.order_by(Hoax.id.desc()).offset(page * size).limit(size).all()

        content = []
        for hoax, user, attachment in rows:
            item = {
                "id": hoax.id,
                "content": hoax.content,
                "timestamp": hoax.timestamp,
                "user": user_summary(user),
            }
            if attachment is not None:
                item["fileAttachment"] = {"filename": attachment.filename, "fileType": attachment.file_type}
            content.append(item)

        return {
            "content": content,
            "page": page,
            "size": size,
            "totalPages": math.ceil(total / size),
        }

    def delete_hoax(self, db: Session, hoax_id: int, requester_id: int) -> None:
        """Delete a hoax owned by the requester together with its attachment."""
        hoax = db.query(Hoax).filter(Hoax.id == hoax_id, Hoax.user_id == requester_id).first()
        if not hoax:
            raise ForbiddenException("unauthorized_hoax_delete")

        attachment = db.query(FileAttachment).filter(FileAttachment.hoax_id == hoax.id).first()
        if attachment is not None:
            get_file_service().delete_attachment(attachment.filename)
            db.delete(attachment)
            db.flush()
        db.delete(hoax)
        db.commit()


_hoax_service: HoaxService | None = None


def get_hoax_service() -> HoaxService:
    """Get singleton hoax service instance."""
    global _hoax_service
    if _hoax_service is None:
        _hoax_service = HoaxService()
    return _hoax_service
