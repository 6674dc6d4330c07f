"""File attachment model."""

from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String

from hoaxify.database import Base


class FileAttachment(Base):
    """Uploaded file metadata. hoax_id stays null until a hoax claims it."""

    __tablename__ = "file_attachment"

    id = Column(Integer, primary_key=True, autoincrement=True)
    filename = Column(String(256), nullable=False, unique=True)
    file_type = Column(String(128), nullable=True)
    upload_date = Column(DateTime, nullable=False, default=datetime.utcnow, index=True)
    hoax_id = Column(Integer, ForeignKey("hoax.id", ondelete="CASCADE"), nullable=True, index=True)
