"""Hoax model."""

from sqlalchemy import BigInteger, Column, ForeignKey, Integer, Text

from hoaxify.database import Base


class Hoax(Base):
    """Short text post."""

    __tablename__ = "hoax"

    id = Column(Integer, primary_key=True, autoincrement=True)
    content = Column(Text, nullable=False)
    timestamp = Column(BigInteger, nullable=False)  # epoch millis
    user_id = Column(Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True)
