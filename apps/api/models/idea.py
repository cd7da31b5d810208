"""Idea model for scanned competitor pages and their landing pages."""

from sqlalchemy import Column, String, Text, DateTime, JSON
from sqlalchemy.sql import func
import uuid

from database import Base


class Idea(Base):
    """A competitor scan result and, once published, its landing page."""

    __tablename__ = "ideas"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    source_url = Column(String, nullable=False)
    competitor_name = Column(String, nullable=False)
    weaknesses = Column(JSON, nullable=False, default=list)
    published_markup = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    published_at = Column(DateTime(timezone=True), nullable=True)

    @property
    def is_published(self) -> bool:
        return self.published_markup is not None
