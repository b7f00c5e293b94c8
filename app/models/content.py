"""
Content object index tables.

Every CMS object (article pages, authors, author roles, ...) lives in one
table and is told apart by obj_class. Links between objects are stored as
plain (source, target) pairs.
"""
from datetime import datetime
from typing import Optional

from sqlalchemy import String, Text, DateTime, ForeignKey, Index, func
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class ContentObject(Base):
    __tablename__ = "content_objects"

    id: Mapped[str] = mapped_column(String(32), primary_key=True)
    obj_class: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    type_facet: Mapped[Optional[str]] = mapped_column(String(100), index=True)
    display: Mapped[Optional[str]] = mapped_column(String(20))  # "private" hides from search
    permalink: Mapped[Optional[str]] = mapped_column(String(255), index=True)
    search_date: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))

    # Searchable text
    title: Mapped[Optional[str]] = mapped_column(String(255))
    name: Mapped[Optional[str]] = mapped_column(String(255))
    brand_name: Mapped[Optional[str]] = mapped_column(String(255))
    internal_description: Mapped[Optional[str]] = mapped_column(Text)
    description: Mapped[Optional[str]] = mapped_column(Text)
    keywords: Mapped[Optional[str]] = mapped_column(Text)
    subject: Mapped[Optional[str]] = mapped_column(Text)
    body: Mapped[Optional[str]] = mapped_column(Text)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), onupdate=func.now())


class ContentLink(Base):
    """A reference from one content object to another."""
    __tablename__ = "content_links"

    source_id: Mapped[str] = mapped_column(
        String(32), ForeignKey("content_objects.id", ondelete="CASCADE"), primary_key=True
    )
    target_id: Mapped[str] = mapped_column(
        String(32), ForeignKey("content_objects.id", ondelete="CASCADE"), primary_key=True
    )

    __table_args__ = (
        Index('idx_content_links_target', 'target_id'),
    )
