"""SQLAlchemy ORM models for the custom icon store."""
from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .database import Base


class Icon(Base):
    __tablename__ = "icons"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # The unique index is the authoritative guard against duplicate slugs.
    slug: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    type: Mapped[str] = mapped_column(String(64), nullable=False)
    data: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), index=True
    )


__all__ = ["Icon"]
