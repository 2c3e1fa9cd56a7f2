"""
SQLAlchemy ORM models for persistent storage.

Only user preferences are persisted; printings live in memory for the
current session.
"""

from datetime import datetime

from sqlalchemy import DateTime, Integer, String, Text, UniqueConstraint, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class PreferenceDB(Base):
    """
    A single persisted preference value.

    Values are opaque strings; callers encode structured values as JSON.
    The namespace separates preferences of different sessions/users.
    """

    __tablename__ = "preferences"
    __table_args__ = (UniqueConstraint("namespace", "key", name="uq_preference_namespace_key"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    namespace: Mapped[str] = mapped_column(String(255), index=True, default="")
    key: Mapped[str] = mapped_column(String(255))
    value: Mapped[str] = mapped_column(Text)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self) -> str:
        return f"<PreferenceDB(namespace={self.namespace}, key={self.key})>"
