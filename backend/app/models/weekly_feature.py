from sqlalchemy import JSON, Column, DateTime, Integer, String, UniqueConstraint
from sqlalchemy.sql import func
from app.db import Base


class WeeklyFeature(Base):
    __tablename__ = "weekly_features"
    # At most one document per kind per ISO week; concurrent creators collide here
    __table_args__ = (UniqueConstraint("kind", "week", name="uq_weekly_features_kind_week"),)

    id = Column(Integer, primary_key=True, index=True)

    kind = Column(String(20), nullable=False, index=True)
    week = Column(String(8), nullable=False)  # e.g. "2025-W33"

    # Opaque user data (song, recipe, watch link, ...)
    payload = Column(JSON, nullable=False, default=dict)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
