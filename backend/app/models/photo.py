from sqlalchemy import Column, DateTime, LargeBinary, String
from sqlalchemy.sql import func
from app.db import Base


class PhotoBlob(Base):
    __tablename__ = "feature_photos"

    # Always "photo": only one stored photo ever exists
    id = Column(String(16), primary_key=True)

    data = Column(LargeBinary, nullable=False)
    content_type = Column(String, nullable=False, default="application/octet-stream")

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
