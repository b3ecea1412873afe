from sqlalchemy import Boolean, Column, DateTime, Integer, String, Text, false
from sqlalchemy.sql import func
from app.core.constants import NOTE_DEFAULT_COLOR
from app.db import Base


class Note(Base):
    __tablename__ = "notes"

    id = Column(Integer, primary_key=True, index=True)

    content = Column(Text, nullable=False)
    pinned = Column(Boolean, nullable=False, default=False, server_default=false())

    # Free-text grouping tag, "" when the note has none
    section = Column(String, nullable=False, default="", server_default="")
    color = Column(String(16), nullable=False, default=NOTE_DEFAULT_COLOR, server_default=NOTE_DEFAULT_COLOR)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
