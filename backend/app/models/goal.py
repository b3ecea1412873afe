from sqlalchemy import Boolean, Column, Date, DateTime, Float, Integer, String, false
from sqlalchemy.sql import func
from app.db import Base


class Goal(Base):
    __tablename__ = "goals"

    id = Column(Integer, primary_key=True, index=True)

    title = Column(String, nullable=False)
    due_date = Column(Date, nullable=True)
    completed = Column(Boolean, nullable=False, default=False, server_default=false())

    # Optional numeric target (e.g. pages, sessions); never negative
    target = Column(Float, nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
