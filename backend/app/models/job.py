from sqlalchemy import Boolean, Column, DateTime, Integer, String, false
from sqlalchemy.sql import func
from app.db import Base


class Job(Base):
    __tablename__ = "jobs"

    id = Column(Integer, primary_key=True, index=True)

    title = Column(String, nullable=False)
    company = Column(String, nullable=True)
    link = Column(String, nullable=True)
    notes = Column(String, nullable=True)

    # Defaults to the moment the application is recorded
    applied_date = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    responded = Column(Boolean, nullable=False, default=False, server_default=false())
    follow_up_sent = Column(Boolean, nullable=False, default=False, server_default=false())
    rejected = Column(Boolean, nullable=False, default=False, server_default=false())

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
