from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class EventBase(BaseModel):
    title: str = Field(min_length=1)
    start: datetime
    end: Optional[datetime] = None
    description: Optional[str] = None
    all_day: bool = False


class EventCreate(EventBase):
    """Schema for creating a new calendar event."""
    pass


class EventUpdate(BaseModel):
    """Schema for updating an existing event (all fields optional)."""

    title: Optional[str] = Field(None, min_length=1)
    start: Optional[datetime] = None
    end: Optional[datetime] = None
    description: Optional[str] = None
    all_day: Optional[bool] = None

    # Be lenient with extra fields from clients (id, created_at, ...)
    model_config = ConfigDict(extra="ignore")


class EventRead(EventBase):
    """Schema returned to the client when reading an event."""

    id: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
