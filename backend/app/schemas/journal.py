from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class JournalEntryBase(BaseModel):
    title: Optional[str] = None
    content: str = Field(min_length=1)


class JournalEntryCreate(JournalEntryBase):
    """Schema for writing a journal entry (entry_date defaults to now)."""

    entry_date: Optional[datetime] = None


class JournalEntryUpdate(BaseModel):
    title: Optional[str] = None
    content: Optional[str] = Field(None, min_length=1)
    entry_date: Optional[datetime] = None

    model_config = ConfigDict(extra="ignore")


class JournalEntryRead(JournalEntryBase):
    id: int
    entry_date: datetime
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
