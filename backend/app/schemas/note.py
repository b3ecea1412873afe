from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.core.constants import NOTE_DEFAULT_COLOR


def clean_section(v):
    """None and "" both mean "no section"; otherwise trimmed."""
    if v is None:
        return ""
    return str(v).strip()


class NoteBase(BaseModel):
    content: str = Field(min_length=1)
    pinned: bool = False
    section: str = ""
    color: str = NOTE_DEFAULT_COLOR

    @field_validator("section", mode="before")
    @classmethod
    def _trim_section(cls, v):
        return clean_section(v)


class NoteCreate(NoteBase):
    """Schema for creating a sticky note."""
    pass


class NoteUpdate(BaseModel):
    """Schema for updating a note (all fields optional)."""

    content: Optional[str] = Field(None, min_length=1)
    pinned: Optional[bool] = None
    section: Optional[str] = None
    color: Optional[str] = None

    model_config = ConfigDict(extra="ignore")

    @field_validator("section", mode="before")
    @classmethod
    def _trim_section(cls, v):
        return clean_section(v)


class NoteRead(NoteBase):
    id: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
