from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class GoalBase(BaseModel):
    title: str = Field(min_length=1)
    due_date: Optional[date] = None
    completed: bool = False
    target: Optional[float] = Field(None, ge=0)

    model_config = ConfigDict(str_strip_whitespace=True)


class GoalCreate(GoalBase):
    """Schema for creating a new goal."""
    pass


class GoalUpdate(BaseModel):
    """Schema for updating an existing goal (all fields optional)."""

    title: Optional[str] = Field(None, min_length=1)
    due_date: Optional[date] = None
    completed: Optional[bool] = None
    target: Optional[float] = Field(None, ge=0)

    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")


class GoalRead(GoalBase):
    id: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
