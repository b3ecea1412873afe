from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class JobBase(BaseModel):
    title: str = Field(min_length=1)
    company: Optional[str] = None
    link: Optional[str] = None
    notes: Optional[str] = None
    responded: bool = False
    follow_up_sent: bool = False
    rejected: bool = False


class JobCreate(JobBase):
    """Schema for recording a job application.

    `applied_date` is optional; the server stamps the creation time when the
    client leaves it out.
    """

    applied_date: Optional[datetime] = None


class JobUpdate(BaseModel):
    """Schema for updating an existing application (all fields optional)."""

    title: Optional[str] = Field(None, min_length=1)
    company: Optional[str] = None
    link: Optional[str] = None
    notes: Optional[str] = None
    applied_date: Optional[datetime] = None
    responded: Optional[bool] = None
    follow_up_sent: Optional[bool] = None
    rejected: Optional[bool] = None

    model_config = ConfigDict(extra="ignore")


class JobRead(JobBase):
    id: int
    applied_date: datetime
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
