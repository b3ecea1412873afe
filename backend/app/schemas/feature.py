from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class FeatureKind(str, Enum):
    recipe = "recipe"
    photo = "photo"
    song = "song"
    watch = "watch"
    read = "read"
    # Weekly targets of the completion card
    completion = "completion"


class FeatureUpsert(BaseModel):
    payload: dict[str, Any] = Field(default_factory=dict)


class FeatureRead(BaseModel):
    id: int
    kind: FeatureKind
    week: str  # ISO week key, e.g. "2025-W33"
    payload: dict[str, Any]
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PhotoUploaded(BaseModel):
    ok: bool
    url: str


class PhotoMeta(BaseModel):
    exists: bool
    updated_at: Optional[datetime] = None
