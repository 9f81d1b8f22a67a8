from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from taskboard.badge import as_utc


class CommentCreate(BaseModel):
    body: Optional[str] = None


class CommentOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    task_id: int
    author_id: int
    body: str
    created_at: datetime

    @field_validator("created_at")
    @classmethod
    def utc(cls, v):
        return as_utc(v)


class CommentEnvelope(BaseModel):
    comment: CommentOut
