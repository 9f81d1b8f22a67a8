from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from taskboard.badge import as_utc, compute_badge
from taskboard.schemas.comment import CommentOut


class TaskCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: Optional[str] = None
    description: Optional[str] = None
    priority: Optional[str] = None
    assignee_id: Optional[int] = Field(None, alias="assigneeId")
    due_date: Optional[datetime] = Field(None, alias="dueDate")


class TaskUpdate(BaseModel):
    """Partial update.

    A field counts as supplied only when it appears in the request body, so an explicit
    ``null`` (clear the value) is distinguishable from an absent field (leave unchanged).
    See :meth:`supplied`.
    """
    model_config = ConfigDict(populate_by_name=True)

    title: Optional[str] = None
    description: Optional[str] = None
    priority: Optional[str] = None
    assignee_id: Optional[int] = Field(None, alias="assigneeId")
    status: Optional[str] = None
    due_date: Optional[datetime] = Field(None, alias="dueDate")

    def supplied(self) -> dict:
        return {name: getattr(self, name) for name in self.model_fields_set}


class TaskOut(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    title: str
    description: str = ""
    priority: str
    assignee_id: Optional[int] = None
    status: str
    due_date: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime
    status_badge: str = Field(alias="statusBadge")

    @field_validator("due_date", "created_at", "updated_at")
    @classmethod
    def utc(cls, v):
        return as_utc(v)

    @classmethod
    def from_task(cls, task, now: Optional[datetime] = None) -> "TaskOut":
        return cls(
            id=task.id,
            title=task.title,
            description=task.description or "",
            priority=task.priority,
            assignee_id=task.assignee_id,
            status=task.status,
            due_date=task.due_date,
            created_at=task.created_at,
            updated_at=task.updated_at,
            status_badge=compute_badge(task.status, task.due_date, now),
        )


class TaskEnvelope(BaseModel):
    task: TaskOut


class TaskList(BaseModel):
    tasks: List[TaskOut]


class TaskDetail(BaseModel):
    task: TaskOut
    comments: List[CommentOut]
