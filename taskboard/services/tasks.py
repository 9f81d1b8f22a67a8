"""Task persistence and queries.

Every call reads or writes through the session it is given; nothing is cached here.
Validation always completes before the first write so a rejected request leaves no trace.
"""
import logging
from datetime import datetime
from typing import Optional

from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session

from taskboard.badge import as_utc
from taskboard.database import in_id_range
from taskboard.errors import InvalidInput, NotFound
from taskboard.models.comment import Comment
from taskboard.models.task import Task, PRIORITIES, STATUSES
from taskboard.schemas.comment import CommentOut
from taskboard.schemas.task import TaskCreate, TaskDetail, TaskOut, TaskUpdate
from taskboard.services.users import user_exists

logger = logging.getLogger(__name__)

# Request field -> column. Only these columns can ever be written by an update.
UPDATABLE_COLUMNS = {
    "title": Task.title,
    "description": Task.description,
    "priority": Task.priority,
    "assignee_id": Task.assignee_id,
    "status": Task.status,
    "due_date": Task.due_date,
}


def _clean_title(title: Optional[str]) -> str:
    if title is None or not title.strip():
        raise InvalidInput("title required")
    return title.strip()


def _check_priority(priority):
    if priority not in PRIORITIES:
        raise InvalidInput("invalid priority")


def _check_status(status):
    if status not in STATUSES:
        raise InvalidInput("invalid status")


def _check_assignee(db: Session, assignee_id: Optional[int]):
    if assignee_id is not None and not user_exists(db, assignee_id):
        raise InvalidInput("assignee not found")


def _load(db: Session, task_id: int) -> Task:
    task = db.get(Task, task_id) if in_id_range(task_id) else None
    if task is None:
        raise NotFound("task not found")
    return task


def list_tasks(
    db: Session,
    assignee_id: Optional[int] = None,
    priority: Optional[str] = None,
    now: Optional[datetime] = None,
):
    query = select(Task)
    if assignee_id is not None:
        if not in_id_range(assignee_id):
            return []
        query = query.where(Task.assignee_id == assignee_id)
    if priority is not None:
        query = query.where(Task.priority == priority)
    rows = db.execute(query.order_by(Task.id.desc())).scalars().all()
    return [TaskOut.from_task(t, now) for t in rows]


def get_task(db: Session, task_id: int, now: Optional[datetime] = None) -> TaskDetail:
    task = _load(db, task_id)
    comments = db.execute(
        select(Comment).where(Comment.task_id == task_id).order_by(Comment.id.asc())
    ).scalars().all()
    return TaskDetail(
        task=TaskOut.from_task(task, now),
        comments=[CommentOut.model_validate(c) for c in comments],
    )


def create_task(db: Session, data: TaskCreate, now: Optional[datetime] = None) -> TaskOut:
    title = _clean_title(data.title)
    priority = data.priority if data.priority is not None else "Medium"
    _check_priority(priority)
    _check_assignee(db, data.assignee_id)

    task = Task(
        title=title,
        description=data.description or "",
        priority=priority,
        assignee_id=data.assignee_id,
        status="Backlog",
        due_date=as_utc(data.due_date),
    )
    db.add(task)
    db.commit()
    db.refresh(task)
    logger.info("task %s created", task.id)
    return TaskOut.from_task(task, now)


def update_task(db: Session, task_id: int, changes: TaskUpdate, now: Optional[datetime] = None) -> TaskOut:
    fields = changes.supplied()
    if not fields:
        raise InvalidInput("no changes provided")

    if "title" in fields:
        fields["title"] = _clean_title(fields["title"])
    if "description" in fields and fields["description"] is None:
        fields["description"] = ""
    if "priority" in fields:
        _check_priority(fields["priority"])
    if "assignee_id" in fields:
        _check_assignee(db, fields["assignee_id"])
    if "status" in fields:
        _check_status(fields["status"])
    if "due_date" in fields:
        fields["due_date"] = as_utc(fields["due_date"])

    if not in_id_range(task_id):
        raise NotFound("task not found")
    values = {UPDATABLE_COLUMNS[name]: value for name, value in fields.items()}
    result = db.execute(update(Task).where(Task.id == task_id).values(values))
    if result.rowcount == 0:
        db.rollback()
        raise NotFound("task not found")
    db.commit()
    logger.info("task %s updated (%s)", task_id, ", ".join(sorted(fields)))
    return TaskOut.from_task(_load(db, task_id), now)


def delete_task(db: Session, task_id: int) -> None:
    if not in_id_range(task_id):
        raise NotFound("task not found")
    # comments go with the task through ON DELETE CASCADE
    result = db.execute(delete(Task).where(Task.id == task_id))
    if result.rowcount == 0:
        db.rollback()
        raise NotFound("task not found")
    db.commit()
    logger.info("task %s deleted", task_id)
