from typing import Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from taskboard.database import get_db
from taskboard.schemas.comment import CommentCreate, CommentEnvelope
from taskboard.schemas.task import TaskCreate, TaskDetail, TaskEnvelope, TaskList, TaskUpdate
from taskboard.services import comments as comment_service
from taskboard.services import tasks as task_service
from taskboard.utils.session import Identity, require_user

router = APIRouter(prefix="/tasks", tags=["tasks"], dependencies=[Depends(require_user)])


@router.get("", response_model=TaskList)
def list_tasks(
    assignee_id: Optional[int] = Query(None, alias="assigneeId"),
    priority: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    # empty query values (?priority=) mean "no filter"
    return {"tasks": task_service.list_tasks(db, assignee_id=assignee_id, priority=priority or None)}


@router.get("/{task_id}", response_model=TaskDetail)
def get_task(task_id: int, db: Session = Depends(get_db)):
    return task_service.get_task(db, task_id)


@router.post("", response_model=TaskEnvelope, status_code=201)
def create_task(task: TaskCreate, db: Session = Depends(get_db)):
    return {"task": task_service.create_task(db, task)}


@router.patch("/{task_id}", response_model=TaskEnvelope)
def update_task(task_id: int, changes: TaskUpdate, db: Session = Depends(get_db)):
    return {"task": task_service.update_task(db, task_id, changes)}


@router.delete("/{task_id}", status_code=204)
def delete_task(task_id: int, db: Session = Depends(get_db)):
    task_service.delete_task(db, task_id)
    return Response(status_code=204)


@router.post("/{task_id}/comments", response_model=CommentEnvelope, status_code=201)
def add_comment(
    task_id: int,
    comment: CommentCreate,
    identity: Identity = Depends(require_user),
    db: Session = Depends(get_db),
):
    return {"comment": comment_service.add_comment(db, task_id, identity.user_id, comment.body)}
