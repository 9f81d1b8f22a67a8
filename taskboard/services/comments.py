import logging
from typing import Optional

from sqlalchemy.orm import Session

from taskboard.database import in_id_range
from taskboard.errors import InvalidInput, NotFound, Unauthorized
from taskboard.models.comment import Comment
from taskboard.models.task import Task
from taskboard.schemas.comment import CommentOut
from taskboard.services.users import user_exists

logger = logging.getLogger(__name__)


def add_comment(db: Session, task_id: int, author_id: int, body: Optional[str]) -> CommentOut:
    body = (body or "").strip()
    if not body:
        raise InvalidInput("comment body required")
    if not in_id_range(task_id) or db.get(Task, task_id) is None:
        raise NotFound("task not found")
    # a token can outlive the account it was issued for
    if not user_exists(db, author_id):
        raise Unauthorized("user no longer exists")

    comment = Comment(task_id=task_id, author_id=author_id, body=body)
    db.add(comment)
    db.commit()
    db.refresh(comment)
    logger.info("comment %s added to task %s by user %s", comment.id, task_id, author_id)
    return CommentOut.model_validate(comment)
