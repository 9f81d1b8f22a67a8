from taskboard.models.user import User
from taskboard.models.task import Task, PRIORITIES, STATUSES
from taskboard.models.comment import Comment

__all__ = ["User", "Task", "Comment", "PRIORITIES", "STATUSES"]
