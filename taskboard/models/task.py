from sqlalchemy import Column, Integer, String, ForeignKey, Text, DateTime, CheckConstraint, func
from sqlalchemy.orm import relationship
from taskboard.database import Base

PRIORITIES = ("Low", "Medium", "High")
STATUSES = ("Backlog", "In Progress", "Review", "Done")


def _in(column, values):
    quoted = ", ".join(f"'{v}'" for v in values)
    return f"{column} IN ({quoted})"


class Task(Base):
    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True)
    title = Column(Text, nullable=False)
    description = Column(Text, nullable=False, default="", server_default="")
    priority = Column(String(16), nullable=False, default="Medium")
    assignee_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    status = Column(String(16), nullable=False, default="Backlog", server_default="Backlog")
    due_date = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now()
    )

    comments = relationship(
        "Comment", order_by="Comment.id", passive_deletes=True, cascade="all, delete-orphan"
    )

    __table_args__ = (
        CheckConstraint(_in("priority", PRIORITIES), name="ck_tasks_priority"),
        CheckConstraint(_in("status", STATUSES), name="ck_tasks_status"),
    )
