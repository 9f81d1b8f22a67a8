from sqlalchemy import Column, Integer, String, DateTime, Index, func
from taskboard.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    email = Column(String(255), nullable=False)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    # emails are unique regardless of case
    __table_args__ = (Index("uq_users_email_lower", func.lower(email), unique=True),)
