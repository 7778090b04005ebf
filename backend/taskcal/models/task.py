from datetime import datetime, timezone

from sqlalchemy import Column, String, DateTime, Boolean
from taskcal.core.database import Base


def utcnow():
    return datetime.now(timezone.utc)


class Task(Base):
    __tablename__ = "tasks"

    id = Column(String, primary_key=True, index=True)
    user_id = Column(String, nullable=False, index=True)
    name = Column(String, nullable=False, default="")
    date = Column(String, nullable=True, index=True)  # YYYY-MM-DD, null = backlog
    bucket_id = Column(String, nullable=True)  # null = unassigned
    complete = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    def __repr__(self):
        return f"<Task id={self.id!r} user_id={self.user_id!r} date={self.date!r} complete={self.complete}>"
