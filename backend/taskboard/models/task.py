import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, DateTime, Text
from sqlalchemy.sql import func
from taskboard.core.database import Base


def _new_id() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Task(Base):
    __tablename__ = "tasks"

    id = Column(String(36), primary_key=True, default=_new_id)
    title = Column(Text, nullable=False)
    description = Column(Text, nullable=False)
    status = Column(String(20), nullable=False, default="pending")  # pending, in-progress, completed
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        index=True,
        default=_utcnow,
        server_default=func.now(),
    )
