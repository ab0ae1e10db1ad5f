from pydantic import BaseModel, StringConstraints, field_validator
from typing import Annotated, Any, List, Optional
from datetime import datetime, timezone
from enum import Enum

# Trimmed, and still non-empty after trimming.
NonEmptyText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class TaskStatus(str, Enum):
    pending = "pending"
    in_progress = "in-progress"
    completed = "completed"


class TaskCreate(BaseModel):
    title: NonEmptyText
    description: NonEmptyText
    status: TaskStatus = TaskStatus.pending


class TaskUpdate(BaseModel):
    title: Optional[NonEmptyText] = None
    description: Optional[NonEmptyText] = None
    status: Optional[TaskStatus] = None

    @field_validator("title", "description", "status", mode="before")
    @classmethod
    def reject_null(cls, value):
        # Omitting a field leaves it untouched; sending null is an error.
        if value is None:
            raise ValueError("may not be null")
        return value

    def changes(self) -> dict:
        """Only the fields the caller actually sent, with enum values unwrapped."""
        data = self.model_dump(exclude_unset=True)
        if "status" in data:
            data["status"] = data["status"].value
        return data


class TaskResponse(BaseModel):
    id: str
    title: str
    description: str
    status: TaskStatus
    created_at: datetime

    @field_validator("created_at")
    @classmethod
    def assume_utc(cls, value: datetime) -> datetime:
        # SQLite hands back naive datetimes; every timestamp is written in UTC.
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    class Config:
        from_attributes = True


# The client works with the same shape the API returns.
Task = TaskResponse


class FieldError(BaseModel):
    loc: List[Any]
    msg: str
    type: str


class ErrorResponse(BaseModel):
    message: str
    errors: Optional[List[FieldError]] = None


class TaskStats(BaseModel):
    total_tasks: int = 0
    pending_tasks: int = 0
    in_progress_tasks: int = 0
    completed_tasks: int = 0

    @property
    def summary(self) -> str:
        return f"{self.completed_tasks} of {self.total_tasks} completed"
