"""Database access for the ``tasks`` table.

The store assumes its input already passed schema validation and never
turns a missing row into an exception: lookups return ``None`` and
deletes return ``False`` so the caller decides how to report it.
Driver and connectivity failures surface as ``SQLAlchemyError``.
"""

from typing import List, Optional

from fastapi import Depends
from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from taskboard.core.database import get_db
from taskboard.models.task import Task
from taskboard.schemas.task import TaskCreate, TaskUpdate


class TaskStore:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_tasks(self) -> List[Task]:
        """All tasks, newest first."""
        result = await self.db.execute(select(Task).order_by(Task.created_at.desc()))
        return list(result.scalars().all())

    async def get_task(self, task_id: str) -> Optional[Task]:
        result = await self.db.execute(select(Task).where(Task.id == task_id))
        return result.scalar_one_or_none()

    async def create_task(self, task_in: TaskCreate) -> Task:
        task = Task(
            title=task_in.title,
            description=task_in.description,
            status=task_in.status.value,
        )
        self.db.add(task)
        await self.db.commit()
        await self.db.refresh(task)
        return task

    async def update_task(self, task_id: str, task_in: TaskUpdate) -> Optional[Task]:
        """Apply only the fields present in ``task_in``; ``None`` if the task is gone."""
        task = await self.get_task(task_id)
        if task is None:
            return None

        changes = task_in.changes()
        if not changes:
            return task

        for field, value in changes.items():
            setattr(task, field, value)
        await self.db.commit()
        await self.db.refresh(task)
        return task

    async def delete_task(self, task_id: str) -> bool:
        result = await self.db.execute(delete(Task).where(Task.id == task_id))
        await self.db.commit()
        return result.rowcount > 0


async def get_task_store(db: AsyncSession = Depends(get_db)) -> TaskStore:
    return TaskStore(db)
