"""Client-side state for the task board.

``TaskBoard`` owns everything the page shows: the cached collection, the
search and status filters, the new-task form, the edit modal and the
transient notifications. Mutations go through ``TaskAPI`` and, when they
succeed, invalidate the cache so the whole collection is fetched again;
the cached list is never patched locally. Handlers report failures as
notifications instead of raising, leaving the cached data as it was.
"""

from dataclasses import dataclass, field
from typing import List, Optional

import structlog

from taskboard.client.api import TaskAPI, TaskAPIError
from taskboard.client.filters import ALL_STATUSES, filter_tasks, task_stats, toggled_status
from taskboard.schemas.task import Task, TaskStats, TaskStatus

log = structlog.get_logger()

MISSING_FIELDS = "Please fill in both title and description."


@dataclass(eq=False)
class Notification:
    title: str
    description: str
    variant: str = "default"

    @property
    def is_error(self) -> bool:
        return self.variant == "destructive"


@dataclass
class TaskForm:
    title: str = ""
    description: str = ""
    status: TaskStatus = TaskStatus.pending

    def is_complete(self) -> bool:
        return bool(self.title.strip() and self.description.strip())

    def reset(self) -> None:
        self.title = ""
        self.description = ""
        self.status = TaskStatus.pending


@dataclass
class EditTaskModal(TaskForm):
    task_id: str = ""
    is_submitting: bool = False

    @classmethod
    def for_task(cls, task: Task) -> "EditTaskModal":
        return cls(
            title=task.title,
            description=task.description,
            status=task.status,
            task_id=task.id,
        )


@dataclass
class TaskBoard:
    api: TaskAPI
    tasks: List[Task] = field(default_factory=list)
    is_loading: bool = False
    is_stale: bool = True
    search_text: str = ""
    status_filter: str = ALL_STATUSES
    form: TaskForm = field(default_factory=TaskForm)
    is_submitting: bool = False
    editing: Optional[EditTaskModal] = None
    notifications: List[Notification] = field(default_factory=list)

    @property
    def visible_tasks(self) -> List[Task]:
        return filter_tasks(self.tasks, self.search_text, self.status_filter)

    @property
    def stats(self) -> TaskStats:
        return task_stats(self.tasks)

    def notify(self, title: str, description: str, variant: str = "default") -> Notification:
        notification = Notification(title, description, variant)
        self.notifications.append(notification)
        return notification

    def notify_error(self, description: str) -> Notification:
        return self.notify("Error", description, variant="destructive")

    def dismiss(self, notification: Notification) -> None:
        if notification in self.notifications:
            self.notifications.remove(notification)

    async def refresh(self) -> None:
        self.is_loading = True
        try:
            self.tasks = await self.api.list_tasks()
            self.is_stale = False
        except TaskAPIError as e:
            log.warning("task_refresh_failed", error=e.message, status_code=e.status_code)
            self.notify_error("Failed to load tasks. Please try again.")
        finally:
            self.is_loading = False

    async def invalidate(self) -> None:
        self.is_stale = True
        await self.refresh()

    async def submit_new_task(self) -> bool:
        if self.is_submitting:
            return False
        if not self.form.is_complete():
            self.notify_error(MISSING_FIELDS)
            return False

        self.is_submitting = True
        try:
            await self.api.create_task(
                title=self.form.title.strip(),
                description=self.form.description.strip(),
                status=self.form.status,
            )
        except TaskAPIError as e:
            log.warning("task_create_failed", error=e.message, errors=e.errors)
            self.notify_error("Failed to create task. Please try again.")
            return False
        finally:
            self.is_submitting = False

        self.form.reset()
        await self.invalidate()
        self.notify("Success", "Task created successfully!")
        return True

    async def toggle_task(self, task: Task) -> bool:
        try:
            await self.api.update_task(task.id, status=toggled_status(task.status))
        except TaskAPIError as e:
            log.warning("task_toggle_failed", task_id=task.id, error=e.message)
            self.notify_error("Failed to update task status. Please try again.")
            return False
        await self.invalidate()
        return True

    async def delete_task(self, task_id: str) -> bool:
        try:
            await self.api.delete_task(task_id)
        except TaskAPIError as e:
            log.warning("task_delete_failed", task_id=task_id, error=e.message)
            self.notify_error("Failed to delete task. Please try again.")
            return False
        await self.invalidate()
        self.notify("Success", "Task deleted successfully!")
        return True

    def open_editor(self, task: Task) -> EditTaskModal:
        self.editing = EditTaskModal.for_task(task)
        return self.editing

    def close_editor(self) -> None:
        self.editing = None

    async def submit_edit(self) -> bool:
        modal = self.editing
        if modal is None or modal.is_submitting:
            return False
        if not modal.is_complete():
            self.notify_error(MISSING_FIELDS)
            return False

        modal.is_submitting = True
        try:
            await self.api.update_task(
                modal.task_id,
                title=modal.title.strip(),
                description=modal.description.strip(),
                status=modal.status,
            )
        except TaskAPIError as e:
            log.warning("task_update_failed", task_id=modal.task_id, error=e.message)
            self.notify_error("Failed to update task. Please try again.")
            return False
        finally:
            modal.is_submitting = False

        self.close_editor()
        await self.invalidate()
        self.notify("Success", "Task updated successfully!")
        return True
