from typing import Iterable, List

from taskboard.schemas.task import Task, TaskStats, TaskStatus

ALL_STATUSES = "all"


def matches_search(task: Task, search_text: str) -> bool:
    needle = search_text.lower()
    return needle in task.title.lower() or needle in task.description.lower()


def matches_status(task: Task, status_filter: str) -> bool:
    if status_filter == ALL_STATUSES:
        return True
    return task.status.value == status_filter


def filter_tasks(tasks: Iterable[Task], search_text: str = "", status_filter: str = ALL_STATUSES) -> List[Task]:
    return [
        task
        for task in tasks
        if matches_search(task, search_text) and matches_status(task, status_filter)
    ]


def toggled_status(status: TaskStatus) -> TaskStatus:
    # in-progress is never a toggle target
    if status == TaskStatus.completed:
        return TaskStatus.pending
    return TaskStatus.completed


def task_stats(tasks: Iterable[Task]) -> TaskStats:
    stats = TaskStats()
    for task in tasks:
        stats.total_tasks += 1
        if task.status == TaskStatus.pending:
            stats.pending_tasks += 1
        elif task.status == TaskStatus.in_progress:
            stats.in_progress_tasks += 1
        elif task.status == TaskStatus.completed:
            stats.completed_tasks += 1
    return stats
