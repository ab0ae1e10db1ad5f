from typing import List

import structlog
from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.exc import SQLAlchemyError

from taskboard.schemas.task import ErrorResponse, TaskCreate, TaskResponse, TaskUpdate
from taskboard.store.task_store import TaskStore, get_task_store

log = structlog.get_logger()

router = APIRouter(
    prefix="/api/tasks",
    tags=["tasks"],
    responses={
        404: {"model": ErrorResponse, "description": "Not found"},
        500: {"model": ErrorResponse, "description": "Store error"},
    },
)


def task_not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")


def store_failure(message: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=message)


@router.get("", response_model=List[TaskResponse])
async def list_tasks(store: TaskStore = Depends(get_task_store)):
    try:
        return await store.list_tasks()
    except SQLAlchemyError:
        log.exception("list_tasks_failed")
        raise store_failure("Failed to fetch tasks")


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(task_id: str, store: TaskStore = Depends(get_task_store)):
    try:
        task = await store.get_task(task_id)
    except SQLAlchemyError:
        log.exception("get_task_failed", task_id=task_id)
        raise store_failure("Failed to fetch task")
    if task is None:
        raise task_not_found()
    return task


@router.post(
    "",
    response_model=TaskResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse, "description": "Invalid task data"}},
)
async def create_task(task_in: TaskCreate, store: TaskStore = Depends(get_task_store)):
    try:
        task = await store.create_task(task_in)
    except SQLAlchemyError:
        log.exception("create_task_failed")
        raise store_failure("Failed to create task")
    log.info("task_created", task_id=task.id)
    return task


@router.put(
    "/{task_id}",
    response_model=TaskResponse,
    responses={400: {"model": ErrorResponse, "description": "Invalid task data"}},
)
async def update_task(
    task_id: str,
    task_in: TaskUpdate,
    store: TaskStore = Depends(get_task_store),
):
    try:
        task = await store.update_task(task_id, task_in)
    except SQLAlchemyError:
        log.exception("update_task_failed", task_id=task_id)
        raise store_failure("Failed to update task")
    if task is None:
        raise task_not_found()
    return task


@router.delete(
    "/{task_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def delete_task(task_id: str, store: TaskStore = Depends(get_task_store)):
    try:
        deleted = await store.delete_task(task_id)
    except SQLAlchemyError:
        log.exception("delete_task_failed", task_id=task_id)
        raise store_failure("Failed to delete task")
    if not deleted:
        raise task_not_found()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
