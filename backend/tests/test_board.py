import httpx
import pytest
import pytest_asyncio

from taskboard.client.api import TaskAPI, TaskAPIError
from taskboard.client.board import MISSING_FIELDS, TaskBoard
from taskboard.schemas.task import TaskStatus


@pytest_asyncio.fixture
async def board(client):
    board = TaskBoard(api=TaskAPI(client))
    await board.refresh()
    return board


def failing_board(status_code=500, message="Failed"):
    """A board whose every request fails, plus the list of requests it saw."""
    seen = []

    def handler(request: httpx.Request):
        seen.append(request)
        return httpx.Response(status_code, json={"message": message})

    client = httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="http://test")
    return TaskBoard(api=TaskAPI(client)), seen


async def add_task(board, title, description="d", status=TaskStatus.pending):
    board.form.title = title
    board.form.description = description
    board.form.status = status
    assert await board.submit_new_task()
    return next(t for t in board.tasks if t.title == title)


class TestCreate:
    async def test_success_resets_form_and_refetches(self, board):
        board.form.title = "  Buy milk "
        board.form.description = "2%"
        board.form.status = TaskStatus.in_progress

        assert await board.submit_new_task() is True

        assert board.form.title == ""
        assert board.form.description == ""
        assert board.form.status == TaskStatus.pending
        assert [t.title for t in board.tasks] == ["Buy milk"]
        assert board.tasks[0].status == TaskStatus.in_progress
        assert board.notifications[-1].description == "Task created successfully!"
        assert board.is_submitting is False

    async def test_blank_fields_never_reach_the_server(self):
        board, seen = failing_board()
        board.form.title = "   "
        board.form.description = "2%"

        assert await board.submit_new_task() is False

        assert seen == []
        assert board.notifications[-1].description == MISSING_FIELDS

    async def test_failure_keeps_form_populated(self):
        board, _ = failing_board()
        board.form.title = "Buy milk"
        board.form.description = "2%"

        assert await board.submit_new_task() is False

        assert board.form.title == "Buy milk"
        assert board.form.description == "2%"
        assert board.notifications[-1].is_error
        assert board.is_submitting is False

    async def test_duplicate_submission_refused(self):
        board, seen = failing_board()
        board.form.title = "Buy milk"
        board.form.description = "2%"
        board.is_submitting = True

        assert await board.submit_new_task() is False
        assert seen == []


class TestToggle:
    async def test_pending_completed_pending(self, board):
        task = await add_task(board, "Buy milk")

        await board.toggle_task(task)
        task = board.tasks[0]
        assert task.status == TaskStatus.completed

        await board.toggle_task(task)
        assert board.tasks[0].status == TaskStatus.pending

    async def test_in_progress_goes_to_completed(self, board):
        task = await add_task(board, "Report", status=TaskStatus.in_progress)
        await board.toggle_task(task)
        assert board.tasks[0].status == TaskStatus.completed


class TestEdit:
    async def test_editor_prefilled_and_closed_on_success(self, board):
        task = await add_task(board, "Buy milk", "2%")

        modal = board.open_editor(task)
        assert (modal.title, modal.description, modal.status) == ("Buy milk", "2%", TaskStatus.pending)

        modal.title = "Buy oat milk"
        modal.status = TaskStatus.in_progress
        assert await board.submit_edit() is True

        assert board.editing is None
        updated = board.tasks[0]
        assert updated.id == task.id
        assert updated.title == "Buy oat milk"
        assert updated.description == "2%"
        assert updated.status == TaskStatus.in_progress

    async def test_editing_deleted_task_keeps_modal_open(self, board, client):
        task = await add_task(board, "Buy milk")
        board.open_editor(task)
        await client.delete(f"/api/tasks/{task.id}")

        assert await board.submit_edit() is False

        assert board.editing is not None
        assert board.notifications[-1].description == "Failed to update task. Please try again."

    async def test_close_editor_discards(self, board):
        task = await add_task(board, "Buy milk")
        board.open_editor(task).title = "changed"
        board.close_editor()

        assert board.editing is None
        assert await board.submit_edit() is False
        assert board.tasks[0].title == "Buy milk"


class TestDelete:
    async def test_delete_refetches(self, board):
        task = await add_task(board, "Buy milk")

        assert await board.delete_task(task.id) is True
        assert board.tasks == []

    async def test_second_delete_reports_error(self, board):
        task = await add_task(board, "Buy milk")
        await board.delete_task(task.id)

        assert await board.delete_task(task.id) is False
        assert board.notifications[-1].is_error


class TestView:
    async def test_visible_tasks_follow_filters(self, board):
        await add_task(board, "Buy milk")
        done = await add_task(board, "Call plumber")
        await board.toggle_task(done)

        board.search_text = "MILK"
        assert [t.title for t in board.visible_tasks] == ["Buy milk"]

        board.search_text = ""
        board.status_filter = "completed"
        assert [t.title for t in board.visible_tasks] == ["Call plumber"]

        board.status_filter = "all"
        assert len(board.visible_tasks) == 2
        assert board.stats.summary == "1 of 2 completed"

    async def test_failed_refresh_keeps_previous_tasks(self, board):
        await add_task(board, "Buy milk")
        cached = list(board.tasks)

        broken, _ = failing_board()
        broken.tasks = cached
        await broken.invalidate()

        assert broken.tasks == cached
        assert broken.is_stale is True
        assert broken.notifications[-1].is_error

    async def test_dismiss(self, board):
        await add_task(board, "Buy milk")
        note = board.notifications[-1]

        board.dismiss(note)

        assert note not in board.notifications


class TestTaskAPI:
    async def test_not_found_error(self, client):
        api = TaskAPI(client)
        with pytest.raises(TaskAPIError) as exc_info:
            await api.get_task("missing")
        assert exc_info.value.is_not_found
        assert exc_info.value.message == "Task not found"

    async def test_validation_errors_exposed(self, client):
        api = TaskAPI(client)
        with pytest.raises(TaskAPIError) as exc_info:
            await api.create_task(title=" ", description="d")
        assert exc_info.value.status_code == 400
        assert exc_info.value.errors[0]["loc"] == ["body", "title"]

    async def test_transport_failure(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="http://test")
        with pytest.raises(TaskAPIError) as exc_info:
            await TaskAPI(client).list_tasks()
        assert exc_info.value.status_code is None
