"""Tests for DeleteProject and DeleteTask"""

import httpx
import pytest

from todoist_tasks import (
    ConfigurationError,
    DeleteProject,
    DeleteTask,
    TodoistApiError,
    TodoistTransportError,
    VoidOutput,
)


class TestDeleteProject:

    @pytest.mark.asyncio
    async def test_deletes_project(self, todoist, context, connection):
        todoist.add("DELETE", "/projects/2203306141", httpx.Response(204))

        output = await DeleteProject(connection=connection, project_id="2203306141").run(context)

        assert output == VoidOutput()
        assert todoist.requests[0].method == "DELETE"
        assert todoist.requests[0].headers["Authorization"] == "Bearer test-token"

    @pytest.mark.asyncio
    async def test_missing_project_id(self, todoist, context, connection):
        with pytest.raises(ConfigurationError, match="projectId"):
            await DeleteProject(connection=connection).run(context)
        assert todoist.call_count == 0

    @pytest.mark.asyncio
    async def test_not_found(self, todoist, context, connection):
        todoist.add("DELETE", "/projects/1", httpx.Response(404, text="Project not found"))

        with pytest.raises(TodoistApiError) as exc_info:
            await DeleteProject(connection=connection, project_id="1").run(context)

        assert exc_info.value.status_code == 404
        assert exc_info.value.body == "Project not found"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [401, 404, 500])
    async def test_api_errors(self, todoist, context, connection, status):
        todoist.add("DELETE", "/projects/1", httpx.Response(status, text="nope"))

        with pytest.raises(TodoistApiError) as exc_info:
            await DeleteProject(connection=connection, project_id="1").run(context)

        assert exc_info.value.status_code == status


class TestDeleteTask:

    @pytest.mark.asyncio
    async def test_deletes_task(self, todoist, context, connection):
        todoist.add("DELETE", "/tasks/7498765432", httpx.Response(204))

        output = await DeleteTask(connection=connection, task_id="7498765432").run(context)

        assert isinstance(output, VoidOutput)
        assert todoist.requests[0].url.path == "/rest/v2/tasks/7498765432"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [401, 403, 404, 500])
    async def test_api_errors(self, todoist, context, connection, status):
        todoist.add("DELETE", "/tasks/1", httpx.Response(status, text="nope"))

        with pytest.raises(TodoistApiError) as exc_info:
            await DeleteTask(connection=connection, task_id="1").run(context)

        assert exc_info.value.status_code == status

    @pytest.mark.asyncio
    async def test_connection_refused(self, todoist, context, connection):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        todoist.add("DELETE", "/tasks/1", refuse)

        with pytest.raises(TodoistTransportError):
            await DeleteTask(connection=connection, task_id="1").run(context)
