import pytest
from unittest.mock import AsyncMock, patch
from fastapi import HTTPException, WebSocketDisconnect, status
from fastapi.testclient import TestClient

from src.main import app
from src.api.v1.tasks import create_task, update_task, delete_task
from src.api.v1.drag import drag_start, drag_over, drag_end
from src.schemas.drag import DragStartEvent, DragOverEvent, DragEndEvent, DragTarget
from src.schemas.task import TaskUpdate
from src.models.drag import DragKind
from src.services.board_service import BoardService
from src.services.websocket_service import manager


class TestTaskEndpoints:
    """Тесты эндпоинтов задач"""

    def setup_method(self):
        self.board = BoardService.create_default()

    @pytest.mark.asyncio
    async def test_create_task(self):
        with patch('src.api.v1.tasks.notify_board_updated', new_callable=AsyncMock) as mock_notify:
            result = await create_task("done", board=self.board)

        assert result.column_id == "done"
        assert result.content == "New Task 5"
        assert self.board.store.tasks[-1].id == result.id
        mock_notify.assert_called_once_with(self.board)

    @pytest.mark.asyncio
    async def test_create_task_unknown_column(self):
        with patch('src.api.v1.tasks.notify_board_updated', new_callable=AsyncMock) as mock_notify:
            with pytest.raises(HTTPException) as exc_info:
                await create_task("archive", board=self.board)

        assert exc_info.value.status_code == status.HTTP_404_NOT_FOUND
        assert "Column not found" in str(exc_info.value.detail)
        mock_notify.assert_not_called()

    @pytest.mark.asyncio
    async def test_update_task(self):
        with patch('src.api.v1.tasks.notify_board_updated', new_callable=AsyncMock):
            result = await update_task("1", TaskUpdate(content="Plan v2"), board=self.board)

        assert result.content == "Plan v2"
        assert self.board.store.get("1").content == "Plan v2"

    @pytest.mark.asyncio
    async def test_update_missing_task(self):
        with patch('src.api.v1.tasks.notify_board_updated', new_callable=AsyncMock):
            with pytest.raises(HTTPException) as exc_info:
                await update_task("missing", TaskUpdate(content="x"), board=self.board)

        assert exc_info.value.status_code == status.HTTP_404_NOT_FOUND

    @pytest.mark.asyncio
    async def test_delete_missing_task_keeps_board(self):
        before = [(t.id, t.column_id, t.content) for t in self.board.store.tasks]

        with patch('src.api.v1.tasks.notify_board_updated', new_callable=AsyncMock) as mock_notify:
            with pytest.raises(HTTPException) as exc_info:
                await delete_task("missing", board=self.board)

        assert exc_info.value.status_code == status.HTTP_404_NOT_FOUND
        assert [(t.id, t.column_id, t.content) for t in self.board.store.tasks] == before
        mock_notify.assert_not_called()


class TestDragEndpoints:
    """Тесты эндпоинтов перетаскивания"""

    def setup_method(self):
        self.board = BoardService.create_default()

    @pytest.mark.asyncio
    async def test_drag_flow(self):
        with patch('src.api.v1.drag.notify_board_updated', new_callable=AsyncMock) as mock_notify:
            started = await drag_start(DragStartEvent(active_id="1"), board=self.board)
            assert started.active_task.id == "1"

            hovered = await drag_over(
                DragOverEvent(active_id="1", over=DragTarget(kind=DragKind.TASK, id="3")),
                board=self.board,
            )
            doing = next(col for col in hovered.columns if col.id == "doing")
            assert [t.id for t in doing.tasks] == ["1", "3"]

            dropped = await drag_end(
                DragEndEvent(active_id="1", over=DragTarget(kind=DragKind.TASK, id="3")),
                board=self.board,
            )

        doing = next(col for col in dropped.columns if col.id == "doing")
        assert [t.id for t in doing.tasks] == ["3", "1"]
        assert dropped.active_task is None
        assert mock_notify.call_count == 3

    @pytest.mark.asyncio
    async def test_column_drag_start_is_ignored(self):
        with patch('src.api.v1.drag.notify_board_updated', new_callable=AsyncMock) as mock_notify:
            result = await drag_start(
                DragStartEvent(active_id="todo", active_kind=DragKind.COLUMN),
                board=self.board,
            )

        assert result.active_task is None
        mock_notify.assert_not_called()

    @pytest.mark.asyncio
    async def test_noop_over_does_not_notify(self):
        with patch('src.api.v1.drag.notify_board_updated', new_callable=AsyncMock) as mock_notify:
            await drag_over(
                DragOverEvent(active_id="1", over=DragTarget(kind=DragKind.TASK, id="1")),
                board=self.board,
            )

        mock_notify.assert_not_called()


class TestHttpApi:
    """Интеграционные тесты HTTP API"""

    def test_health_check(self):
        with TestClient(app) as client:
            response = client.get("/")
        assert response.status_code == 200
        assert "is running" in response.json()["message"]

    def test_board_and_tasks(self):
        with TestClient(app) as client:
            board = client.get("/api/v1/board").json()
            columns = client.get("/api/v1/columns").json()["columns"]
            tasks = client.get("/api/v1/tasks").json()["tasks"]

        assert [col["id"] for col in board["columns"]] == ["todo", "doing", "done"]
        assert board["columns"][0]["task_count"] == 2
        assert board["active_task"] is None
        assert columns[1] == {"id": "doing", "title": "In Progress", "draggable": False}
        assert [t["id"] for t in tasks] == ["1", "2", "3", "4"]

    def test_task_crud(self):
        with TestClient(app) as client:
            created = client.post("/api/v1/columns/todo/tasks")
            assert created.status_code == 201
            task_id = created.json()["id"]

            updated = client.put(f"/api/v1/tasks/{task_id}", json={"content": "Write docs"})
            assert updated.json()["content"] == "Write docs"

            assert client.delete(f"/api/v1/tasks/{task_id}").status_code == 204
            assert client.delete(f"/api/v1/tasks/{task_id}").status_code == 404
            assert client.post("/api/v1/columns/archive/tasks").status_code == 404

    def test_invalid_drag_payload(self):
        with TestClient(app) as client:
            response = client.post("/api/v1/drag/over", json={"active_id": "1", "over": {"kind": "Lane", "id": "x"}})
        assert response.status_code == 422

    def test_drag_over_column_then_drop(self):
        with TestClient(app) as client:
            client.post("/api/v1/drag/start", json={"active_id": "2", "active_kind": "Task"})
            client.post(
                "/api/v1/drag/over",
                json={"active_id": "2", "active_kind": "Task", "over": {"kind": "Column", "id": "done"}},
            )
            board = client.post(
                "/api/v1/drag/end",
                json={"active_id": "2", "over": {"kind": "Column", "id": "done"}},
            ).json()
            tasks = client.get("/api/v1/tasks").json()["tasks"]

        done = next(col for col in board["columns"] if col["id"] == "done")
        assert [t["id"] for t in done["tasks"]] == ["4", "2"]
        assert [t["id"] for t in tasks] == ["1", "3", "4", "2"]
        assert board["active_task"] is None


class TestWebSocketApi:
    """Интеграционные тесты WebSocket"""

    def test_connect_receives_board(self):
        with TestClient(app) as client:
            with client.websocket_connect("/api/v1/ws/board") as websocket:
                message = websocket.receive_json()

        assert message["event"] == "board_updated"
        assert [col["id"] for col in message["data"]["columns"]] == ["todo", "doing", "done"]

    def test_ping(self):
        with TestClient(app) as client:
            with client.websocket_connect("/api/v1/ws/board") as websocket:
                websocket.receive_json()
                websocket.send_json({"command": "ping", "data": {}})
                assert websocket.receive_json()["event"] == "pong"

    def test_drag_commands(self):
        with TestClient(app) as client:
            with client.websocket_connect("/api/v1/ws/board") as websocket:
                websocket.receive_json()

                websocket.send_json({"command": "drag_start", "data": {"active_id": "1", "active_kind": "Task"}})
                started = websocket.receive_json()
                assert started["data"]["active_task"]["id"] == "1"

                websocket.send_json({
                    "command": "drag_over",
                    "data": {"active_id": "1", "active_kind": "Task", "over": {"kind": "Task", "id": "3"}},
                })
                hovered = websocket.receive_json()
                assert [t["id"] for t in hovered["data"]["columns"][1]["tasks"]] == ["1", "3"]

                websocket.send_json({"command": "drag_end", "data": {"active_id": "1", "over": None}})
                dropped = websocket.receive_json()

        assert dropped["event"] == "board_updated"
        assert dropped["data"]["active_task"] is None
        assert [t["id"] for t in dropped["data"]["columns"][1]["tasks"]] == ["1", "3"]

    def test_task_commands(self):
        with TestClient(app) as client:
            with client.websocket_connect("/api/v1/ws/board") as websocket:
                websocket.receive_json()

                websocket.send_json({"command": "create_task", "data": {"column_id": "done"}})
                created = websocket.receive_json()
                done = created["data"]["columns"][2]
                assert done["task_count"] == 2
                new_id = done["tasks"][-1]["id"]

                websocket.send_json({"command": "update_task", "data": {"task_id": new_id, "content": "Ship it"}})
                updated = websocket.receive_json()
                assert updated["data"]["columns"][2]["tasks"][-1]["content"] == "Ship it"

                websocket.send_json({"command": "delete_task", "data": {"task_id": new_id}})
                deleted = websocket.receive_json()
                assert deleted["data"]["columns"][2]["task_count"] == 1

    def test_errors(self):
        with TestClient(app) as client:
            with client.websocket_connect("/api/v1/ws/board") as websocket:
                websocket.receive_json()

                websocket.send_text("not json")
                malformed = websocket.receive_json()

                websocket.send_json({"command": "fly", "data": {}})
                unknown = websocket.receive_json()

                websocket.send_json({"command": "delete_task", "data": {"task_id": "missing"}})
                missing = websocket.receive_json()

                websocket.send_json({"command": "drag_over", "data": {"over": None}})
                invalid = websocket.receive_json()

                websocket.send_json({"command": "update_task", "data": {"task_id": "1", "content": 123}})
                bad_content = websocket.receive_json()

                websocket.send_json({"command": "create_task", "data": {}})
                no_column = websocket.receive_json()

        assert malformed["event"] == "error"
        assert malformed["data"]["message"] == "Invalid message format"
        assert unknown["data"] == {"message": "Unknown command: fly", "code": 400}
        assert missing["data"]["message"] == "Task not found: missing"
        assert invalid["event"] == "error"
        assert invalid["data"]["message"].startswith("Invalid data for drag_over")
        assert bad_content["event"] == "error"
        assert bad_content["data"]["message"].startswith("Invalid data for update_task")
        assert no_column["data"]["message"].startswith("Invalid data for create_task")

    def test_rejected_update_keeps_connection_and_board(self):
        with TestClient(app) as client:
            with client.websocket_connect("/api/v1/ws/board") as websocket:
                websocket.receive_json()

                websocket.send_json({"command": "update_task", "data": {"task_id": "1", "content": 123}})
                assert websocket.receive_json()["event"] == "error"

                websocket.send_json({"command": "ping", "data": {}})
                assert websocket.receive_json()["event"] == "pong"

            response = client.get("/api/v1/board")

        assert response.status_code == 200
        todo = response.json()["columns"][0]
        assert todo["tasks"][0] == {"id": "1", "column_id": "todo", "content": "Create initial project plan"}

    def test_unexpected_error_closes_connection(self):
        with TestClient(app) as client:
            with patch('src.api.v1.websockets.handle_command', side_effect=RuntimeError("boom")):
                with client.websocket_connect("/api/v1/ws/board") as websocket:
                    websocket.receive_json()

                    websocket.send_json({"command": "drag_start", "data": {"active_id": "1"}})
                    failure = websocket.receive_json()

                    with pytest.raises(WebSocketDisconnect) as exc_info:
                        websocket.receive_json()

        assert failure == {"event": "error", "data": {"message": "Error: boom", "code": 500}}
        assert exc_info.value.code == 1011
        assert len(manager.active_connections) == 0
