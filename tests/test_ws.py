"""WebSocket integration tests using FastAPI TestClient."""

import pytest
from starlette.testclient import TestClient

from tictactoe_server.main import app
from tictactoe_server.session import session_manager


class TestWebSocketIntegration:
    def test_health_endpoint(self):
        with TestClient(app) as client:
            resp = client.get("/health")
            assert resp.status_code == 200
            assert resp.json() == {"status": "ok"}

    def test_websocket_connect(self):
        with TestClient(app) as client:
            with client.websocket_connect("/ws") as ws:
                data = ws.receive_json()
                assert data["type"] == "render"
                assert data["board"] == [None] * 9
                assert data["status"]["kind"] == "next"

    def test_invalid_message(self):
        with TestClient(app) as client:
            with client.websocket_connect("/ws") as ws:
                ws.receive_json()  # initial render
                ws.send_json({"type": "unknown_type"})
                data = ws.receive_json()
                assert data["type"] == "error"

    def test_malformed_play(self):
        with TestClient(app) as client:
            with client.websocket_connect("/ws") as ws:
                ws.receive_json()  # initial render
                ws.send_json({"type": "play", "cell": "center"})
                data = ws.receive_json()
                assert data["type"] == "error"

    @pytest.mark.parametrize("cell", [True, "4", 4.0])
    def test_non_integer_cell_rejected(self, cell):
        with TestClient(app) as client:
            with client.websocket_connect("/ws") as ws:
                ws.receive_json()  # initial render
                ws.send_json({"type": "play", "cell": cell})
                data = ws.receive_json()
                assert data["type"] == "error"

                ws.send_json({"type": "sync"})
                data = ws.receive_json()
                assert data["current_move"] == 0
                assert data["board"] == [None] * 9

    @pytest.mark.parametrize("move", [False, "0", 0.0])
    def test_non_integer_jump_rejected(self, move):
        with TestClient(app) as client:
            with client.websocket_connect("/ws") as ws:
                ws.receive_json()  # initial render
                ws.send_json({"type": "jump_to", "move": move})
                data = ws.receive_json()
                assert data["type"] == "error"

    def test_non_json_frame_keeps_connection(self):
        before = len(session_manager.sessions)
        with TestClient(app) as client:
            with client.websocket_connect("/ws") as ws:
                ws.receive_json()  # initial render
                ws.send_text("not json")
                data = ws.receive_json()
                assert data["type"] == "error"

                ws.send_json({"type": "play", "cell": 4})
                data = ws.receive_json()
                assert data["board"][4] == "X"
                assert len(session_manager.sessions) == before + 1
        assert len(session_manager.sessions) == before

    def test_full_game_flow(self):
        """Play to a win, travel back, and branch off a new line."""
        with TestClient(app) as client:
            with client.websocket_connect("/ws") as ws:
                ws.receive_json()  # initial render

                for cell in [0, 4, 1, 5]:
                    ws.send_json({"type": "play", "cell": cell})
                    data = ws.receive_json()
                    assert data["type"] == "render"
                    assert data["board"][cell] is not None

                # Occupied cell is ignored; the sync reply proves nothing else was sent
                ws.send_json({"type": "play", "cell": 4})
                ws.send_json({"type": "sync"})
                data = ws.receive_json()
                assert data["current_move"] == 4

                ws.send_json({"type": "play", "cell": 2})
                data = ws.receive_json()
                assert data["status"]["text"] == "Game over. Winner: X"
                assert data["winning_line"] == [0, 1, 2]

                ws.send_json({"type": "jump_to", "move": 2})
                data = ws.receive_json()
                assert data["current_move"] == 2
                assert len(data["moves"]) == 6
                assert data["status"]["text"] == "Next player: X"

                ws.send_json({"type": "play", "cell": 8})
                data = ws.receive_json()
                assert data["current_move"] == 3
                assert len(data["moves"]) == 4

                ws.send_json({"type": "toggle_sort"})
                data = ws.receive_json()
                assert data["descending"] is True
                assert data["moves"][0]["description"] == "You are at move #3 (2, 2)"
                assert data["moves"][-1]["description"] == "Go to game start"
