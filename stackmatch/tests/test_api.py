"""
Tests for API layer.

Tests:
- API service methods
- Session lifecycle via API
- HTTP routes and error handling
- Concurrent requests on one session
"""

import asyncio
import threading
import time

import httpx
import pytest
from fastapi.testclient import TestClient

from ..api.schemas import (
    CreateSessionRequest,
    RestartRequest,
    SelectCardRequest,
    LayoutEntryInfo,
    ErrorCode,
    SessionStatus,
    OutcomeKindName,
    SuitName,
    ZoneName,
)
from ..api.service import APIService
from ..api.app import create_app
from ..layout import LayoutError


PROMOTE_LAYOUT = [
    {"rank": 12, "suit": "clubs", "zone": "playfield", "x": 250, "y": 1000},
    {"rank": 3, "suit": "clubs", "zone": "stack", "x": 200, "y": 290},
    {"rank": 1, "suit": "hearts", "zone": "stack", "x": 200, "y": 290},
    {"rank": 4, "suit": "clubs", "zone": "stack", "x": 800, "y": 290},
]


class TestAPIService:
    """Tests for APIService."""

    @pytest.fixture
    def service(self):
        """Create a fresh API service."""
        return APIService()

    def test_create_default_session(self, service):
        response = service.create_session(CreateSessionRequest())

        assert response.session_id is not None
        assert response.status == SessionStatus.ACTIVE
        assert len(response.game_state.playfield) == 6
        assert response.game_state.top_card.label == "4♣"
        assert not response.game_state.can_undo

    def test_create_with_layout(self, service):
        request = CreateSessionRequest(
            layout=[LayoutEntryInfo(**entry) for entry in PROMOTE_LAYOUT]
        )
        response = service.create_session(request)

        assert [c.card_id for c in response.game_state.stack] == [1, 2, 3]
        assert response.game_state.playfield[0].x == 250.0

    def test_select_and_undo(self, service):
        session_id = service.create_session(CreateSessionRequest()).session_id

        result = service.select_card(session_id, SelectCardRequest(card_id=7))
        assert result.applied
        assert result.kind == OutcomeKindName.PROMOTE
        assert result.game_state.top_card.card_id == 7
        assert result.game_state.can_undo

        undo = service.undo(session_id)
        assert undo.applied
        assert undo.game_state.top_card.card_id == 8
        assert not undo.game_state.can_undo

        assert not service.undo(session_id).applied

    def test_rejected_selection(self, service):
        session_id = service.create_session(CreateSessionRequest()).session_id

        result = service.select_card(
            session_id, SelectCardRequest(card_id=0, zone_hint=ZoneName.PLAYFIELD)
        )
        assert not result.applied
        assert result.kind == OutcomeKindName.REJECTED
        assert result.reason == "rank_mismatch"

    def test_restart(self, service):
        session_id = service.create_session(CreateSessionRequest()).session_id
        service.select_card(session_id, SelectCardRequest(card_id=7))

        state = service.restart(session_id, RestartRequest())
        assert state.top_card.card_id == 8
        assert state.undo_depth == 0

    def test_unknown_session(self, service):
        response = service.get_game_state("nonexistent-id")
        assert response.error_code == ErrorCode.SESSION_NOT_FOUND

        response = service.select_card("nonexistent-id", SelectCardRequest(card_id=0))
        assert response.error_code == ErrorCode.SESSION_NOT_FOUND

    def test_end_and_list_sessions(self, service):
        ids = [service.create_session(CreateSessionRequest()).session_id for _ in range(3)]
        assert set(service.list_sessions()) == set(ids)

        assert service.end_session(ids[0])
        assert ids[0] not in service.list_sessions()
        assert not service.end_session(ids[0])

    def test_invalid_layout_raises(self, service):
        """Entries that bypass schema validation are still caught by the engine."""
        entry = LayoutEntryInfo.model_construct(
            rank=0, suit=SuitName.CLUBS, zone=ZoneName.STACK, x=0.0, y=0.0
        )
        with pytest.raises(LayoutError):
            service.create_session(CreateSessionRequest.model_construct(layout=[entry]))


class TestHTTPRoutes:
    """Tests for the FastAPI routes."""

    @pytest.fixture
    def client(self):
        return TestClient(create_app(APIService()))

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_game_flow(self, client):
        created = client.post("/api/v1/sessions")
        assert created.status_code == 200
        session_id = created.json()["session_id"]

        selected = client.post(
            f"/api/v1/sessions/{session_id}/select", json={"card_id": 7}
        )
        body = selected.json()
        assert body["applied"] is True
        assert body["kind"] == "promote"
        assert [c["card_id"] for c in body["game_state"]["stack"]] == [6, 8, 7]

        matched = client.post(
            f"/api/v1/sessions/{session_id}/select", json={"card_id": 1}
        ).json()
        assert matched["kind"] == "match"
        assert matched["game_state"]["top_card"]["label"] == "2♣"

        undone = client.post(f"/api/v1/sessions/{session_id}/undo").json()
        assert undone["applied"] is True
        assert undone["game_state"]["top_card"]["card_id"] == 7

        state = client.get(f"/api/v1/sessions/{session_id}").json()
        assert state["undo_depth"] == 1

    def test_rejected_move_is_not_http_error(self, client):
        session_id = client.post("/api/v1/sessions").json()["session_id"]

        response = client.post(
            f"/api/v1/sessions/{session_id}/select", json={"card_id": 8}
        )
        assert response.status_code == 200
        assert response.json()["reason"] == "top_card_selected"

    def test_custom_layout(self, client):
        response = client.post("/api/v1/sessions", json={"layout": PROMOTE_LAYOUT})
        assert response.status_code == 200
        assert response.json()["game_state"]["top_card"]["rank"] == 4

    def test_invalid_layout_rejected(self, client):
        bad = [{"rank": 14, "suit": "clubs", "zone": "stack"}]
        response = client.post("/api/v1/sessions", json={"layout": bad})
        assert response.status_code == 422

    def test_session_not_found(self, client):
        response = client.get("/api/v1/sessions/nope")
        assert response.status_code == 404
        assert response.json()["error_code"] == "SESSION_NOT_FOUND"

        response = client.post("/api/v1/sessions/nope/undo")
        assert response.status_code == 404

    def test_restart_and_end(self, client):
        session_id = client.post("/api/v1/sessions").json()["session_id"]
        client.post(f"/api/v1/sessions/{session_id}/select", json={"card_id": 7})

        restarted = client.post(f"/api/v1/sessions/{session_id}/restart")
        assert restarted.status_code == 200
        assert restarted.json()["can_undo"] is False

        ended = client.delete(f"/api/v1/sessions/{session_id}")
        assert ended.json()["success"] is True
        assert client.get("/api/v1/sessions").json()["count"] == 0


class CountingService(APIService):
    """APIService that records how many select_card calls overlap."""

    def __init__(self):
        super().__init__()
        self.active = 0
        self.peak = 0
        self._lock = threading.Lock()

    def select_card(self, session_id, request):
        with self._lock:
            self.active += 1
            self.peak = max(self.peak, self.active)
        try:
            time.sleep(0.05)
            return super().select_card(session_id, request)
        finally:
            with self._lock:
                self.active -= 1


class TestConcurrentRequests:
    """Requests on one session run one at a time."""

    def test_selects_do_not_overlap(self):
        service = CountingService()
        app = create_app(service)
        session_id = service.create_session(CreateSessionRequest()).session_id

        async def send_all():
            transport = httpx.ASGITransport(app=app)
            async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
                return await asyncio.gather(*(
                    client.post(
                        f"/api/v1/sessions/{session_id}/select",
                        json={"card_id": card_id},
                    )
                    for card_id in (6, 7, 6, 7)
                ))

        responses = asyncio.run(send_all())

        assert [r.status_code for r in responses] == [200] * 4
        assert service.peak == 1
        # The first promote exposes a top that the playfield 2s can match
        assert sum(r.json()["applied"] for r in responses) == 1
        assert service.get_game_state(session_id).undo_depth == 1
