"""Testes do endpoint POST /flows/step."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from api.routes import create_api_router
from api.routes.flows.models import IdentityPayload, StepRequest, StepResponse
from app.bootstrap import get_runner
from app.infra.stores import MemoryHistoryRecorder, MemoryStateStore
from app.observability import get_correlation_id
from flow.errors import INTERNAL_ERROR_MESSAGE, ErrorKind
from flow.runner import ConversationRunner
from flow.types import ConversationIdentity, StepOutcome
from tests.fakes.fake_flow_collaborators import FixedClock, RecordingHandoffNotifier
from tests.fakes.flow_builders import greeting_menu_flow


def _runner() -> ConversationRunner:
    return ConversationRunner(
        state_store=MemoryStateStore(),
        history_recorder=MemoryHistoryRecorder(),
        handoff_notifier=RecordingHandoffNotifier(),
        clock=FixedClock(),
    )


@pytest.fixture
def client() -> TestClient:
    app = FastAPI()
    app.include_router(create_api_router())
    runner = _runner()
    app.dependency_overrides[get_runner] = lambda: runner
    return TestClient(app)


def _body(text: str, **identity) -> dict:
    return {
        "flow": greeting_menu_flow(),
        "identity": {"account_id": "acc-1", "owner_id": "cli-1", **identity},
        "text": text,
    }


class TestStepRequest:
    def test_flow_id_defaults_to_flow_payload_id(self) -> None:
        """Sem flow_id explícito usa o id do fluxo enviado."""
        request = StepRequest(
            flow={"id": "menu"},
            identity=IdentityPayload(account_id="acc-1", owner_id="cli-1"),
        )

        assert request.to_identity() == ConversationIdentity("acc-1", "cli-1", "menu")

    def test_explicit_flow_id_wins(self) -> None:
        request = StepRequest(
            flow={"id": "menu"},
            identity=IdentityPayload(account_id="acc-1", owner_id="cli-1", flow_id="v2"),
        )

        assert request.to_identity().flow_id == "v2"

    def test_response_from_failure(self) -> None:
        outcome = StepOutcome.failure(ErrorKind.STATE_STORE, INTERNAL_ERROR_MESSAGE)

        response = StepResponse.from_outcome(outcome)

        assert response.error == "state_store"
        assert response.segments == [INTERNAL_ERROR_MESSAGE]


class TestStepEndpoint:
    """Testes do endpoint via TestClient."""

    def test_conversation_over_http(self, client: TestClient) -> None:
        """Dois turnos: pergunta e escolha que encerra o fluxo."""
        first = client.post("/flows/step", json=_body("oi"))
        second = client.post("/flows/step", json=_body("2"))

        assert first.status_code == 200
        assert first.json() == {
            "segments": ["Olá! Bem-vindo.", "Escolha:\n1. A\n2. B"],
            "error": None,
            "terminated": False,
            "current_node_id": "menu",
        }
        assert second.json()["segments"] == ["Você escolheu B."]
        assert second.json()["terminated"] is True

    def test_engine_failure_returns_error_segment(self, client: TestClient) -> None:
        """Falha do motor volta com 200 e `error` preenchido."""
        body = _body("oi")
        body["flow"]["nodes"] = [n for n in body["flow"]["nodes"] if n["id"] != "start"]

        response = client.post("/flows/step", json=body)

        assert response.status_code == 200
        assert response.json()["error"] == "graph"
        assert len(response.json()["segments"]) == 1

    def test_missing_flow_id_is_unprocessable(self, client: TestClient) -> None:
        body = _body("oi")
        del body["flow"]["id"]

        response = client.post("/flows/step", json=body)

        assert response.status_code == 422

    def test_unknown_identity_field_is_rejected(self, client: TestClient) -> None:
        response = client.post("/flows/step", json=_body("oi", tenant="x"))

        assert response.status_code == 422

    def test_correlation_header_is_forwarded(self) -> None:
        """O correlation_id do header fica visível durante o turno."""
        seen: list[str] = []
        runner = AsyncMock()

        async def _step(flow, identity, text):
            seen.append(get_correlation_id())
            return StepOutcome(segments=["ok"], current_node_id="menu")

        runner.step.side_effect = _step
        app = FastAPI()
        app.include_router(create_api_router())
        app.dependency_overrides[get_runner] = lambda: runner

        response = TestClient(app).post(
            "/flows/step", json=_body("oi"), headers={"X-Correlation-Id": "corr-7"}
        )

        assert response.status_code == 200
        assert seen == ["corr-7"]
