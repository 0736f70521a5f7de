"""Notificador de transferência via webhook HTTP.

Publica o evento de transferência para o serviço que avisa o time ou
agente de destino (sala do time no painel). Não há retry: o runner
trata a notificação como fire-and-forget.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import httpx

from app.observability import get_correlation_id
from app.protocols.handoff_notifier import HandoffNotifierProtocol
from utils.errors import HandoffNotifyError

if TYPE_CHECKING:
    from flow.evaluators import Handoff
    from flow.types import ConversationIdentity

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 5.0


def build_handoff_payload(
    handoff: Handoff,
    identity: ConversationIdentity,
    context: dict[str, Any],
) -> dict[str, Any]:
    """Monta o corpo do evento de transferência."""
    return {
        "event": "flow_handoff",
        "handoff_kind": handoff.kind.value,
        "target_id": handoff.target_id,
        "target_name": handoff.target_name,
        **identity.to_dict(),
        "node_id": context.get("node_id"),
        "variables": context.get("variables", {}),
    }


class WebhookHandoffNotifier(HandoffNotifierProtocol):
    """POST do evento de transferência para uma URL configurada.

    Args:
        url: Endpoint que recebe o evento
        timeout_seconds: Timeout da requisição
        client: Cliente httpx compartilhado (opcional; testes usam MockTransport)
    """

    def __init__(
        self,
        url: str,
        *,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        if not url:
            raise ValueError("url do webhook de transferência é obrigatória")
        self._url = url
        self._timeout = timeout_seconds
        self._client = client

    async def notify(
        self,
        handoff: Handoff,
        identity: ConversationIdentity,
        context: dict[str, Any],
    ) -> None:
        payload = build_handoff_payload(handoff, identity, context)
        headers = {"X-Correlation-Id": get_correlation_id()}
        try:
            if self._client is not None:
                response = await self._client.post(
                    self._url, json=payload, headers=headers, timeout=self._timeout
                )
            else:
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    response = await client.post(self._url, json=payload, headers=headers)
        except httpx.HTTPError as exc:
            msg = f"handoff_webhook_request_failed: {type(exc).__name__}"
            raise HandoffNotifyError(msg) from exc

        if response.status_code >= 400:
            raise HandoffNotifyError(f"handoff_webhook_status_{response.status_code}")

        logger.info(
            "flow_handoff_notified",
            extra={
                "handoff_kind": handoff.kind.value,
                "target_id": handoff.target_id,
                "status_code": response.status_code,
            },
        )
