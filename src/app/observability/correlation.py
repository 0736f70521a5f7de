"""correlation_id por turno de conversa.

Cada turno do motor roda sob um correlation_id, injetado em todos os logs
(CorrelationIdFilter) e repassado no header X-Correlation-Id do webhook de
transferência.

Origem do id:
- POST /flows/step usa o header x-correlation-id da requisição, se houver
- ConversationRunner.step gera um UUID quando o chamador não definiu nenhum
  e o descarta ao fim do turno

Uso:
    token = set_correlation_id(request.headers.get("x-correlation-id"))
    try:
        outcome = await runner.step(flow, identity, text)
    finally:
        reset_correlation_id(token)
"""

from __future__ import annotations

import uuid
from contextvars import ContextVar, Token

# Isolado por task asyncio: turnos concorrentes não compartilham o id
_correlation_id: ContextVar[str] = ContextVar("flow_correlation_id", default="")


def get_correlation_id() -> str:
    """Retorna o id do turno atual ("" fora de um turno)."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str | None = None) -> Token[str]:
    """Define o id do turno; vazio ou None gera um UUID v4.

    Returns:
        Token para restaurar o valor anterior via reset_correlation_id().
    """
    return _correlation_id.set(correlation_id or str(uuid.uuid4()))


def reset_correlation_id(token: Token[str]) -> None:
    _correlation_id.reset(token)
