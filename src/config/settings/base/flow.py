"""Settings do motor de execução de fluxos."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import TYPE_CHECKING, Literal
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

if TYPE_CHECKING:
    from config.settings.base.core import BaseSettings

StateBackend = Literal["memory", "redis"]
HistoryBackend = Literal["memory", "firestore"]
HandoffBackend = Literal["log", "webhook"]


@dataclass(frozen=True)
class FlowEngineSettings:
    """Configurações do ConversationRunner e dos colaboradores.

    Attributes:
        max_hops: Máximo de blocos avançados automaticamente por turno
        store_timeout_seconds: Timeout de cada operação de store/histórico
        timezone: Fuso padrão para blocos de horário
        state_backend: Backend de estado (memory|redis)
        state_ttl_seconds: Expiração do estado (0 = sem expiração)
        history_backend: Backend de histórico (memory|firestore)
        handoff_backend: Notificação de transferência (log|webhook)
        handoff_webhook_url: URL do webhook de transferência
    """

    max_hops: int = 10
    store_timeout_seconds: float = 5.0
    timezone: str = "America/Sao_Paulo"
    state_backend: StateBackend = "memory"
    state_ttl_seconds: int = 0
    history_backend: HistoryBackend = "memory"
    handoff_backend: HandoffBackend = "log"
    handoff_webhook_url: str = ""

    def validate(self, base: BaseSettings) -> list[str]:
        """Valida configurações do motor.

        Args:
            base: BaseSettings para verificar ambiente.

        Returns:
            Lista de erros de validação.
        """
        errors: list[str] = []

        if self.max_hops < 1:
            errors.append("FLOW_MAX_HOPS deve ser >= 1")

        if self.store_timeout_seconds <= 0:
            errors.append("FLOW_STORE_TIMEOUT_SECONDS deve ser > 0")

        if self.state_ttl_seconds < 0:
            errors.append("FLOW_STATE_TTL_SECONDS deve ser >= 0")

        try:
            ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError):
            errors.append(f"FLOW_TIMEZONE inválido: {self.timezone}")

        if self.state_backend not in ("memory", "redis"):
            errors.append(f"FLOW_STATE_BACKEND inválido: {self.state_backend}")

        if self.history_backend not in ("memory", "firestore"):
            errors.append(f"FLOW_HISTORY_BACKEND inválido: {self.history_backend}")

        if self.handoff_backend not in ("log", "webhook"):
            errors.append(f"FLOW_HANDOFF_BACKEND inválido: {self.handoff_backend}")

        if self.handoff_backend == "webhook" and not self.handoff_webhook_url:
            errors.append("FLOW_HANDOFF_WEBHOOK_URL obrigatório com FLOW_HANDOFF_BACKEND=webhook")

        if self.state_backend == "redis" and not base.redis_url:
            errors.append("REDIS_URL obrigatório com FLOW_STATE_BACKEND=redis")

        if self.state_backend == "memory" and not base.is_development:
            errors.append("FLOW_STATE_BACKEND=memory proibido em staging/production")

        return errors


def _load_flow_from_env() -> FlowEngineSettings:
    """Carrega FlowEngineSettings de variáveis de ambiente."""
    return FlowEngineSettings(
        max_hops=int(os.getenv("FLOW_MAX_HOPS", "10")),
        store_timeout_seconds=float(os.getenv("FLOW_STORE_TIMEOUT_SECONDS", "5")),
        timezone=os.getenv("FLOW_TIMEZONE", "America/Sao_Paulo"),
        state_backend=os.getenv("FLOW_STATE_BACKEND", "memory").lower(),  # type: ignore[arg-type]
        state_ttl_seconds=int(os.getenv("FLOW_STATE_TTL_SECONDS", "0")),
        history_backend=os.getenv("FLOW_HISTORY_BACKEND", "memory").lower(),  # type: ignore[arg-type]
        handoff_backend=os.getenv("FLOW_HANDOFF_BACKEND", "log").lower(),  # type: ignore[arg-type]
        handoff_webhook_url=os.getenv("FLOW_HANDOFF_WEBHOOK_URL", ""),
    )


@lru_cache(maxsize=1)
def get_flow_settings() -> FlowEngineSettings:
    """Retorna instância cacheada de FlowEngineSettings."""
    return _load_flow_from_env()
