"""Estado durável de conversa e registro de histórico.

ConversationState é mutado apenas pelo ConversationRunner dono da
identidade; ConversationHistory é append-only e criado somente quando o
fluxo termina (encerramento ou transferência).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

from flow.types.identity import ConversationIdentity


def _utcnow() -> datetime:
    return datetime.now(UTC)


class HistoryStatus(StrEnum):
    """Desfecho registrado no histórico."""

    COMPLETED = "completed"
    TRANSFERRED_TEAM = "transferred_team"
    TRANSFERRED_AGENT = "transferred_agent"

    def __str__(self) -> str:
        return self.value


@dataclass(slots=True)
class ConversationState:
    """Progresso persistido de uma conversa.

    Attributes:
        current_node_id: Bloco em que a conversa está parada
        variables: Valores coletados por blocos collect_data
        last_message: Última mensagem recebida do usuário
        updated_at: Momento da última gravação
    """

    current_node_id: str
    variables: dict[str, str] = field(default_factory=dict)
    last_message: str = ""
    updated_at: datetime = field(default_factory=_utcnow)

    def to_dict(self) -> dict[str, Any]:
        """Serializa para persistência (JSON)."""
        return {
            "current_node_id": self.current_node_id,
            "variables": dict(self.variables),
            "last_message": self.last_message,
            "updated_at": self.updated_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ConversationState:
        """Deserializa de persistência.

        Raises:
            ValueError: Registro ou variáveis não são objetos
        """
        if not isinstance(data, dict):
            raise ValueError(f"estado deve ser objeto, recebido {type(data).__name__}")
        raw_variables = data.get("variables") or {}
        if not isinstance(raw_variables, dict):
            raise ValueError(
                f"variables deve ser objeto, recebido {type(raw_variables).__name__}"
            )
        return cls(
            current_node_id=str(data["current_node_id"]),
            variables={str(k): str(v) for k, v in raw_variables.items()},
            last_message=data.get("last_message") or "",
            updated_at=(
                datetime.fromisoformat(data["updated_at"])
                if data.get("updated_at")
                else _utcnow()
            ),
        )


@dataclass(frozen=True, slots=True)
class ConversationHistory:
    """Registro auditável de término de fluxo.

    Attributes:
        identity: Conversa que terminou
        final_node_id: Bloco terminal alcançado
        variables: Snapshot das variáveis no término
        status: Desfecho (completed | transferred_team | transferred_agent)
        extra: Metadados livres (última mensagem, alvo da transferência)
        created_at: Momento do término
    """

    identity: ConversationIdentity
    final_node_id: str
    variables: dict[str, str]
    status: HistoryStatus
    extra: dict[str, Any] = field(default_factory=dict)
    created_at: datetime = field(default_factory=_utcnow)

    def to_dict(self) -> dict[str, Any]:
        return {
            **self.identity.to_dict(),
            "final_node_id": self.final_node_id,
            "variables": dict(self.variables),
            "status": self.status.value,
            "extra": dict(self.extra),
            "created_at": self.created_at.isoformat(),
        }
