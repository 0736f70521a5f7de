"""Resultado agregado de um turno do ConversationRunner."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from flow.errors import ErrorKind


@dataclass(frozen=True, slots=True)
class StepOutcome:
    """Resposta devolvida ao transporte.

    O transporte envia o primeiro segmento imediatamente e os seguintes
    após um atraso de digitação simulada.

    Attributes:
        segments: Partes de mensagem em ordem de envio
        error: Categoria de falha (None em turno bem-sucedido)
        terminated: True se o estado da conversa foi removido neste turno
        current_node_id: Bloco em que a conversa ficou parada (None se terminou
            ou se o turno falhou antes de definir um bloco)
    """

    segments: list[str] = field(default_factory=list)
    error: ErrorKind | None = None
    terminated: bool = False
    current_node_id: str | None = None

    def __post_init__(self) -> None:
        """Valida consistência do resultado."""
        if self.error is not None and len(self.segments) != 1:
            raise ValueError("Turno com falha deve devolver exatamente um segmento")

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def failure(cls, kind: ErrorKind, message: str) -> StepOutcome:
        """Cria resultado de falha com um único segmento seguro."""
        return cls(segments=[message], error=kind)

    def to_log_dict(self) -> dict[str, Any]:
        """Representação segura para logs (sem conteúdo de mensagens)."""
        return {
            "segments_count": len(self.segments),
            "error": self.error.value if self.error else None,
            "terminated": self.terminated,
            "current_node_id": self.current_node_id,
        }
