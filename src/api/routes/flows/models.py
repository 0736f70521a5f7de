"""Modelos de request/response da rota de execução de fluxo."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from flow.types import ConversationIdentity, StepOutcome


class IdentityPayload(BaseModel):
    """Identidade da conversa; flow_id padrão é o id do fluxo enviado."""

    model_config = ConfigDict(extra="forbid")

    account_id: str = Field(min_length=1)
    owner_id: str = Field(min_length=1)
    flow_id: str | None = Field(default=None, min_length=1)


class StepRequest(BaseModel):
    """Turno de conversa: fluxo (formato canônico ou do editor) e mensagem."""

    flow: dict[str, Any]
    identity: IdentityPayload
    text: str = ""

    def to_identity(self) -> ConversationIdentity:
        flow_id = self.identity.flow_id or str(self.flow.get("id") or "")
        return ConversationIdentity(
            account_id=self.identity.account_id,
            owner_id=self.identity.owner_id,
            flow_id=flow_id,
        )


class StepResponse(BaseModel):
    """Resultado do turno devolvido ao transporte."""

    segments: list[str]
    error: str | None = None
    terminated: bool = False
    current_node_id: str | None = None

    @classmethod
    def from_outcome(cls, outcome: StepOutcome) -> StepResponse:
        return cls(
            segments=list(outcome.segments),
            error=outcome.error.value if outcome.error else None,
            terminated=outcome.terminated,
            current_node_id=outcome.current_node_id,
        )
