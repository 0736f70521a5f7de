"""Identidade durável de uma conversa em um fluxo."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class ConversationIdentity:
    """Tupla (conta, dono da conversa, fluxo) que identifica o progresso.

    Attributes:
        account_id: Conta de mensageria que recebeu a mensagem
        owner_id: Cliente/contato dono da conversa
        flow_id: Fluxo em execução
    """

    account_id: str
    owner_id: str
    flow_id: str

    def __post_init__(self) -> None:
        """Valida que nenhum componente da chave é vazio."""
        for name in ("account_id", "owner_id", "flow_id"):
            value = getattr(self, name)
            if not value or not str(value).strip():
                raise ValueError(f"{name} não pode ser vazio")

    @property
    def key(self) -> str:
        """Chave estável para stores e locks."""
        return f"{self.account_id}:{self.owner_id}:{self.flow_id}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "account_id": self.account_id,
            "owner_id": self.owner_id,
            "flow_id": self.flow_id,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ConversationIdentity:
        return cls(
            account_id=str(data["account_id"]),
            owner_id=str(data["owner_id"]),
            flow_id=str(data["flow_id"]),
        )
