"""Protocolo de notificação de transferência para humano."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from flow.evaluators import Handoff
    from flow.types import ConversationIdentity


class HandoffNotifierProtocol(ABC):
    """Avisa o time/agente de destino que uma conversa foi transferida.

    Fire-and-forget do ponto de vista do runner: falhas são logadas e
    nunca re-tentadas.
    """

    @abstractmethod
    async def notify(
        self,
        handoff: Handoff,
        identity: ConversationIdentity,
        context: dict[str, Any],
    ) -> None: ...
