"""Protocolo de persistência do estado de conversa em fluxo."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from flow.types import ConversationIdentity, ConversationState


class StateStoreProtocol(ABC):
    """Contrato assíncrono para o estado durável de uma conversa.

    `save` substitui o registro inteiro (upsert pela identidade); nunca
    atualiza campos parcialmente.

    Implementações devem levantar StateStoreError em falha de I/O.
    """

    @abstractmethod
    async def load(self, identity: ConversationIdentity) -> ConversationState | None: ...

    @abstractmethod
    async def save(self, identity: ConversationIdentity, state: ConversationState) -> None: ...

    @abstractmethod
    async def delete(self, identity: ConversationIdentity) -> bool: ...
