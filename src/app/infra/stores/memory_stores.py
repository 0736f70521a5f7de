"""Stores em memória — apenas para desenvolvimento e testes.

ATENÇÃO: Não usar em staging/production. Sem persistência entre reinícios.
"""

from __future__ import annotations

import json
import time
from typing import TYPE_CHECKING

from app.protocols.history_recorder import HistoryRecorderProtocol
from app.protocols.state_store import StateStoreProtocol
from flow.types import ConversationState

if TYPE_CHECKING:
    from flow.types import ConversationHistory, ConversationIdentity


class MemoryStateStore(StateStoreProtocol):
    """Store de estado de fluxo em memória — apenas para dev/test.

    Guarda o JSON serializado (como o Redis) para que cada load devolva
    uma cópia independente do estado.

    Args:
        ttl_seconds: Expiração do estado (0 = sem expiração)
    """

    def __init__(self, ttl_seconds: int = 0) -> None:
        self._ttl_seconds = ttl_seconds
        self._store: dict[str, tuple[str, float | None]] = {}  # key -> (json, expires_at)

    async def load(self, identity: ConversationIdentity) -> ConversationState | None:
        entry = self._store.get(identity.key)
        if entry is None:
            return None
        data, expires_at = entry
        if expires_at is not None and time.time() > expires_at:
            del self._store[identity.key]
            return None
        return ConversationState.from_dict(json.loads(data))

    async def save(self, identity: ConversationIdentity, state: ConversationState) -> None:
        expires_at = time.time() + self._ttl_seconds if self._ttl_seconds > 0 else None
        self._store[identity.key] = (json.dumps(state.to_dict()), expires_at)

    async def delete(self, identity: ConversationIdentity) -> bool:
        return self._store.pop(identity.key, None) is not None

    def __len__(self) -> int:
        return len(self._store)


class MemoryHistoryRecorder(HistoryRecorderProtocol):
    """Histórico de término em memória — apenas para dev/test."""

    def __init__(self) -> None:
        self._records: list[ConversationHistory] = []

    async def append(self, record: ConversationHistory) -> None:
        self._records.append(record)

    @property
    def records(self) -> list[ConversationHistory]:
        return list(self._records)

    def records_for(self, identity: ConversationIdentity) -> list[ConversationHistory]:
        return [record for record in self._records if record.identity == identity]
