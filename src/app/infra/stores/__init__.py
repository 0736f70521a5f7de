"""Stores — implementações concretas de persistência do motor de fluxos.

Módulos disponíveis:
    - redis_state_store: Estado de fluxo usando Redis (Upstash)
    - firestore_history_store: Histórico de término usando Firestore
    - memory_stores: Stores em memória para desenvolvimento/testes
"""

from __future__ import annotations

from app.infra.stores.firestore_history_store import FirestoreHistoryRecorder
from app.infra.stores.memory_stores import MemoryHistoryRecorder, MemoryStateStore
from app.infra.stores.redis_state_store import RedisStateStore

__all__ = [
    # Firestore
    "FirestoreHistoryRecorder",
    # Memory (dev/test)
    "MemoryHistoryRecorder",
    "MemoryStateStore",
    # Redis (Upstash)
    "RedisStateStore",
]
