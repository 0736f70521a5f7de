"""Exceções de infraestrutura para falhas transitórias de persistência.

Hierarquia:
    InfrastructureError
    ├── StateStoreError        (load/save/delete de estado de fluxo)
    │   └── RedisConnectionError
    ├── HistoryWriteError      (append de histórico, best-effort)
    │   └── FirestoreUnavailableError
    └── HandoffNotifyError     (aviso de transferência, fire-and-forget)
"""

from __future__ import annotations


class InfrastructureError(RuntimeError):
    """Base para falhas de infraestrutura transitórias."""


class StateStoreError(InfrastructureError):
    """Falha de I/O ao ler ou gravar o estado de uma conversa."""


class HistoryWriteError(InfrastructureError):
    """Falha ao gravar registro de histórico (não fatal para o turno)."""


class RedisConnectionError(StateStoreError):
    """Falha de conexão/timeout ao acessar Redis."""


class FirestoreUnavailableError(HistoryWriteError):
    """Falha de indisponibilidade ao acessar Firestore."""


class HandoffNotifyError(InfrastructureError):
    """Falha ao notificar o destino de uma transferência."""
