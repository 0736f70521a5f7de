"""Exceções utilitárias compartilhadas."""

from .exceptions import (
    FirestoreUnavailableError,
    HandoffNotifyError,
    HistoryWriteError,
    InfrastructureError,
    RedisConnectionError,
    StateStoreError,
)

__all__ = [
    "FirestoreUnavailableError",
    "HandoffNotifyError",
    "HistoryWriteError",
    "InfrastructureError",
    "RedisConnectionError",
    "StateStoreError",
]
