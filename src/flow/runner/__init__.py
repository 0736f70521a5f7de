"""Execução de turnos de conversa."""

from flow.runner.locks import IdentityLockRegistry
from flow.runner.runner import (
    DEFAULT_MAX_HOPS,
    DEFAULT_STORE_TIMEOUT_SECONDS,
    DEFAULT_TIMEZONE,
    ConversationRunner,
)

__all__ = [
    "DEFAULT_MAX_HOPS",
    "DEFAULT_STORE_TIMEOUT_SECONDS",
    "DEFAULT_TIMEZONE",
    "ConversationRunner",
    "IdentityLockRegistry",
]
