"""Protocolo de relógio injetável."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime  # noqa: TC003 - usado na assinatura


class ClockProtocol(ABC):
    """Fonte do instante atual (testes usam relógio fixo)."""

    @abstractmethod
    def now(self) -> datetime:
        """Instante atual com timezone."""
