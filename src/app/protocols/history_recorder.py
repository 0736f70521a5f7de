"""Protocolo de gravação de histórico de término de fluxo."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from flow.types import ConversationHistory


class HistoryRecorderProtocol(ABC):
    """Contrato append-only para registros de término.

    Best-effort: falhas (HistoryWriteError) são logadas pelo runner e não
    desfazem a remoção do estado.
    """

    @abstractmethod
    async def append(self, record: ConversationHistory) -> None: ...
