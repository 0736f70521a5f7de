"""Protocolos e contratos dos colaboradores do motor de fluxos."""

from .clock import ClockProtocol
from .handoff_notifier import HandoffNotifierProtocol
from .history_recorder import HistoryRecorderProtocol
from .state_store import StateStoreProtocol

__all__ = [
    "ClockProtocol",
    "HandoffNotifierProtocol",
    "HistoryRecorderProtocol",
    "StateStoreProtocol",
]
