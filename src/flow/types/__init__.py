"""
Exports públicos do módulo flow/types.

Tipos de dados de conversa: identidade, estado, histórico e resultado.
"""

from flow.types.identity import ConversationIdentity
from flow.types.outcome import StepOutcome
from flow.types.state import ConversationHistory, ConversationState, HistoryStatus

__all__ = [
    "ConversationHistory",
    "ConversationIdentity",
    "ConversationState",
    "HistoryStatus",
    "StepOutcome",
]
