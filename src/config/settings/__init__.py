"""Agregador de settings do motor de fluxos.

Re-exporta todas as settings e funções de cada módulo.
Organização por domínio para isolamento de mudanças.
"""

from __future__ import annotations

# Base settings
from config.settings.base import (
    BaseSettings,
    Environment,
    FlowEngineSettings,
    HandoffBackend,
    HistoryBackend,
    StateBackend,
    get_base_settings,
    get_flow_settings,
)

# Infrastructure settings
from config.settings.infra import (
    FirestoreSettings,
    get_firestore_settings,
)

__all__ = [
    # Base
    "BaseSettings",
    "Environment",
    # Infrastructure
    "FirestoreSettings",
    # Flow engine
    "FlowEngineSettings",
    "HandoffBackend",
    "HistoryBackend",
    "StateBackend",
    "get_base_settings",
    "get_firestore_settings",
    "get_flow_settings",
]
