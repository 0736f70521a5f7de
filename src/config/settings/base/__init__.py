"""Agregador de settings base.

Re-exporta todas as settings base para uso externo.
"""

from __future__ import annotations

from config.settings.base.core import (
    BaseSettings,
    Environment,
    get_base_settings,
)
from config.settings.base.flow import (
    FlowEngineSettings,
    HandoffBackend,
    HistoryBackend,
    StateBackend,
    get_flow_settings,
)

__all__ = [
    # Core
    "BaseSettings",
    # Types
    "Environment",
    # Flow engine
    "FlowEngineSettings",
    "HandoffBackend",
    "HistoryBackend",
    "StateBackend",
    "get_base_settings",
    "get_flow_settings",
]
