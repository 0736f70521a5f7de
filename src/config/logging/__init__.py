"""Logging estruturado JSON do motor de fluxos.

Todo log carrega asctime, level, logger, message, correlation_id e service;
os eventos do motor (flow_turn_completed, flow_history_write_failed...)
acrescentam seus campos via `extra`.
"""

from config.logging.config import configure_logging, get_logger, log_fallback
from config.logging.filters import CorrelationIdFilter
from config.logging.formatters import (
    FIELD_RENAME_MAP,
    REQUIRED_LOG_FIELDS,
    create_json_formatter,
)

__all__ = [
    "FIELD_RENAME_MAP",
    "REQUIRED_LOG_FIELDS",
    "CorrelationIdFilter",
    "configure_logging",
    "create_json_formatter",
    "get_logger",
    "log_fallback",
]
