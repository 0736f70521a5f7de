"""Observabilidade — logs estruturados, tracing, métricas.

Re-exporta funções de correlation_id e métricas para uso em toda a aplicação.

Uso:
    from app.observability import get_correlation_id, set_correlation_id
    from app.observability import record_handoff, record_latency
"""

from app.observability.correlation import (
    get_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)
from app.observability.metrics import record_handoff, record_latency

__all__ = [
    "get_correlation_id",
    "record_handoff",
    "record_latency",
    "reset_correlation_id",
    "set_correlation_id",
]
