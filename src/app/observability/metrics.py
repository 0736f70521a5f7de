"""Registro de métricas via structured logging.

As métricas são registradas como logs estruturados e podem ser agregadas
posteriormente (BigQuery, Cloud Logging, etc.).

Métricas suportadas:
- Latência: tempo de execução por componente/operação
- Handoff: counter de transferências de fluxo para humano

Uso:
    from app.observability.metrics import record_handoff, record_latency

    start = time.perf_counter()
    # ... turno ...
    record_latency("flow_runner", "step", (time.perf_counter() - start) * 1000)

    record_handoff("flow_team", metadata={"flow_id": "f-1"})
"""

from __future__ import annotations

import logging

from app.observability.correlation import get_correlation_id

logger = logging.getLogger(__name__)


def record_latency(
    component: str,
    operation: str,
    latency_ms: float,
    correlation_id: str | None = None,
) -> None:
    """Registra latência de operação.

    Args:
        component: Nome do componente (ex: "flow_runner")
        operation: Nome da operação (ex: "step")
        latency_ms: Latência em milissegundos
        correlation_id: ID de correlação (padrão: o do contexto atual)
    """
    logger.info(
        "metric_latency",
        extra={
            "metric_type": "latency",
            "component": component,
            "operation": operation,
            "latency_ms": round(latency_ms, 2),
            "correlation_id": correlation_id or get_correlation_id(),
        },
    )


def record_handoff(
    reason: str,
    correlation_id: str | None = None,
    metadata: dict[str, str | float | int] | None = None,
) -> None:
    """Registra transferência para humano.

    Args:
        reason: Motivo/destino do handoff (ex: "flow_team", "flow_agent")
        correlation_id: ID de correlação (padrão: o do contexto atual)
        metadata: Metadados adicionais opcionais (sem PII)
    """
    extra: dict[str, object] = {
        "metric_type": "handoff",
        "component": "handoff",
        "reason": reason,
        "correlation_id": correlation_id or get_correlation_id(),
    }
    if metadata:
        extra.update(metadata)

    logger.info(
        "metric_handoff",
        extra=extra,
    )
