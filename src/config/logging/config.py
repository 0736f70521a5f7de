"""Configuração do logging JSON do motor de fluxos.

Uso:
    # app/bootstrap: uma vez por processo
    configure_logging(level="INFO", correlation_id_getter=get_correlation_id)

    # nos módulos: eventos snake_case, dados em `extra`, sem texto do usuário
    logger = logging.getLogger(__name__)
    logger.info("flow_loaded", extra={"flow_id": "menu", "nodes_count": 5})
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from config.logging.filters import CorrelationIdFilter
from config.logging.formatters import create_json_formatter

if TYPE_CHECKING:
    from collections.abc import Callable

VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})

DEFAULT_SERVICE_NAME = "flow_engine"


def configure_logging(
    level: str = "INFO",
    service_name: str = DEFAULT_SERVICE_NAME,
    correlation_id_getter: Callable[[], str] | None = None,
) -> None:
    """Instala um único handler JSON no root logger.

    Args:
        level: DEBUG, INFO, WARNING, ERROR ou CRITICAL (sem diferenciar caixa)
        service_name: Valor do campo `service`
        correlation_id_getter: Fonte do correlation_id do turno

    Raises:
        ValueError: Nível de log inválido
    """
    level_upper = level.upper()
    if level_upper not in VALID_LOG_LEVELS:
        raise ValueError(
            f"Nível de log inválido: {level}. "
            f"Válidos: {', '.join(sorted(VALID_LOG_LEVELS))}"
        )

    handler = logging.StreamHandler()
    handler.setLevel(level_upper)
    handler.setFormatter(create_json_formatter())
    handler.addFilter(CorrelationIdFilter(service_name, correlation_id_getter))

    root = logging.getLogger()
    root.setLevel(level_upper)
    # Reconfigurar substitui o handler anterior
    root.handlers = [handler]


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def log_fallback(
    logger: logging.Logger,
    component: str,
    reason: str | None = None,
    elapsed_ms: float | None = None,
) -> None:
    """Registra que um caminho de fallback determinístico foi seguido.

    No motor o caso típico é o resolvedor de conexões caindo na primeira
    saída do bloco quando o handle escolhido não tem conexão própria:

        log_fallback(logger, "edge_resolver", reason="handle_without_edge")

    Args:
        logger: Logger do módulo chamador
        component: Componente que aplicou o fallback
        reason: Motivo em snake_case, sem PII
        elapsed_ms: Tempo gasto antes do fallback, quando houver
    """
    extra: dict[str, object] = {
        "fallback_used": True,
        "component": component,
    }
    if reason:
        extra["reason"] = reason
    if elapsed_ms is not None:
        extra["elapsed_ms"] = elapsed_ms

    logger.info("Fallback applied for %s", component, extra=extra)
