"""Filter que injeta o contexto do turno em cada log.

Campos injetados:
- correlation_id: id do turno (app.observability.correlation)
- service: nome do serviço (ex: flow_engine)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable


class CorrelationIdFilter(logging.Filter):
    """Injeta correlation_id e service; nunca filtra records.

    Um correlation_id passado via `extra` tem precedência sobre o do getter,
    o que permite logar em nome de outro turno (ex: métricas pós-turno).

    Args:
        service_name: Nome do serviço nos logs
        correlation_id_getter: Retorna o id do turno atual; sem getter o
            campo sai vazio
    """

    def __init__(
        self,
        service_name: str,
        correlation_id_getter: Callable[[], str] | None = None,
    ) -> None:
        super().__init__()
        self._service_name = service_name
        self._get_correlation_id = correlation_id_getter or (lambda: "")

    def filter(self, record: logging.LogRecord) -> bool:
        if not getattr(record, "correlation_id", None):
            record.correlation_id = self._get_correlation_id()
        record.service = self._service_name
        return True
