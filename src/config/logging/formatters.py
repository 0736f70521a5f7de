"""Formatter JSON dos logs do motor de fluxos.

Todo log sai como um objeto JSON com os campos de REQUIRED_LOG_FIELDS, na
ordem declarada, mais os `extra` do evento (flow_id, node_id, error_kind...).
"""

from __future__ import annotations

from pythonjsonlogger.json import JsonFormatter

# Ordem fixa: as colunas saem sempre na mesma posição
REQUIRED_LOG_FIELDS: tuple[str, ...] = (
    "asctime",
    "levelname",
    "name",
    "message",
    "correlation_id",
    "service",
)

FIELD_RENAME_MAP = {
    "levelname": "level",
    "name": "logger",
}


def create_json_formatter() -> JsonFormatter:
    """Cria o formatter JSON padrão.

    Exemplo de output de um turno:
        {
            "asctime": "2026-01-14 10:00:00,120",
            "level": "INFO",
            "logger": "flow.runner.runner",
            "message": "flow_turn_completed",
            "correlation_id": "abc-123",
            "service": "flow_engine",
            "flow_id": "menu",
            "segments_count": 2
        }
    """
    format_string = " ".join(f"%({field})s" for field in REQUIRED_LOG_FIELDS)
    return JsonFormatter(format_string, rename_fields=FIELD_RENAME_MAP)
