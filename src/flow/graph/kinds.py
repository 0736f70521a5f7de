"""Tipos canônicos de bloco e aliases do editor de fluxos.

O editor visual grava tipos em português (inicio, opcoes, encerrar...);
o motor trabalha com os nomes canônicos do enum NodeKind. Tipos
desconhecidos viram UNSUPPORTED e o tipo original é preservado no Node.
"""

from __future__ import annotations

from enum import StrEnum


class NodeKind(StrEnum):
    """Tipos de bloco interpretados pelo motor."""

    START = "start"
    MESSAGE = "message"
    OPTIONS = "options"
    DECISION = "decision"
    COLLECT_DATA = "collect_data"
    END = "end"
    TRANSFER_TEAM = "transfer_team"
    TRANSFER_AGENT = "transfer_agent"
    BUSINESS_HOURS = "business_hours"
    SATISFACTION_SURVEY = "satisfaction_survey"
    UNSUPPORTED = "unsupported"

    def __str__(self) -> str:
        return self.value


# Tipos gravados pelo editor visual → tipo canônico
AUTHORED_KIND_ALIASES: dict[str, NodeKind] = {
    "inicio": NodeKind.START,
    "mensagem": NodeKind.MESSAGE,
    "dentro_horario": NodeKind.MESSAGE,
    "fora_horario": NodeKind.MESSAGE,
    "opcoes": NodeKind.OPTIONS,
    "decisao": NodeKind.DECISION,
    "coletar_dados": NodeKind.COLLECT_DATA,
    "encerrar": NodeKind.END,
    "transferencia_time": NodeKind.TRANSFER_TEAM,
    "transferencia_departamento": NodeKind.TRANSFER_TEAM,
    "transferencia_agente": NodeKind.TRANSFER_AGENT,
    "horario": NodeKind.BUSINESS_HOURS,
    "pesquisa_satisfacao": NodeKind.SATISFACTION_SURVEY,
}


def resolve_kind(raw_kind: str | None) -> NodeKind:
    """Converte o tipo gravado (canônico ou alias) em NodeKind.

    Args:
        raw_kind: Tipo como veio do payload do fluxo

    Returns:
        NodeKind correspondente, ou UNSUPPORTED se desconhecido
    """
    if not raw_kind:
        return NodeKind.UNSUPPORTED
    normalized = str(raw_kind).strip().lower()
    try:
        return NodeKind(normalized)
    except ValueError:
        return AUTHORED_KIND_ALIASES.get(normalized, NodeKind.UNSUPPORTED)
