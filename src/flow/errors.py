"""Taxonomia de erros do motor de fluxos.

Erros de domínio (grafo e configuração) são definidos aqui; erros de
infraestrutura vêm de utils.errors e são re-exportados para que o chamador
tenha um único ponto de import.

Política de propagação:
    - GraphError / ConfigurationError: fatais para o turno, nunca re-tentados
    - StateStoreError: fatal para o turno, nada é persistido
    - HistoryWriteError: não fatal, apenas logado
"""

from __future__ import annotations

from enum import StrEnum

from utils.errors import HistoryWriteError, InfrastructureError, StateStoreError

# Mensagens exibidas ao usuário final (seguras, sem detalhes internos)
INTERNAL_ERROR_MESSAGE = "Erro interno ao processar fluxo."
MISSING_START_MESSAGE = "Fluxo sem bloco inicial."
MISSING_NODE_MESSAGE = "Bloco atual não encontrado."
INVALID_FLOW_MESSAGE = "Fluxo inválido."
TRANSFER_CONFIG_MESSAGE = "Erro na configuração de transferência."


class ErrorKind(StrEnum):
    """Categoria de falha reportada no resultado de um turno."""

    GRAPH = "graph"
    CONFIGURATION = "configuration"
    STATE_STORE = "state_store"
    INTERNAL = "internal"

    def __str__(self) -> str:
        return self.value


class FlowError(Exception):
    """Base para erros de domínio do motor.

    Attributes:
        user_message: Texto seguro para devolver ao usuário
    """

    kind: ErrorKind = ErrorKind.GRAPH

    def __init__(self, detail: str, user_message: str) -> None:
        super().__init__(detail)
        self.user_message = user_message


class GraphError(FlowError):
    """Grafo malformado: bloco inicial ausente, bloco referenciado ausente,
    ids duplicados ou configuração com tipos inválidos."""

    kind = ErrorKind.GRAPH

    def __init__(self, detail: str, user_message: str = INVALID_FLOW_MESSAGE) -> None:
        super().__init__(detail, user_message)


class ConfigurationError(FlowError):
    """Parâmetro obrigatório de bloco ausente (ex: time de transferência)."""

    kind = ErrorKind.CONFIGURATION

    def __init__(self, detail: str, user_message: str = TRANSFER_CONFIG_MESSAGE) -> None:
        super().__init__(detail, user_message)


__all__ = [
    "INTERNAL_ERROR_MESSAGE",
    "INVALID_FLOW_MESSAGE",
    "MISSING_NODE_MESSAGE",
    "MISSING_START_MESSAGE",
    "TRANSFER_CONFIG_MESSAGE",
    "ConfigurationError",
    "ErrorKind",
    "FlowError",
    "GraphError",
    "HistoryWriteError",
    "InfrastructureError",
    "StateStoreError",
]
