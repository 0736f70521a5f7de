"""Tipos compartilhados pelos avaliadores de bloco.

Um avaliador é uma função pura `(node, context) -> StepResult`. Efeitos
colaterais (histórico, transferência, remoção de estado) são apenas
descritos no resultado; quem os aplica é o ConversationRunner.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from typing import Any, TypeVar

from flow.errors import GraphError
from flow.graph.configs import NodeConfig
from flow.graph.model import FlowGraph, Node
from flow.resolver import resolve_edge

ConfigT = TypeVar("ConfigT", bound=NodeConfig)


class HandoffKind(StrEnum):
    """Destino humano de uma transferência."""

    TEAM = "team"
    AGENT = "agent"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class FlowCompleted:
    """Fluxo chegou a um bloco de encerramento."""

    extra: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class Handoff:
    """Conversa entregue a um time ou agente humano."""

    kind: HandoffKind
    target_id: str
    target_name: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class DanglingBranch:
    """Ramo sem conexão de saída: o fluxo termina sem histórico."""

    node_id: str
    handle: str | None = None


SideEffect = FlowCompleted | Handoff | DanglingBranch


@dataclass(frozen=True, slots=True)
class StepResult:
    """Resultado da avaliação de um bloco.

    Attributes:
        text: Texto de saída (vazio = nada a enviar)
        next_node_id: Próximo bloco (None = sem transição)
        blocking: True se o bloco aguarda nova resposta do usuário
        side_effect: Efeito terminal a aplicar pelo runner
    """

    text: str = ""
    next_node_id: str | None = None
    blocking: bool = False
    side_effect: SideEffect | None = None

    @property
    def is_terminal(self) -> bool:
        return self.side_effect is not None


@dataclass(slots=True)
class EvaluationContext:
    """Entrada de um avaliador.

    `variables` é a cópia de trabalho do turno; avaliadores podem gravar
    nela e o runner persiste o resultado ao final.
    """

    graph: FlowGraph
    inbound_text: str
    variables: dict[str, str]
    now: datetime
    default_timezone: str


Evaluator = Callable[[Node, EvaluationContext], StepResult]


def advance_unconditional(node: Node, context: EvaluationContext, text: str = "") -> StepResult:
    """Segue a conexão incondicional do bloco ou encerra o ramo."""
    edge = resolve_edge(context.graph, node.id, None)
    if edge is None:
        return StepResult(text=text, side_effect=DanglingBranch(node_id=node.id))
    return StepResult(text=text, next_node_id=edge.target_node_id)


def stay(node: Node, text: str) -> StepResult:
    """Reapresenta a pergunta e aguarda resposta no mesmo bloco."""
    return StepResult(text=text, next_node_id=node.id, blocking=True)


def config_of(node: Node, model: type[ConfigT]) -> ConfigT:
    """Retorna a configuração tipada do bloco.

    Raises:
        GraphError: Configuração não corresponde ao tipo do bloco
    """
    config = node.config
    if not isinstance(config, model):
        raise GraphError(f"bloco {node.id}: configuração incompatível com {node.kind}")
    return config
