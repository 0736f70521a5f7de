"""Modelo imutável do grafo de fluxo.

FlowDefinition é o fluxo já normalizado (blocos e conexões na ordem do
editor). FlowGraph indexa a definição para consultas O(1) durante a
execução de um turno.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from flow.errors import MISSING_NODE_MESSAGE, MISSING_START_MESSAGE, GraphError
from flow.graph.configs import NodeConfig, TransferAgentConfig, TransferTeamConfig
from flow.graph.kinds import NodeKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Node:
    """Bloco do fluxo.

    Attributes:
        id: Identificador único no fluxo
        kind: Tipo canônico
        config: Configuração tipada do tipo
        raw_kind: Tipo como gravado pelo editor (útil para UNSUPPORTED)
    """

    id: str
    kind: NodeKind
    config: NodeConfig
    raw_kind: str = ""


@dataclass(frozen=True, slots=True)
class Edge:
    """Conexão dirigida entre blocos.

    source_handle None significa conexão incondicional.
    """

    id: str
    source_node_id: str
    target_node_id: str
    source_handle: str | None = None

    @property
    def is_unconditional(self) -> bool:
        return not self.source_handle


@dataclass(frozen=True, slots=True)
class FlowDefinition:
    """Fluxo normalizado, somente leitura durante a execução."""

    id: str
    nodes: tuple[Node, ...] = field(default_factory=tuple)
    edges: tuple[Edge, ...] = field(default_factory=tuple)


class FlowGraph:
    """Índices de consulta sobre uma FlowDefinition.

    Consultas são puras; o grafo não é alterado após a construção.
    """

    __slots__ = ("_definition", "_nodes_by_id", "_outgoing", "_start_node")

    def __init__(self, definition: FlowDefinition) -> None:
        nodes_by_id: dict[str, Node] = {}
        for node in definition.nodes:
            if node.id in nodes_by_id:
                raise GraphError(f"id de bloco duplicado: {node.id}")
            nodes_by_id[node.id] = node

        outgoing: dict[str, list[Edge]] = {}
        for edge in definition.edges:
            outgoing.setdefault(edge.source_node_id, []).append(edge)
            if edge.target_node_id not in nodes_by_id:
                logger.warning(
                    "flow_edge_unknown_target",
                    extra={
                        "flow_id": definition.id,
                        "edge_id": edge.id,
                        "target_node_id": edge.target_node_id,
                    },
                )

        self._definition = definition
        self._nodes_by_id: Mapping[str, Node] = MappingProxyType(nodes_by_id)
        self._outgoing: Mapping[str, tuple[Edge, ...]] = MappingProxyType(
            {node_id: tuple(edges) for node_id, edges in outgoing.items()}
        )
        self._start_node = next(
            (node for node in definition.nodes if node.kind == NodeKind.START),
            None,
        )

    @classmethod
    def from_definition(cls, definition: FlowDefinition) -> FlowGraph:
        """Constrói o grafo validando ids únicos.

        Raises:
            GraphError: Ids de bloco duplicados
        """
        return cls(definition)

    @property
    def flow_id(self) -> str:
        return self._definition.id

    @property
    def definition(self) -> FlowDefinition:
        return self._definition

    @property
    def nodes(self) -> tuple[Node, ...]:
        return self._definition.nodes

    @property
    def edges(self) -> tuple[Edge, ...]:
        return self._definition.edges

    def find_node(self, node_id: str) -> Node:
        """Retorna o bloco pelo id.

        Raises:
            GraphError: Bloco não existe no fluxo
        """
        node = self._nodes_by_id.get(node_id)
        if node is None:
            raise GraphError(
                f"bloco não encontrado: {node_id}",
                user_message=MISSING_NODE_MESSAGE,
            )
        return node

    def find_start_node(self) -> Node:
        """Retorna o primeiro bloco do tipo start.

        Raises:
            GraphError: Fluxo sem bloco inicial
        """
        if self._start_node is None:
            raise GraphError(
                f"fluxo sem bloco inicial: {self.flow_id}",
                user_message=MISSING_START_MESSAGE,
            )
        return self._start_node

    def outgoing_edges(self, node_id: str) -> list[Edge]:
        """Conexões que saem do bloco, na ordem do editor."""
        return list(self._outgoing.get(node_id, ()))

    def configuration_issues(self) -> list[str]:
        """Lista problemas de configuração que só falham quando o bloco é alcançado."""
        issues: list[str] = []
        for node in self.nodes:
            config = node.config
            if isinstance(config, TransferTeamConfig) and not config.team_id:
                issues.append(f"{node.id}: transferência para time sem team_id")
            elif isinstance(config, TransferAgentConfig) and not config.agent_id:
                issues.append(f"{node.id}: transferência para agente sem agent_id")
        return issues
