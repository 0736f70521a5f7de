"""Resolução de conexões de saída de um bloco.

Blocos de escolha (options/decision) usam fallback para a primeira
conexão do bloco quando o handle escolhido não tem conexão própria;
o bloco de horário é estrito e encerra o fluxo sem conexão.
"""

from __future__ import annotations

import logging

from config.logging import log_fallback
from flow.graph.model import Edge, FlowGraph

logger = logging.getLogger(__name__)


def resolve_edge(
    graph: FlowGraph,
    node_id: str,
    handle: str | None,
    *,
    strict: bool = False,
) -> Edge | None:
    """Escolhe a conexão de saída para o handle.

    Args:
        graph: Grafo do fluxo
        node_id: Bloco de origem
        handle: Handle escolhido (None = conexão incondicional)
        strict: Desliga o fallback para a primeira conexão

    Returns:
        Conexão escolhida, ou None se o bloco não tem saída aplicável
    """
    edges = graph.outgoing_edges(node_id)
    if not edges:
        return None

    if handle is None:
        return next((edge for edge in edges if edge.is_unconditional), None)

    for edge in edges:
        if edge.source_handle == handle:
            return edge

    if strict:
        return None

    log_fallback(logger, "edge_resolver", reason="handle_without_edge")
    logger.debug(
        "edge_fallback_first",
        extra={
            "flow_id": graph.flow_id,
            "node_id": node_id,
            "handle": handle,
            "edge_id": edges[0].id,
        },
    )
    return edges[0]
