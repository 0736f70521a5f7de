"""Testes da resolução de conexões de saída."""

from __future__ import annotations

import logging

import pytest

from flow.graph import load_flow
from flow.resolver import resolve_edge
from tests.fakes.flow_builders import edge, flow, node


def _graph():
    return load_flow(
        flow(
            "f",
            [
                node("menu", "options", options=["A", "B", "C"]),
                node("a", "end"),
                node("b", "end"),
                node("msg", "message", text="oi"),
                node("leaf", "end"),
            ],
            [
                edge("menu", "a", "opcao_0"),
                edge("menu", "b", "opcao_1"),
                edge("msg", "leaf"),
            ],
        )
    )


class TestResolveEdge:
    """Testes de resolve_edge."""

    def test_exact_handle(self) -> None:
        """Handle com conexão própria é escolhido."""
        assert resolve_edge(_graph(), "menu", "opcao_1").target_node_id == "b"

    def test_fallback_to_first_edge(self, caplog: pytest.LogCaptureFixture) -> None:
        """Handle sem conexão cai na primeira conexão do bloco."""
        with caplog.at_level(logging.INFO):
            chosen = resolve_edge(_graph(), "menu", "opcao_2")

        assert chosen is not None
        assert chosen.target_node_id == "a"
        assert any(getattr(r, "fallback_used", False) for r in caplog.records)

    def test_strict_has_no_fallback(self) -> None:
        assert resolve_edge(_graph(), "menu", "opcao_2", strict=True) is None

    def test_unconditional_edge(self) -> None:
        assert resolve_edge(_graph(), "msg", None).target_node_id == "leaf"

    def test_no_unconditional_edge(self) -> None:
        """Bloco só com conexões condicionais não tem saída incondicional."""
        assert resolve_edge(_graph(), "menu", None) is None

    def test_node_without_edges(self) -> None:
        assert resolve_edge(_graph(), "leaf", "opcao_0") is None
