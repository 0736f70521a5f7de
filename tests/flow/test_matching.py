"""Testes da interpretação de respostas em blocos de escolha."""

from __future__ import annotations

import pytest

from flow.graph import DecisionConfig
from flow.matching import (
    UNMATCHED,
    decision_handle,
    decision_labels,
    format_options_prompt,
    match_option,
    option_handle,
    parse_rating,
)

OPTIONS = ["Vendas", "Suporte", "Financeiro"]


class TestMatchOption:
    """Testes de match_option."""

    @pytest.mark.parametrize("text", ["1", "vendas", "VENDAS", "  Vendas ", "btn_0"])
    def test_equivalent_inputs_select_same_option(self, text: str) -> None:
        """Ordinal, texto e botão apontam para a mesma opção."""
        assert match_option(text, OPTIONS) == 0

    def test_ordinal_is_one_based(self) -> None:
        assert match_option("3", OPTIONS) == 2

    def test_button_index_is_zero_based(self) -> None:
        assert match_option("btn_2", OPTIONS) == 2

    def test_button_out_of_range_is_unmatched(self) -> None:
        """Botão fora do intervalo não casa com nenhuma opção."""
        assert match_option("btn_7", OPTIONS) is UNMATCHED

    @pytest.mark.parametrize("text", ["0", "4", "-1", "1.0", "talvez", "", None])
    def test_unmatched_inputs(self, text: str | None) -> None:
        assert match_option(text, OPTIONS) is UNMATCHED

    def test_text_wins_over_ordinal(self) -> None:
        """Opção cujo texto é numérico casa antes do ordinal."""
        assert match_option("2", ["10", "2"]) == 1

    def test_empty_options_never_match(self) -> None:
        assert match_option("1", []) is UNMATCHED


class TestDecision:
    """Testes dos rótulos e handles de decisão."""

    def test_default_labels(self) -> None:
        config = DecisionConfig()

        labels = decision_labels(config)

        assert labels == ["Sim", "Não"]
        assert match_option("sim", labels) == 0
        assert match_option("2", labels) == 1

    def test_handles(self) -> None:
        assert decision_handle(0) == "sim"
        assert decision_handle(1) == "nao"

    def test_option_handle(self) -> None:
        assert option_handle(0) == "opcao_0"


class TestFormatOptionsPrompt:
    def test_numbered_list(self) -> None:
        """Pergunta seguida das opções numeradas a partir de 1."""
        assert format_options_prompt("Escolha:", ["A", "B"]) == "Escolha:\n1. A\n2. B"


class TestParseRating:
    """Testes de parse_rating."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [("5", 5), ("1", 1), (" 4 estrelas", 4), ("+3", 3)],
    )
    def test_valid_ratings(self, text: str, expected: int) -> None:
        assert parse_rating(text) == expected

    @pytest.mark.parametrize("text", ["0", "6", "-2", "ótimo", "", None])
    def test_invalid_ratings(self, text: str | None) -> None:
        assert parse_rating(text) is None
