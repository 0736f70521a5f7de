"""Interpretação da resposta do usuário em blocos de escolha.

Ordem de resolução (primeira que casar vence):
    1. Botão interativo `btn_<N>` com 0 <= N < len(opções)
    2. Texto igual a uma opção (sem diferenciar maiúsculas)
    3. Número ordinal a partir de 1 ("2" casa com a segunda opção)
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Final

from flow.graph.configs import DecisionConfig

_BUTTON_PATTERN = re.compile(r"^btn_(\d+)$")
_LEADING_INT = re.compile(r"^[+-]?[0-9]+")
_ORDINAL = re.compile(r"^[0-9]+$")

AFFIRMATIVE_HANDLE = "sim"
NEGATIVE_HANDLE = "nao"
MIN_RATING = 1
MAX_RATING = 5


class _Unmatched(Enum):
    UNMATCHED = "unmatched"

    def __repr__(self) -> str:
        return "UNMATCHED"


UNMATCHED: Final = _Unmatched.UNMATCHED
"""Sentinela para resposta que não corresponde a nenhuma opção."""


def normalize_input(text: str | None) -> str:
    """Remove espaços das pontas e converte para minúsculas."""
    return (text or "").strip().lower()


def match_option(text: str | None, options: list[str]) -> int | _Unmatched:
    """Retorna o índice da opção escolhida ou UNMATCHED."""
    normalized = normalize_input(text)
    if not normalized or not options:
        return UNMATCHED

    button = _BUTTON_PATTERN.match(normalized)
    if button is not None:
        index = int(button.group(1))
        if 0 <= index < len(options):
            return index

    for index, option in enumerate(options):
        if normalized == option.strip().lower():
            return index

    if _ORDINAL.match(normalized):
        ordinal = int(normalized)
        if 1 <= ordinal <= len(options):
            return ordinal - 1

    return UNMATCHED


def option_handle(index: int) -> str:
    return f"opcao_{index}"


def decision_labels(config: DecisionConfig) -> list[str]:
    """Rótulos fixos [afirmativo, negativo] de um bloco de decisão."""
    return [config.affirmative_label, config.negative_label]


def decision_handle(index: int) -> str:
    return AFFIRMATIVE_HANDLE if index == 0 else NEGATIVE_HANDLE


def format_options_prompt(prompt: str, options: list[str]) -> str:
    """Pergunta seguida da lista numerada de opções."""
    lines = [prompt]
    lines.extend(f"{position}. {option}" for position, option in enumerate(options, start=1))
    return "\n".join(lines)


def parse_rating(text: str | None) -> int | None:
    """Extrai nota 1..5 do início do texto ("4 estrelas" -> 4)."""
    match = _LEADING_INT.match((text or "").strip())
    if match is None:
        return None
    rating = int(match.group(0))
    if MIN_RATING <= rating <= MAX_RATING:
        return rating
    return None
