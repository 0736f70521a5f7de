"""Interpretação de respostas de usuário (botões, texto, ordinais, notas)."""

from flow.matching.matcher import (
    AFFIRMATIVE_HANDLE,
    NEGATIVE_HANDLE,
    UNMATCHED,
    decision_handle,
    decision_labels,
    format_options_prompt,
    match_option,
    normalize_input,
    option_handle,
    parse_rating,
)

__all__ = [
    "AFFIRMATIVE_HANDLE",
    "NEGATIVE_HANDLE",
    "UNMATCHED",
    "decision_handle",
    "decision_labels",
    "format_options_prompt",
    "match_option",
    "normalize_input",
    "option_handle",
    "parse_rating",
]
