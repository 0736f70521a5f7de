"""Avaliação de horário de atendimento."""

from flow.schedule.business_hours import (
    WEEKDAY_KEYS,
    canonical_weekday,
    is_within_business_hours,
    local_clock,
)

__all__ = ["WEEKDAY_KEYS", "canonical_weekday", "is_within_business_hours", "local_clock"]
