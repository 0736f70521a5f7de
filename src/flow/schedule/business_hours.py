"""Predicado de horário de atendimento.

O horário é avaliado no fuso da organização: o bloco pode definir o
próprio timezone, senão vale o padrão do motor. Dias da semana usam as
chaves do editor (segunda ... domingo); nomes em inglês também são
aceitos.
"""

from __future__ import annotations

from datetime import datetime
from zoneinfo import ZoneInfo

from flow.graph.configs import BusinessHoursConfig, TimeRange

# datetime.weekday(): 0 = segunda
WEEKDAY_KEYS: tuple[str, ...] = (
    "segunda",
    "terca",
    "quarta",
    "quinta",
    "sexta",
    "sabado",
    "domingo",
)

_WEEKDAY_ALIASES: dict[str, str] = {
    "terça": "terca",
    "sábado": "sabado",
    "monday": "segunda",
    "tuesday": "terca",
    "wednesday": "quarta",
    "thursday": "quinta",
    "friday": "sexta",
    "saturday": "sabado",
    "sunday": "domingo",
}


def canonical_weekday(name: str) -> str:
    normalized = name.strip().lower()
    return _WEEKDAY_ALIASES.get(normalized, normalized)


def local_clock(now: datetime, timezone: str) -> tuple[str, int]:
    """Converte instante em (dia da semana, minutos desde meia-noite) no fuso.

    Instantes sem tzinfo são tratados como já estando no fuso local.
    """
    zone = ZoneInfo(timezone)
    local = now.replace(tzinfo=zone) if now.tzinfo is None else now.astimezone(zone)
    return WEEKDAY_KEYS[local.weekday()], local.hour * 60 + local.minute


def is_open_day(weekdays: dict[str, bool], weekday: str) -> bool:
    return any(
        flag is True and canonical_weekday(day) == weekday
        for day, flag in weekdays.items()
    )


def in_any_range(minutes: int, ranges: list[TimeRange]) -> bool:
    """Intervalos fechados nas duas pontas."""
    return any(r.start_minutes <= minutes <= r.end_minutes for r in ranges)


def is_within_business_hours(
    config: BusinessHoursConfig,
    now: datetime,
    default_timezone: str,
) -> bool:
    """Verifica se o instante está dentro do horário de atendimento.

    Args:
        config: Dias e intervalos do bloco
        now: Instante atual (fornecido pelo Clock)
        default_timezone: Fuso usado quando o bloco não define um

    Returns:
        True se o dia está marcado como aberto e o horário cai em algum intervalo
    """
    weekday, minutes = local_clock(now, config.timezone or default_timezone)
    return is_open_day(config.weekdays, weekday) and in_any_range(minutes, config.time_ranges)
