"""Relógio do sistema (UTC)."""

from __future__ import annotations

from datetime import UTC, datetime

from app.protocols.clock import ClockProtocol


class SystemClock(ClockProtocol):
    """Instante atual em UTC; o fuso local é aplicado por quem consome."""

    def now(self) -> datetime:
        return datetime.now(UTC)
