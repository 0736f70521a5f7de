"""Notificadores de transferência para humano."""

from app.infra.handoff.logging_notifier import LoggingHandoffNotifier
from app.infra.handoff.webhook_notifier import WebhookHandoffNotifier, build_handoff_payload

__all__ = [
    "LoggingHandoffNotifier",
    "WebhookHandoffNotifier",
    "build_handoff_payload",
]
