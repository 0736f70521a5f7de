"""Rotas de execução de fluxos."""

from api.routes.flows.router import router

__all__ = ["router"]
