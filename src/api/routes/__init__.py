"""Rotas HTTP da API.

Responsabilidades:
- Definir endpoints HTTP (execução de fluxo, health)
- Validação inicial de request
- Delegação para o ConversationRunner
- Respostas HTTP apropriadas

Estrutura:
- routes/flows/: POST /flows/step
- routes/health/: health checks e readiness

Agregação:
- router.py: registra todos os routers no app principal
"""

from __future__ import annotations

from api.routes.router import create_api_router

__all__ = ["create_api_router"]
