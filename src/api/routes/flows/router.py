"""Endpoint de execução de turno de fluxo.

POST /flows/step recebe o fluxo, a identidade da conversa e a mensagem
do usuário; devolve os segmentos de resposta em ordem de envio. Falhas
do motor (grafo inválido, store indisponível) voltam com status 200 e
`error` preenchido, já que o segmento de erro deve ser entregue ao
usuário.
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request

from api.routes.flows.models import StepRequest, StepResponse
from app.bootstrap import get_runner
from app.observability import reset_correlation_id, set_correlation_id
from flow.runner import ConversationRunner

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/step", response_model=StepResponse)
async def step_flow(
    body: StepRequest,
    request: Request,
    runner: Annotated[ConversationRunner, Depends(get_runner)],
) -> StepResponse:
    """Executa um turno de conversa no fluxo enviado."""
    token = set_correlation_id(request.headers.get("x-correlation-id"))
    try:
        try:
            identity = body.to_identity()
        except ValueError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc

        outcome = await runner.step(body.flow, identity, body.text)
        logger.info(
            "flow_step_request_handled",
            extra={"flow_id": identity.flow_id, "error": outcome.error},
        )
        return StepResponse.from_outcome(outcome)
    finally:
        reset_correlation_id(token)
