"""
Chat Router - Chat Relay Endpoint

POST /chat forwards a conversation turn to the model provider and lets the
model invoke the task tools once before answering.

Errors are translated by the application's exception handlers (see
mcp_tasks.api.errors): missing credential -> 503, provider failures ->
upstream status clamped to 400-599, timeouts and malformed tool arguments ->
500. The body is always {"error": "..."}.
"""

import logging

from fastapi import APIRouter, Depends

from mcp_tasks.api.deps import get_chat_orchestrator
from mcp_tasks.models.requests import ChatRequest
from mcp_tasks.models.responses import ChatResponse, ErrorResponse
from mcp_tasks.services.chat import ChatOrchestrator

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Chat"])


@router.post(
    "/chat",
    response_model=ChatResponse,
    response_model_exclude_none=True,
    responses={
        500: {"model": ErrorResponse},
        503: {"model": ErrorResponse},
    },
)
async def chat(
    request: ChatRequest,
    orchestrator: ChatOrchestrator = Depends(get_chat_orchestrator),
) -> ChatResponse:
    """
    Run one chat turn.

    Args:
        request: The new user message plus the transcript so far.
        orchestrator: Injected chat orchestrator.

    Returns:
        ChatResponse with the final assistant message and the updated
        transcript, which the caller sends back on the next turn.
    """
    logger.debug(f"Chat turn with {len(request.messages)} prior messages")
    result = await orchestrator.run_turn(request.message, request.messages)
    return ChatResponse(message=result.message, messages=result.messages)
