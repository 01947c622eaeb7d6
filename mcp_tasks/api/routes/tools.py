"""
Tools Router - Task Tool Endpoints

Thin HTTP wrappers over the tool dispatcher, one route per manifest tool.
Tools whose manifest entry takes no input are exposed as GET; the rest take
a JSON body via POST.

Status codes:
    200 - handler applied its effect
    400 - missing or invalid input
    404 - no task matched
    500 - task store unusable (exception handler)

The task store does blocking file I/O, so the routes are plain functions
and FastAPI runs them in its threadpool.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from mcp_tasks.api.deps import get_dispatcher
from mcp_tasks.models.requests import ToolInput
from mcp_tasks.models.responses import ErrorResponse, TaskListResponse
from mcp_tasks.tools.dispatcher import FailureKind, ToolDispatcher, ToolOutcome

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tools", tags=["Tools"])

FAILURE_STATUS: dict[FailureKind, int] = {
    FailureKind.INVALID_INPUT: 400,
    FailureKind.NOT_FOUND: 404,
    FailureKind.UNKNOWN_TOOL: 404,
}

_FAILURE_RESPONSES = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def _to_response(outcome: ToolOutcome) -> JSONResponse:
    status_code = 200 if outcome.ok else FAILURE_STATUS[outcome.failure]
    return JSONResponse(status_code=status_code, content=outcome.body)


def _arguments(body: Optional[ToolInput]) -> dict:
    return body.as_arguments() if body is not None else {}


@router.post("/create-task", responses=_FAILURE_RESPONSES)
def create_task(
    body: Optional[ToolInput] = None,
    dispatcher: ToolDispatcher = Depends(get_dispatcher),
) -> JSONResponse:
    """Create a task from {"title": ...}."""
    return _to_response(dispatcher.execute("create-task", _arguments(body)))


@router.get("/list-tasks", response_model=TaskListResponse)
def list_tasks(
    dispatcher: ToolDispatcher = Depends(get_dispatcher),
) -> JSONResponse:
    """List all tasks in store order."""
    return _to_response(dispatcher.execute("list-tasks", {}))


@router.post("/mark-complete", responses=_FAILURE_RESPONSES)
def mark_complete(
    body: Optional[ToolInput] = None,
    dispatcher: ToolDispatcher = Depends(get_dispatcher),
) -> JSONResponse:
    """
    Mark one task done.

    The identifier is read from id, title, name, task or query (first
    present wins). Numeric values match ids; text matches titles.
    """
    return _to_response(dispatcher.execute("mark-complete", _arguments(body)))


@router.post("/update-task", responses=_FAILURE_RESPONSES)
def update_task(
    body: Optional[ToolInput] = None,
    dispatcher: ToolDispatcher = Depends(get_dispatcher),
) -> JSONResponse:
    """Update the title and/or done flag of the task with the given id."""
    return _to_response(dispatcher.execute("update-task", _arguments(body)))
