"""
MCP Task Manager CLI

Usage:
    mcp-tasks serve [--host HOST] [--port PORT] [--reload]
    mcp-tasks chat [--url URL]     # interactive chat against a running server
    mcp-tasks demo [--url URL]     # manifest -> create -> list -> mark complete
"""

import argparse
import asyncio
import json
import sys
from typing import Any, Callable, Optional

import httpx

from mcp_tasks.clients.http import HTTPClientError, TaskManagerClient
from mcp_tasks.core.config import get_settings

EXIT_COMMAND = "exit"
DEMO_TASK_TITLE = "Finish MCP workshop"


def _dump(value: Any) -> str:
    return json.dumps(value, indent=2)


# =============================================================================
# serve
# =============================================================================


def run_serve(host: str, port: int, reload: bool) -> int:
    """Run the API with uvicorn."""
    import uvicorn

    uvicorn.run("mcp_tasks.main:app", host=host, port=port, reload=reload)
    return 0


# =============================================================================
# chat
# =============================================================================


async def run_chat(
    client: TaskManagerClient,
    input_fn: Callable[[str], str] = input,
    output_fn: Callable[[str], None] = print,
) -> int:
    """
    Interactive chat loop.

    The transcript returned by each turn is sent back with the next one, so
    the server stays stateless. Typing "exit" ends the session.
    """
    messages: list[dict[str, Any]] = []

    while True:
        try:
            user_input = input_fn("You: ")
        except EOFError:
            break

        if user_input.strip().lower() == EXIT_COMMAND:
            break
        if not user_input.strip():
            continue

        try:
            result = await client.chat(user_input, messages)
        except HTTPClientError as e:
            output_fn(f"Error: {e}")
            continue

        messages = result["messages"]
        output_fn(f"Agent: {result['message'].get('content') or ''}")

    output_fn("Goodbye!")
    return 0


# =============================================================================
# demo
# =============================================================================


async def run_demo(
    client: TaskManagerClient, output_fn: Callable[[str], None] = print
) -> int:
    """Discover tools, create a task, list tasks, then complete the task."""
    manifest = await client.get_manifest()
    output_fn(f"Discovered tools: {[tool['name'] for tool in manifest.get('tools', [])]}")

    created = await client.call_tool("create-task", {"title": DEMO_TASK_TITLE})
    output_fn(f"Created task:\n{_dump(created)}")

    tasks = await client.call_tool("list-tasks")
    output_fn(f"Current tasks:\n{_dump(tasks)}")

    marked = await client.call_tool("mark-complete", {"id": str(created["task"]["id"])})
    output_fn(f"Marked complete:\n{_dump(marked)}")
    return 0


# =============================================================================
# Entry Point
# =============================================================================


def create_parser() -> argparse.ArgumentParser:
    settings = get_settings()

    parser = argparse.ArgumentParser(
        prog="mcp-tasks",
        description="MCP Task Manager server and clients",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default=settings.host, help=f"Bind host (default: {settings.host})")
    serve.add_argument(
        "--port", type=int, default=settings.port, help=f"Bind port (default: {settings.port})"
    )
    serve.add_argument("--reload", action="store_true", help="Enable hot-reload")

    for name, help_text in (
        ("chat", "Chat with the agent through a running server"),
        ("demo", "Exercise the task tools against a running server"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument(
            "--url",
            default=settings.server_url,
            help=f"Server base URL (default: {settings.server_url})",
        )

    return parser


async def _run_client_command(args: argparse.Namespace) -> int:
    async with TaskManagerClient(args.url.rstrip("/")) as client:
        if args.command == "chat":
            return await run_chat(client)
        return await run_demo(client)


def main(argv: Optional[list[str]] = None) -> int:
    args = create_parser().parse_args(argv)

    if args.command == "serve":
        return run_serve(args.host, args.port, args.reload)

    try:
        return asyncio.run(_run_client_command(args))
    except HTTPClientError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except httpx.HTTPError as e:
        print(f"Error: cannot reach {args.url}: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    sys.exit(main())
