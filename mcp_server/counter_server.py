"""MCP server exposing a shared counter over stdio.

Three tools are available: ``increment``, ``decrement`` and ``get_counter``.
Each returns the counter value as decimal text.
"""

import asyncio
import logging
import sys
from typing import Optional

from mcp import types
from mcp.server import Server
from mcp.server.stdio import stdio_server
from pydantic import ValidationError

from config.settings import Settings
from mcp_server.counter_store import CounterStore
from mcp_server.dispatcher import ToolDispatcher
from models.data_models import ServerIdentity

logger = logging.getLogger(__name__)

SERVER_INSTRUCTIONS = (
    "This server provide counter tools that can increment, decrement, and retrieve the current "
    "value of a counter. Use the 'increment', 'decrement', and 'get_counter' tools to interact "
    "with the counter."
)


def build_identity(app_settings: Settings) -> ServerIdentity:
    """Compute the static server metadata advertised to clients."""
    return ServerIdentity(
        name=app_settings.server_name,
        version=app_settings.resolved_version,
        protocol_version=types.LATEST_PROTOCOL_VERSION,
        instructions=SERVER_INSTRUCTIONS,
    )


def create_server(dispatcher: ToolDispatcher, identity: ServerIdentity) -> Server:
    """Build a low-level MCP server routing tools/list and tools/call to the dispatcher.

    The handlers are installed directly rather than through the ``call_tool``
    decorator so that an ``McpError`` reaches the client as a JSON-RPC error
    instead of being folded into an ``isError`` tool result.
    """
    server = Server(identity.name, version=identity.version, instructions=identity.instructions)

    async def _list_tools(request: types.ListToolsRequest) -> types.ServerResult:
        cursor = request.params.cursor if request.params is not None else None
        tools, next_cursor = dispatcher.list_tools(cursor)
        return types.ServerResult(types.ListToolsResult(tools=tools, nextCursor=next_cursor))

    async def _call_tool(request: types.CallToolRequest) -> types.ServerResult:
        result = await dispatcher.call_tool(request.params.name, request.params.arguments)
        return types.ServerResult(result)

    server.request_handlers[types.ListToolsRequest] = _list_tools
    server.request_handlers[types.CallToolRequest] = _call_tool
    return server


def create_counter_server(app_settings: Settings, identity: Optional[ServerIdentity] = None) -> Server:
    """Wire a fresh counter store, dispatcher and server from settings."""
    store = CounterStore(bits=app_settings.counter_bits, overflow_policy=app_settings.overflow_policy)
    return create_server(ToolDispatcher(store), identity or build_identity(app_settings))


def configure_logging(level: str) -> None:
    # stdout carries the protocol, so logs must go to stderr
    logging.basicConfig(
        level=getattr(logging, level),
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


async def main(app_settings: Settings):
    """Run the counter server until stdin closes."""
    identity = build_identity(app_settings)
    server = create_counter_server(app_settings, identity)
    logger.info(
        f"Starting {identity} on stdio "
        f"(int{app_settings.counter_bits}, overflow={app_settings.overflow_policy})"
    )

    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())

    logger.info("Transport closed, shutting down")


def run() -> None:
    """Console entry point."""
    try:
        app_settings = Settings()
    except ValidationError as e:
        configure_logging("INFO")
        logger.error(f"✗ Invalid configuration: {e}")
        sys.exit(1)

    configure_logging(app_settings.log_level)
    try:
        asyncio.run(main(app_settings))
    except KeyboardInterrupt:
        logger.info("Interrupted")
    except Exception as e:
        logger.error(f"✗ Counter MCP server failed: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    run()
