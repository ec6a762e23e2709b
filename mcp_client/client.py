"""MCP client wrapper for communicating with the counter MCP server."""

import sys
from contextlib import AsyncExitStack
from pathlib import Path
from typing import Any, Dict, List, Optional

from mcp import ClientSession, StdioServerParameters, types
from mcp.client.stdio import stdio_client

PROJECT_ROOT = Path(__file__).parent.parent


class CounterMCPClient:
    """Client for communicating with the counter MCP server over stdio."""

    def __init__(self, server_params: Optional[StdioServerParameters] = None):
        """Initialize MCP client.

        Args:
            server_params: How to launch the server. If None, runs ``mcp_server.counter_server``
                with the current interpreter from the project root.
        """
        self.session: Optional[ClientSession] = None
        self.server_info: Optional[types.InitializeResult] = None
        self._exit_stack: Optional[AsyncExitStack] = None

        if server_params is None:
            server_params = StdioServerParameters(
                command=sys.executable,
                args=["-m", "mcp_server.counter_server"],
                cwd=str(PROJECT_ROOT),
            )

        self.server_params = server_params

    async def connect(self) -> types.InitializeResult:
        """Start the server process and perform the initialize handshake."""
        if self.session is not None:
            raise RuntimeError("Client is already connected")

        stack = AsyncExitStack()
        try:
            read_stream, write_stream = await stack.enter_async_context(stdio_client(self.server_params))
            session = await stack.enter_async_context(ClientSession(read_stream, write_stream))
            self.server_info = await session.initialize()
        except BaseException:
            await stack.aclose()
            raise

        self._exit_stack = stack
        self.session = session
        return self.server_info

    async def list_tools(self) -> List[types.Tool]:
        """Return the tools advertised by the server."""
        session = self._require_session()
        result = await session.list_tools()
        return result.tools

    async def call_tool(self, tool_name: str, arguments: Optional[Dict[str, Any]] = None) -> str:
        """Call an MCP tool and return its text result.

        Args:
            tool_name: Name of the tool to call
            arguments: Tool arguments; the counter tools take none

        Returns:
            Text of the first content item

        Raises:
            RuntimeError: If client is not connected
            McpError: If the server answers with a JSON-RPC error
            ValueError: If the result carries no text
        """
        session = self._require_session()
        result = await session.call_tool(tool_name, arguments or {})

        if result.isError:
            raise ValueError(f"Tool '{tool_name}' failed: {result.content}")

        for item in result.content:
            if isinstance(item, types.TextContent):
                return item.text

        raise ValueError(f"Tool '{tool_name}' returned no text content")

    async def increment(self) -> int:
        """Increment the counter and return the new value."""
        return await self._call_counter_tool("increment")

    async def decrement(self) -> int:
        """Decrement the counter and return the new value."""
        return await self._call_counter_tool("decrement")

    async def get_counter(self) -> int:
        """Return the current counter value."""
        return await self._call_counter_tool("get_counter")

    async def _call_counter_tool(self, tool_name: str) -> int:
        text = await self.call_tool(tool_name)
        try:
            return int(text)
        except ValueError:
            raise ValueError(f"Tool '{tool_name}' returned a non-integer result: {text!r}")

    def _require_session(self) -> ClientSession:
        if self.session is None:
            raise RuntimeError("Client is not connected. Call connect() first.")
        return self.session

    async def close(self):
        """Close the MCP connection and stop the server process."""
        if self._exit_stack is not None:
            await self._exit_stack.aclose()
        self._exit_stack = None
        self.session = None

    async def __aenter__(self):
        """Async context manager entry."""
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()
