"""Tool table for the counter server and routing of tools/list and tools/call."""

import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional, Tuple

from mcp import types
from mcp.shared.exceptions import McpError

from mcp_server.counter_store import CounterOverflowError, CounterStore
from models.data_models import ToolDescriptor

logger = logging.getLogger(__name__)

INCREMENT = ToolDescriptor(name="increment", description="Tool that increments a counter")
DECREMENT = ToolDescriptor(name="decrement", description="Tool that decrements a counter")
GET_COUNTER = ToolDescriptor(
    name="get_counter", description="Tool that returns the current value of the counter"
)

TOOL_DESCRIPTORS: Tuple[ToolDescriptor, ...] = (INCREMENT, DECREMENT, GET_COUNTER)


class ToolDispatcher:
    """Maps tool names to counter operations."""

    def __init__(self, store: CounterStore):
        self.store = store
        self._handlers: Dict[str, Tuple[ToolDescriptor, Callable[[], Awaitable[int]]]] = {
            INCREMENT.name: (INCREMENT, store.increment),
            DECREMENT.name: (DECREMENT, store.decrement),
            GET_COUNTER.name: (GET_COUNTER, store.read),
        }
        self._tools = [descriptor.to_mcp_tool() for descriptor in TOOL_DESCRIPTORS]

    @property
    def tool_names(self) -> List[str]:
        return [descriptor.name for descriptor in TOOL_DESCRIPTORS]

    def list_tools(self, cursor: Optional[str] = None) -> Tuple[List[types.Tool], Optional[str]]:
        """Return every tool in a single page.

        Args:
            cursor: Pagination cursor. Accepted for protocol compatibility and ignored.

        Returns:
            Tuple of (tools, next_cursor); next_cursor is always None
        """
        return list(self._tools), None

    async def call_tool(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> types.CallToolResult:
        """Run a tool and return its result as decimal text.

        Args:
            name: Tool name
            arguments: Tool arguments. None and {} are both accepted; anything else is rejected.

        Returns:
            Result holding one text content item

        Raises:
            McpError: METHOD_NOT_FOUND for unknown tools, INVALID_PARAMS for unexpected
                arguments, INTERNAL_ERROR when the counter refuses to overflow
        """
        entry = self._handlers.get(name)
        if entry is None:
            logger.warning(f"Rejected call to unknown tool '{name}'")
            raise McpError(
                types.ErrorData(
                    code=types.METHOD_NOT_FOUND,
                    message=f"Unknown tool: {name}",
                    data={"tool": name, "available": self.tool_names},
                )
            )

        if arguments:
            logger.warning(f"Rejected call to '{name}' with unexpected arguments: {sorted(arguments)}")
            raise McpError(
                types.ErrorData(
                    code=types.INVALID_PARAMS,
                    message=f"Tool '{name}' takes no arguments",
                    data={"tool": name, "unexpected": sorted(arguments)},
                )
            )

        _, handler = entry
        try:
            value = await handler()
        except CounterOverflowError as e:
            logger.warning(f"Tool '{name}' refused: {e}")
            raise McpError(types.ErrorData(code=types.INTERNAL_ERROR, message=str(e)))

        logger.debug(f"Tool '{name}' -> {value}")
        return types.CallToolResult(
            content=[types.TextContent(type="text", text=str(value))],
            isError=False,
        )
