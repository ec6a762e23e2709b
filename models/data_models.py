"""Core data models for the counter MCP server."""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from mcp import types


def empty_input_schema() -> Dict[str, Any]:
    """JSON Schema for a tool that accepts no arguments."""
    return {"type": "object", "properties": {}, "additionalProperties": False}


@dataclass(frozen=True)
class ToolDescriptor:
    """Static metadata for one discoverable tool."""

    name: str
    description: str
    input_schema: Dict[str, Any] = field(default_factory=empty_input_schema)

    def to_mcp_tool(self) -> types.Tool:
        """Convert to the SDK's wire model."""
        return types.Tool(
            name=self.name,
            description=self.description,
            inputSchema=self.input_schema,
        )


@dataclass(frozen=True)
class ServerIdentity:
    """Server metadata advertised during the initialize handshake.

    Built once at startup and never mutated.
    """

    name: str
    version: str
    protocol_version: str = types.LATEST_PROTOCOL_VERSION
    instructions: Optional[str] = None

    def __str__(self) -> str:
        return f"{self.name} {self.version} (MCP {self.protocol_version})"
