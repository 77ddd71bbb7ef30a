"""MCP tools and the dispatcher that routes calls to them."""

from collections.abc import Iterable
from typing import Any

import structlog

from anki_mcp.client import AnkiConnectClient
from anki_mcp.exceptions import InvalidArgumentsError, UnknownToolError
from anki_mcp.tools.base import ToolDefinition
from anki_mcp.tools.decks import DECK_TOOLS
from anki_mcp.tools.models import MODEL_TOOLS
from anki_mcp.tools.notes import NOTE_TOOLS

logger = structlog.get_logger(__name__)

DEFAULT_TOOLS: tuple[ToolDefinition, ...] = (*DECK_TOOLS, *MODEL_TOOLS, *NOTE_TOOLS)

__all__ = ["DEFAULT_TOOLS", "ToolDefinition", "ToolDispatcher"]


class ToolDispatcher:
    """Looks up a tool, checks its required arguments and runs its handler."""

    def __init__(
        self,
        client: AnkiConnectClient,
        tools: Iterable[ToolDefinition] = DEFAULT_TOOLS,
    ) -> None:
        self.client = client
        self._tools = {tool.name: tool for tool in tools}

    def list_tools(self) -> list[ToolDefinition]:
        return list(self._tools.values())

    async def call(self, name: str, arguments: dict[str, Any] | None = None) -> str:
        """Invoke a tool by name and return its text result.

        Raises:
            UnknownToolError: No tool has that name
            InvalidArgumentsError: A required argument is missing; no backend
                call is made
        """
        tool = self._tools.get(name)
        if tool is None:
            raise UnknownToolError(name)

        arguments = arguments or {}
        missing = tool.missing_arguments(arguments)
        if missing:
            raise InvalidArgumentsError(name, missing)

        logger.info("tool_call", tool=name)
        return await tool.handler(self.client, arguments)
