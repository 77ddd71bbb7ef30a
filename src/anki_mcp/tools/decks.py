"""Deck-related MCP tools."""

from typing import Any

from anki_mcp.client import AnkiConnectClient
from anki_mcp.tools.base import ToolDefinition, object_schema


async def list_decks(client: AnkiConnectClient, arguments: dict[str, Any]) -> str:
    names = await client.deck_names()
    return f"Available decks: {', '.join(names)}"


DECK_TOOLS = (
    ToolDefinition(
        name="listDecks",
        description="List the decks available in the collection",
        input_schema=object_schema(),
        handler=list_decks,
    ),
)
