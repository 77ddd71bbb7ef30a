"""Note creation MCP tools.

Both tools create durable notes in the collection; every other tool is
read-only.
"""

from typing import Any

from anki_mcp.client import AnkiConnectClient
from anki_mcp.tools.base import ToolDefinition, object_schema

NOTE_PROPERTIES: dict[str, Any] = {
    "deckName": {
        "type": "string",
        "description": "Name of the deck to add the note to",
    },
    "modelName": {
        "type": "string",
        "description": "Name of the note model/type to use",
    },
    "fields": {
        "type": "object",
        "description": "Field values for the note model being used",
    },
    "tags": {
        "type": "array",
        "items": {"type": "string"},
        "description": "Tags to apply to the note",
    },
}
NOTE_REQUIRED = ["deckName", "modelName", "fields"]


async def add_note(client: AnkiConnectClient, arguments: dict[str, Any]) -> str:
    # The arguments already have AnkiConnect's note shape
    note_id = await client.add_note(arguments)
    return f"Created note with id {note_id}"


async def add_notes(client: AnkiConnectClient, arguments: dict[str, Any]) -> str:
    note_ids = await client.add_notes(arguments["notes"])
    # AnkiConnect reports notes it could not create as null
    rendered = ", ".join("null" if note_id is None else str(note_id) for note_id in note_ids)
    return f"Created notes with ids: {rendered}"


NOTE_TOOLS = (
    ToolDefinition(
        name="addNote",
        description="Create a note in a deck",
        input_schema=object_schema(NOTE_PROPERTIES, required=NOTE_REQUIRED),
        handler=add_note,
    ),
    ToolDefinition(
        name="addNotes",
        description="Create several notes at once",
        input_schema=object_schema(
            {
                "notes": {
                    "type": "array",
                    "items": object_schema(NOTE_PROPERTIES, required=NOTE_REQUIRED),
                    "description": "Notes to create, each shaped like addNote's arguments",
                },
            },
            required=["notes"],
        ),
        handler=add_notes,
    ),
)
