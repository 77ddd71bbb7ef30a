"""Tool definition type shared by the tool modules."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from anki_mcp.client import AnkiConnectClient

ToolHandler = Callable[[AnkiConnectClient, dict[str, Any]], Awaitable[str]]


def object_schema(properties: dict[str, Any] | None = None, required: list[str] | None = None) -> dict[str, Any]:
    """Build a JSON Schema for an object of named arguments."""
    schema: dict[str, Any] = {"type": "object", "properties": properties or {}}
    if required:
        schema["required"] = required
    return schema


@dataclass(frozen=True)
class ToolDefinition:
    """A named operation with its input schema and handler."""

    name: str
    description: str
    input_schema: dict[str, Any]
    handler: ToolHandler

    @property
    def required(self) -> tuple[str, ...]:
        return tuple(self.input_schema.get("required", ()))

    def missing_arguments(self, arguments: dict[str, Any]) -> list[str]:
        """Return the required arguments that are absent or null."""
        return [key for key in self.required if arguments.get(key) is None]
