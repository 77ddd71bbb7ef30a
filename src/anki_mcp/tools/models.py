"""Note model MCP tools."""

import json
from typing import Any

from anki_mcp.client import AnkiConnectClient
from anki_mcp.tools.base import ToolDefinition, object_schema


async def list_models(client: AnkiConnectClient, arguments: dict[str, Any]) -> str:
    names = await client.model_names()
    return f"Available note models: {', '.join(names)}"


async def get_model(client: AnkiConnectClient, arguments: dict[str, Any]) -> str:
    """Fetch a note model's fields and card templates by name."""
    model_name = arguments["modelName"]
    models = await client.find_models_by_name([model_name])
    return f"Model definition for {model_name}:\n{json.dumps(models, indent=2, ensure_ascii=False)}"


MODEL_TOOLS = (
    ToolDefinition(
        name="listModels",
        description="List the note model types available in the collection",
        input_schema=object_schema(),
        handler=list_models,
    ),
    ToolDefinition(
        name="getModel",
        description="Get the fields and card templates of a note model",
        input_schema=object_schema(
            {
                "modelName": {
                    "type": "string",
                    "description": "Name of the note model to look up",
                },
            },
            required=["modelName"],
        ),
        handler=get_model,
    ),
)
