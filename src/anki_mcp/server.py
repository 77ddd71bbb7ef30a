"""Anki MCP Server: exposes an Anki collection to AI assistants via AnkiConnect."""

import argparse
import asyncio
import sys
from typing import Any

import structlog
from mcp import types
from mcp.server import Server
from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.server.stdio import stdio_server
from pydantic import AnyUrl, ValidationError

from anki_mcp import __version__
from anki_mcp.client import AnkiConnectClient
from anki_mcp.config import SERVER_NAME, Settings, configure_logging, get_settings
from anki_mcp.resources import ResourceCatalog
from anki_mcp.tools import ToolDispatcher

logger = structlog.get_logger(__name__)


def build_server(
    catalog: ResourceCatalog,
    dispatcher: ToolDispatcher,
    name: str = SERVER_NAME,
) -> Server:
    """Create an MCP server whose handlers delegate to the given components."""
    server = Server(name, version=__version__)

    @server.list_resources()
    async def list_resources() -> list[types.Resource]:
        entries = await catalog.list_resources()
        return [
            types.Resource(
                uri=entry.uri,  # type: ignore[arg-type]
                name=entry.name,
                mimeType=entry.mime_type,
            )
            for entry in entries
        ]

    @server.list_resource_templates()
    async def list_resource_templates() -> list[types.ResourceTemplate]:
        return [
            types.ResourceTemplate(
                uriTemplate=template.uri_template,
                name=template.name,
                description=template.description,
                mimeType=template.mime_type,
            )
            for template in catalog.list_templates()
        ]

    @server.read_resource()
    async def read_resource(uri: AnyUrl) -> list[ReadResourceContents]:
        content = await catalog.read(str(uri))
        return [ReadResourceContents(content=content.text, mime_type=content.mime_type)]

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return [
            types.Tool(
                name=tool.name,
                description=tool.description,
                inputSchema=tool.input_schema,
            )
            for tool in dispatcher.list_tools()
        ]

    # Arguments are checked by the dispatcher so every missing field is reported
    @server.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: dict[str, Any] | None) -> list[types.TextContent]:
        try:
            text = await dispatcher.call(name, arguments)
        except Exception as exc:
            logger.warning("tool_error", tool=name, error=str(exc))
            raise
        return [types.TextContent(type="text", text=text)]

    return server


def create_server(settings: Settings) -> tuple[Server, AnkiConnectClient]:
    """Create and configure the MCP server."""
    client = AnkiConnectClient(
        settings.ANKI_CONNECT_URL,
        version=settings.ANKI_CONNECT_VERSION,
        timeout=settings.ANKI_CONNECT_TIMEOUT,
    )
    catalog = ResourceCatalog(client, scheme=settings.RESOURCE_SCHEME)
    dispatcher = ToolDispatcher(client)
    return build_server(catalog, dispatcher, name=SERVER_NAME), client


async def run(settings: Settings) -> None:
    """Run the MCP server over stdio until the client disconnects."""
    server, client = create_server(settings)
    logger.info("server_starting", anki_connect_url=settings.ANKI_CONNECT_URL)
    try:
        async with stdio_server() as (read_stream, write_stream):
            await server.run(
                read_stream, write_stream, server.create_initialization_options()
            )
    finally:
        await client.close()


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="anki-mcp", description=__doc__)
    parser.add_argument("--url", help="AnkiConnect endpoint (overrides ANKI_CONNECT_URL)")
    parser.add_argument("--log-level", help="Log level (overrides LOG_LEVEL)")
    return parser.parse_args(argv)


def load_settings(args: argparse.Namespace) -> Settings:
    overrides: dict[str, Any] = {}
    if args.url:
        overrides["ANKI_CONNECT_URL"] = args.url
    if args.log_level:
        overrides["LOG_LEVEL"] = args.log_level
    if not overrides:
        return get_settings()
    return Settings(**overrides)


def main(argv: list[str] | None = None) -> None:
    """Entry point for the anki-mcp command."""
    args = parse_args(argv)
    try:
        settings = load_settings(args)
    except ValidationError as exc:
        print(f"Error: invalid configuration\n{exc}", file=sys.stderr)
        sys.exit(1)

    configure_logging(settings.ENVIRONMENT, settings.LOG_LEVEL)

    try:
        asyncio.run(run(settings))
    except KeyboardInterrupt:
        pass
    except Exception:
        logger.exception("server_failed")
        sys.exit(1)


if __name__ == "__main__":
    main()
