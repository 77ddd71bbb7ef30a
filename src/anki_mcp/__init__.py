"""Anki MCP server: AnkiConnect decks, note models and notes over the Model Context Protocol."""

__version__ = "0.1.0"
