"""Deck and note model resources.

Every deck and note model known to Anki is addressable as
``<scheme>://decks/<id>`` or ``<scheme>://models/<id>``. Listings are built
fresh from AnkiConnect on every request; nothing is cached.
"""

from __future__ import annotations

import asyncio
import json
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import structlog

from anki_mcp.exceptions import InvalidResourceUriError, ResourceNotFoundError

if TYPE_CHECKING:
    from typing import Self

    from anki_mcp.client import AnkiConnectClient

logger = structlog.get_logger(__name__)

DEFAULT_SCHEME = "anki"
JSON_MIME_TYPE = "application/json"

DECKS = "decks"
MODELS = "models"
CATEGORIES = (DECKS, MODELS)


@dataclass(frozen=True)
class ResourceUri:
    """Parsed ``scheme://category/id`` resource address."""

    category: str
    entity_id: int
    scheme: str = DEFAULT_SCHEME

    @classmethod
    def parse(cls, uri: str, scheme: str = DEFAULT_SCHEME) -> Self:
        """Parse a resource URI.

        The ``category/id`` shorthand without a scheme is accepted too.

        Raises:
            ResourceNotFoundError: Foreign scheme or unknown category
            InvalidResourceUriError: The id segment is not an unsigned integer
        """
        path = uri
        if "://" in uri:
            uri_scheme, path = uri.split("://", 1)
            if uri_scheme != scheme:
                raise ResourceNotFoundError(uri)

        category, sep, raw_id = path.partition("/")
        if category not in CATEGORIES or not sep:
            raise ResourceNotFoundError(uri)

        if not (raw_id.isascii() and raw_id.isdigit()):
            raise InvalidResourceUriError(uri, f"'{raw_id}' is not an unsigned integer id")

        return cls(category=category, entity_id=int(raw_id), scheme=scheme)

    def __str__(self) -> str:
        return f"{self.scheme}://{self.category}/{self.entity_id}"


@dataclass(frozen=True)
class ResourceEntry:
    """One row of a resource listing."""

    uri: str
    name: str
    mime_type: str = JSON_MIME_TYPE


@dataclass(frozen=True)
class ResourceTemplate:
    """A parameterized resource address advertised to clients."""

    uri_template: str
    name: str
    description: str
    mime_type: str = JSON_MIME_TYPE


@dataclass(frozen=True)
class ResourceContent:
    """The decoded content of a single resource."""

    uri: str
    payload: Any
    mime_type: str = JSON_MIME_TYPE

    @property
    def text(self) -> str:
        return json.dumps(self.payload, indent=2, ensure_ascii=False)


class ResourceCatalog:
    """Lists and resolves deck and note model resources."""

    def __init__(self, client: AnkiConnectClient, scheme: str = DEFAULT_SCHEME) -> None:
        self.client = client
        self.scheme = scheme

    def uri_for(self, category: str, entity_id: int) -> str:
        """Build the resource URI for a deck or note model id."""
        return str(ResourceUri(category=category, entity_id=entity_id, scheme=self.scheme))

    async def list_resources(self) -> list[ResourceEntry]:
        """List every deck and note model, decks first, in AnkiConnect order."""
        decks, models = await asyncio.gather(
            self.client.deck_names_and_ids(),
            self.client.model_names_and_ids(),
        )

        entries: list[ResourceEntry] = []
        seen: set[str] = set()
        for category, names_to_ids in ((DECKS, decks), (MODELS, models)):
            for name, entity_id in names_to_ids.items():
                uri = self.uri_for(category, entity_id)
                if uri in seen:
                    continue
                seen.add(uri)
                entries.append(ResourceEntry(uri=uri, name=name))

        logger.debug("resources_listed", decks=len(decks), models=len(models))
        return entries

    def list_templates(self) -> list[ResourceTemplate]:
        """Describe the parameterized deck and note model URIs."""
        return [
            ResourceTemplate(
                uri_template=f"{self.scheme}://{DECKS}/{{deckId}}",
                name="Deck",
                description="An Anki deck, addressed by its numeric id",
            ),
            ResourceTemplate(
                uri_template=f"{self.scheme}://{MODELS}/{{modelId}}",
                name="Note model",
                description="An Anki note model (fields and card templates), addressed by its numeric id",
            ),
        ]

    async def read(self, uri: str) -> ResourceContent:
        """Resolve a resource URI to its current content."""
        parsed = ResourceUri.parse(uri, scheme=self.scheme)
        logger.info("resource_read", uri=uri)

        if parsed.category == DECKS:
            # AnkiConnect has no single-deck lookup wired in; only the id is echoed
            return ResourceContent(uri=uri, payload={"deckId": parsed.entity_id})

        models = await self.client.find_models_by_id([parsed.entity_id])
        return ResourceContent(uri=uri, payload=models)
