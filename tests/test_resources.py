"""Tests for deck and note model resources."""

import asyncio
import json

import pytest

from anki_mcp.client import AnkiConnectClient
from anki_mcp.exceptions import (
    ArgumentError,
    BackendActionError,
    InvalidResourceUriError,
    ResourceNotFoundError,
    RoutingError,
)
from anki_mcp.resources import ResourceCatalog, ResourceEntry, ResourceUri
from tests.conftest import FakeAnkiConnect


class TestResourceUri:
    """Test suite for ResourceUri parsing."""

    def test_parse_deck(self) -> None:
        uri = ResourceUri.parse("anki://decks/42")
        assert uri.category == "decks"
        assert uri.entity_id == 42

    def test_parse_model(self) -> None:
        uri = ResourceUri.parse("anki://models/1607392319")
        assert uri.category == "models"
        assert uri.entity_id == 1607392319

    def test_parse_without_scheme(self) -> None:
        assert ResourceUri.parse("decks/42") == ResourceUri(category="decks", entity_id=42)

    def test_to_string(self) -> None:
        assert str(ResourceUri(category="models", entity_id=7)) == "anki://models/7"

    def test_custom_scheme(self) -> None:
        uri = ResourceUri.parse("flashcards://decks/1", scheme="flashcards")
        assert str(uri) == "flashcards://decks/1"

    @pytest.mark.parametrize("raw", ["bogus://x", "anki://cards/1", "anki://decks", "notes/3", ""])
    def test_unrecognized_is_not_found(self, raw: str) -> None:
        with pytest.raises(ResourceNotFoundError):
            ResourceUri.parse(raw)

    @pytest.mark.parametrize("raw", ["anki://decks/abc", "anki://decks/-1", "anki://models/", "decks/4.2"])
    def test_bad_id_is_invalid(self, raw: str) -> None:
        with pytest.raises(InvalidResourceUriError):
            ResourceUri.parse(raw)

    def test_error_kinds(self) -> None:
        assert issubclass(ResourceNotFoundError, RoutingError)
        assert issubclass(InvalidResourceUriError, ArgumentError)


class TestListResources:
    """Test suite for ResourceCatalog.list_resources."""

    @pytest.mark.asyncio
    async def test_one_entry_per_deck_and_model(
        self, client: AnkiConnectClient, anki: FakeAnkiConnect
    ) -> None:
        anki.results["deckNamesAndIds"] = {"Default": 1, "Spanish": 1651445861967}
        anki.results["modelNamesAndIds"] = {"Basic": 1607392319, "Cloze": 1607392320}

        entries = await ResourceCatalog(client).list_resources()

        assert entries == [
            ResourceEntry(uri="anki://decks/1", name="Default"),
            ResourceEntry(uri="anki://decks/1651445861967", name="Spanish"),
            ResourceEntry(uri="anki://models/1607392319", name="Basic"),
            ResourceEntry(uri="anki://models/1607392320", name="Cloze"),
        ]
        assert sorted(anki.actions) == ["deckNamesAndIds", "modelNamesAndIds"]

    @pytest.mark.asyncio
    async def test_enumerations_run_concurrently(self) -> None:
        """The deck listing only finishes once the model listing has started."""
        model_listing_started = asyncio.Event()

        class GatedClient:
            async def deck_names_and_ids(self) -> dict[str, int]:
                await model_listing_started.wait()
                return {"Default": 1}

            async def model_names_and_ids(self) -> dict[str, int]:
                model_listing_started.set()
                return {"Basic": 2}

        catalog = ResourceCatalog(GatedClient())  # type: ignore[arg-type]
        entries = await asyncio.wait_for(catalog.list_resources(), timeout=1.0)

        assert [entry.uri for entry in entries] == ["anki://decks/1", "anki://models/2"]

    @pytest.mark.asyncio
    async def test_no_duplicate_uris(
        self, client: AnkiConnectClient, anki: FakeAnkiConnect
    ) -> None:
        anki.results["deckNamesAndIds"] = {"Default": 1, "Alias": 1}
        anki.results["modelNamesAndIds"] = {"Basic": 1}

        entries = await ResourceCatalog(client).list_resources()

        uris = [entry.uri for entry in entries]
        assert uris == ["anki://decks/1", "anki://models/1"]

    @pytest.mark.asyncio
    async def test_empty_collection(
        self, client: AnkiConnectClient, anki: FakeAnkiConnect
    ) -> None:
        anki.results["deckNamesAndIds"] = {}
        anki.results["modelNamesAndIds"] = {}

        assert await ResourceCatalog(client).list_resources() == []

    @pytest.mark.asyncio
    async def test_listing_is_not_cached(
        self, client: AnkiConnectClient, anki: FakeAnkiConnect
    ) -> None:
        anki.results["deckNamesAndIds"] = {"Default": 1}
        anki.results["modelNamesAndIds"] = {}
        catalog = ResourceCatalog(client)

        await catalog.list_resources()
        anki.results["deckNamesAndIds"] = {"Default": 1, "New": 2}
        entries = await catalog.list_resources()

        assert [entry.name for entry in entries] == ["Default", "New"]
        assert len(anki.requests) == 4

    @pytest.mark.asyncio
    async def test_backend_failure_propagates(
        self, client: AnkiConnectClient, anki: FakeAnkiConnect
    ) -> None:
        anki.results["deckNamesAndIds"] = {"Default": 1}
        anki.errors["modelNamesAndIds"] = "collection is not available"

        with pytest.raises(BackendActionError, match="collection is not available"):
            await ResourceCatalog(client).list_resources()

    @pytest.mark.asyncio
    async def test_templates(self, client: AnkiConnectClient) -> None:
        templates = ResourceCatalog(client).list_templates()
        assert [t.uri_template for t in templates] == [
            "anki://decks/{deckId}",
            "anki://models/{modelId}",
        ]


class TestReadResource:
    """Test suite for ResourceCatalog.read."""

    @pytest.mark.asyncio
    async def test_read_deck_echoes_id(
        self, client: AnkiConnectClient, anki: FakeAnkiConnect
    ) -> None:
        content = await ResourceCatalog(client).read("decks/42")

        assert content.payload == {"deckId": 42}
        assert json.loads(content.text) == {"deckId": 42}
        assert content.mime_type == "application/json"
        assert anki.requests == []

    @pytest.mark.asyncio
    async def test_read_model(
        self, client: AnkiConnectClient, anki: FakeAnkiConnect
    ) -> None:
        model = {"id": 1607392319, "name": "Basic", "flds": [{"name": "Front"}, {"name": "Back"}]}
        anki.results["findModelsById"] = [model]

        content = await ResourceCatalog(client).read("anki://models/1607392319")

        assert content.uri == "anki://models/1607392319"
        assert json.loads(content.text) == [model]
        assert anki.requests[0]["params"] == {"modelIds": [1607392319]}

    @pytest.mark.asyncio
    async def test_read_unknown_prefix(
        self, client: AnkiConnectClient, anki: FakeAnkiConnect
    ) -> None:
        with pytest.raises(ResourceNotFoundError, match="bogus://x"):
            await ResourceCatalog(client).read("bogus://x")
        assert anki.requests == []

    @pytest.mark.asyncio
    async def test_read_malformed_id(
        self, client: AnkiConnectClient, anki: FakeAnkiConnect
    ) -> None:
        with pytest.raises(InvalidResourceUriError):
            await ResourceCatalog(client).read("anki://models/basic")
        assert anki.requests == []
