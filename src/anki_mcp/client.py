"""AnkiConnect API client."""

from typing import Any

import httpx
import structlog

from anki_mcp.exceptions import (
    BackendActionError,
    BackendConnectionError,
    BackendResponseError,
)

logger = structlog.get_logger(__name__)

DEFAULT_URL = "http://localhost:8765"
API_VERSION = 6


class AnkiConnectClient:
    """HTTP client for the AnkiConnect JSON API.

    Every call is a single POST of ``{action, version, params}`` to one
    endpoint; the response envelope ``{result, error}`` is unwrapped and
    ``error`` is turned into an exception.
    """

    def __init__(
        self,
        url: str = DEFAULT_URL,
        version: int = API_VERSION,
        timeout: float | None = None,
    ) -> None:
        self.url = url
        self.version = version
        # No keep-alive: each call's connection is released after its round trip
        self._client = httpx.AsyncClient(
            timeout=timeout,
            limits=httpx.Limits(max_keepalive_connections=0),
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def invoke(self, action: str, params: dict[str, Any] | None = None) -> Any:
        """Call an AnkiConnect action and return its ``result``."""
        envelope = {"action": action, "version": self.version, "params": params or {}}
        logger.debug("anki_request", action=action)

        try:
            response = await self._client.post(self.url, json=envelope)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            logger.warning("anki_request_failed", action=action, kind="connection", error=str(exc))
            raise BackendConnectionError(action, str(exc) or type(exc).__name__) from exc

        try:
            payload = response.json()
        except ValueError as exc:
            logger.warning("anki_request_failed", action=action, kind="response", error=str(exc))
            raise BackendResponseError(action, "response body is not JSON") from exc

        if not isinstance(payload, dict):
            raise BackendResponseError(action, f"expected a JSON object, got {type(payload).__name__}")

        # Success responses carry "error": null
        error = payload.get("error")
        if error:
            logger.warning("anki_request_failed", action=action, kind="action", error=str(error))
            raise BackendActionError(action, str(error))

        if "result" not in payload:
            raise BackendResponseError(action, "missing 'result' field")

        return payload["result"]

    # --- Deck actions ---

    async def deck_names(self) -> list[str]:
        """Get the names of all decks."""
        return await self.invoke("deckNames")

    async def deck_names_and_ids(self) -> dict[str, int]:
        """Get a mapping of deck name to deck id."""
        return await self.invoke("deckNamesAndIds")

    # --- Model actions ---

    async def model_names(self) -> list[str]:
        """Get the names of all note models."""
        return await self.invoke("modelNames")

    async def model_names_and_ids(self) -> dict[str, int]:
        """Get a mapping of note model name to model id."""
        return await self.invoke("modelNamesAndIds")

    async def find_models_by_id(self, model_ids: list[int]) -> list[dict]:
        """Get full note model definitions by id."""
        return await self.invoke("findModelsById", {"modelIds": model_ids})

    async def find_models_by_name(self, model_names: list[str]) -> list[dict]:
        """Get full note model definitions by name."""
        return await self.invoke("findModelsByName", {"modelNames": model_names})

    # --- Note actions ---

    async def add_note(self, note: dict[str, Any]) -> int:
        """Create a note and return its id."""
        return await self.invoke("addNote", {"note": note})

    async def add_notes(self, notes: list[dict[str, Any]]) -> list[int | None]:
        """Create several notes; failed notes come back as ``None``."""
        note_ids = await self.invoke("addNotes", {"notes": notes})
        if not isinstance(note_ids, list):
            raise BackendResponseError("addNotes", "expected a list of note ids")
        return note_ids
