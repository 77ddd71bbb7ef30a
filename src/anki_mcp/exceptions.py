"""
Exception hierarchy for the Anki MCP bridge.

Failures fall into three groups:

- backend failures raised by the gateway (transport, malformed response,
  or an error reported by AnkiConnect itself),
- routing failures (unknown tool, unrecognized resource URI),
- argument failures (missing tool arguments, malformed URI segments).

None of them are handled locally; they propagate to the MCP layer, which
turns them into client-visible error responses.
"""


class AnkiMcpError(Exception):
    """Base exception for all bridge errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class BackendError(AnkiMcpError):
    """A call to AnkiConnect failed."""

    def __init__(self, action: str, message: str) -> None:
        self.action = action
        super().__init__(message)


class BackendConnectionError(BackendError):
    """AnkiConnect could not be reached or answered with an HTTP error."""

    def __init__(self, action: str, reason: str) -> None:
        self.reason = reason
        super().__init__(
            action,
            f"AnkiConnect request '{action}' failed: {reason}. Is Anki running with AnkiConnect?",
        )


class BackendResponseError(BackendError):
    """AnkiConnect answered with something that is not a result envelope."""

    def __init__(self, action: str, reason: str) -> None:
        self.reason = reason
        super().__init__(action, f"AnkiConnect request '{action}' returned a malformed response: {reason}")


class BackendActionError(BackendError):
    """AnkiConnect processed the request and reported an error."""

    def __init__(self, action: str, error: str) -> None:
        self.error = error
        super().__init__(action, f"AnkiConnect action '{action}' failed: {error}")


class RoutingError(AnkiMcpError):
    """The request does not address anything this server knows about."""


class UnknownToolError(RoutingError):
    """No tool is registered under the requested name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown tool: {name}")


class ResourceNotFoundError(RoutingError):
    """The resource URI has an unrecognized scheme or category."""

    def __init__(self, uri: str) -> None:
        self.uri = uri
        super().__init__(f"Resource not found: {uri}")


class ArgumentError(AnkiMcpError):
    """The request is routable but its arguments are unusable."""


class InvalidArgumentsError(ArgumentError):
    """Required tool arguments are missing."""

    def __init__(self, tool: str, missing: list[str]) -> None:
        self.tool = tool
        self.missing = missing
        super().__init__(f"Invalid arguments for tool '{tool}': missing required {', '.join(missing)}")


class InvalidResourceUriError(ArgumentError):
    """A resource URI matched a category but could not be parsed."""

    def __init__(self, uri: str, reason: str) -> None:
        self.uri = uri
        self.reason = reason
        super().__init__(f"Invalid resource URI '{uri}': {reason}")
