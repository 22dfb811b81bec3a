"""
Application errors for clean tool-call error handling.

ConfigurationError is fatal at startup. Everything else is raised per tool call:
the dispatcher logs it and re-raises so the single call fails while the server
keeps serving.
"""


class RagServerError(Exception):
    """Base class for errors raised by the tool server."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ConfigurationError(RagServerError):
    """Raised when required configuration is missing or invalid; prevents startup."""

    def __init__(self, message: str, missing: list[str] | None = None) -> None:
        self.missing = list(missing or [])
        super().__init__(message)


class TransportError(RagServerError):
    """Raised when the upstream call cannot complete (network failure, unreadable body)."""


class UpstreamStatusError(RagServerError):
    """Raised when the upstream endpoint answers with a non-success status."""

    def __init__(self, status_code: int, status_text: str) -> None:
        self.status_code = status_code
        self.status_text = status_text
        super().__init__(f"LlamaCloud API error: {status_code} {status_text}")


class MissingArgumentsError(RagServerError):
    """Raised when a tool call carries no arguments, or lacks a required one."""

    def __init__(self, tool_name: str, missing: list[str] | None = None) -> None:
        self.tool_name = tool_name
        self.missing = list(missing or [])
        if self.missing:
            message = f"Missing required arguments for tool {tool_name}: {', '.join(self.missing)}"
        else:
            message = f"No arguments provided for tool {tool_name}"
        super().__init__(message)


class UnknownToolError(RagServerError):
    """Raised when a tool name matches no catalog entry."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown tool: {name}")
