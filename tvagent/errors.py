from __future__ import annotations


class ToolError(Exception):
    """Base for errors that cross the tool boundary as an error payload."""

    error_code = "INTERNAL_ERROR"
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ToolError):
    error_code = "INVALID_INPUT"
    status_code = 400


class UnknownToolError(ToolError):
    error_code = "TOOL_NOT_FOUND"
    status_code = 400

    def __init__(self, tool: str):
        super().__init__(f"Tool not found: {tool}")
        self.tool = tool


class ToolUnavailableError(ToolError):
    error_code = "TOOL_UNAVAILABLE"
    status_code = 501


class InternalError(ToolError):
    pass


class ProviderError(Exception):
    """Upstream fetch or parse failure. Absorbed by the candle service."""

    def __init__(self, provider: str, message: str):
        super().__init__(f"{provider}: {message}")
        self.provider = provider
