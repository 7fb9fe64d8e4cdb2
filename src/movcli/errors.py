"""
movcli error types.

Fetch failures (network, decode, no results) all land the session in the
Failed mode; they differ only in the message shown.
"""

from typing import Any, Optional


class MovCLIError(Exception):
    def __init__(self, code: str, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.code = code
        self.details = details


class NetworkError(MovCLIError):
    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__("network_error", f"network error: {message}", details)


class DecodeError(MovCLIError):
    def __init__(self, message: str):
        super().__init__("decode_error", f"could not decode response: {message}")


class NoResultsError(MovCLIError):
    """A well-formed, empty result set. Not a fault."""

    def __init__(self, query: str):
        super().__init__("no_results", f'no results for "{query}"', {"query": query})
        self.query = query


class BrowserLaunchError(MovCLIError):
    def __init__(self, message: str):
        super().__init__("browser_launch_failed", message)


class TerminalError(MovCLIError):
    def __init__(self, message: str):
        super().__init__("terminal_error", message)
