"""Exceptions raised by the sevdesk client.

Local problems (configuration, empty documents) and remote failures share the
``SevdeskError`` base so callers can catch everything in one place, or tell
"fix your configuration" apart from "sevdesk rejected the request".
"""

from __future__ import annotations

from typing import List, Optional


class SevdeskError(Exception):
    """Base class for all sevdesk client errors."""


class ConfigurationMissing(SevdeskError):
    """One or more required configuration values are absent or empty."""

    def __init__(self, key: str, keys: Optional[List[str]] = None) -> None:
        self.key = key
        self.keys = list(keys) if keys else [key]
        super().__init__(f"Configuration parameter not found: {', '.join(self.keys)}")


class EmptyLineItems(SevdeskError):
    """A document was requested without any line items."""

    def __init__(self, document: str = "invoice") -> None:
        self.document = document
        super().__init__(f"No {document} items found")


class SevdeskApiError(SevdeskError):
    """Error reported by (or while talking to) the sevdesk API."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        code: Optional[int] = None,
    ) -> None:
        self.message = message
        self.status_code = status_code
        self.code = code
        super().__init__(message)


class RemoteNotFound(SevdeskApiError):
    """The requested object does not exist (sevdesk error code 151)."""


class RemoteUnauthorized(SevdeskApiError):
    """The API token was rejected."""


class RemoteGenericError(SevdeskApiError):
    """sevdesk answered with an error message we don't map further."""


class TransportFailure(SevdeskApiError):
    """Connection problem or an error response we could not classify."""
