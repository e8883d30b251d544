"""Error taxonomy shared by both integrations.

Every error raised below the tool surface derives from KitchenError so the
dispatch boundary can turn it into a readable tool error.
"""

from __future__ import annotations

from typing import Optional


class KitchenError(Exception):
    """Base class for all integration errors."""

    default_message = "Unexpected integration error."

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)


class ConfigurationError(KitchenError):
    """Required configuration is missing or invalid. Fatal at startup."""


class ValidationError(KitchenError):
    """Caller-supplied input is malformed. Raised before any network call."""


class NotFoundError(KitchenError):
    """A requested product, list or list item had no match."""

    def __init__(self, resource: str, identifier: Optional[str] = None):
        suffix = f' with ID "{identifier}"' if identifier else ""
        super().__init__(f"{resource}{suffix} not found. Please verify and try again.")
        self.resource = resource
        self.identifier = identifier


class HEBError(KitchenError):
    """Generic upstream error from the HEB GraphQL API."""

    default_message = "Unexpected error from HEB API."


class AuthenticationError(HEBError):
    default_message = "Authentication failed. Please update your HEB cookies in the server configuration."


class NetworkError(HEBError):
    default_message = "Unable to connect to HEB API. Please check your internet connection and try again."


class RateLimitError(HEBError):
    default_message = "Rate limit exceeded. Please wait a moment before trying again."


class ScrapeError(KitchenError):
    """A content page could not be retrieved (non-2xx response)."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code
