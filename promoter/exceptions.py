"""
Custom exceptions for the Promoter API client.

Validation errors are raised before any request is sent. HTTP and transport
errors are raised after the API (or the network) has answered.
"""

from typing import Optional


class PromoterError(Exception):
    """Base class for every error raised by the promoter package."""
    pass


class InvalidSortOptionError(PromoterError, ValueError):
    """
    Raised when the sort value is not one of the supported options.

    Example:
        >>> client.list_consultants(sort="price")
        InvalidSortOptionError: Invalid option for sort supplied: 'price'
    """
    pass


class InvalidFilterOptionError(PromoterError, ValueError):
    """Raised when a filter key or value is outside the supported set."""
    pass


class InvalidStatusError(PromoterError, ValueError):
    """
    Raised when a status change target is not an integer or not settable.

    Busy and in-chat are assigned by the platform and are rejected too.
    """
    pass


class InvalidCredentialsError(PromoterError):
    """Raised when the API answers with HTTP 401."""
    pass


class UnexpectedResponseError(PromoterError):
    """
    Raised for any other non-success status, transport fault or malformed body.

    Attributes:
        status_code: HTTP status of the response, None for transport faults
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code
