"""
Promoter — client for the Topconsulenten Promoter API.

Exports:
- PromoterClient: list, invite and change the status of consultants
- models: sort/filter/status enumerations
- exceptions: validation, credential and response errors
"""

from promoter.client import PromoterClient
from promoter.config import PromoterSettings, create_promoter_client
from promoter.exceptions import (
    PromoterError,
    InvalidSortOptionError,
    InvalidFilterOptionError,
    InvalidStatusError,
    InvalidCredentialsError,
    UnexpectedResponseError,
)
from promoter.models import (
    DEFAULT_ENDPOINT,
    SETTABLE_STATUSES,
    ConsultantStatus,
    FilterKey,
    FilterValue,
    SortOption,
)

__all__ = [
    # Client
    "PromoterClient",
    "PromoterSettings",
    "create_promoter_client",
    # Models
    "DEFAULT_ENDPOINT",
    "SETTABLE_STATUSES",
    "ConsultantStatus",
    "FilterKey",
    "FilterValue",
    "SortOption",
    # Errors
    "PromoterError",
    "InvalidSortOptionError",
    "InvalidFilterOptionError",
    "InvalidStatusError",
    "InvalidCredentialsError",
    "UnexpectedResponseError",
]
