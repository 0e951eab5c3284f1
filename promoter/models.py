"""
Enumerations and response models for the Promoter API.

Request options (sort, filters, status) are closed sets checked before a
request is sent. Response bodies are parsed with pydantic; consultant records
themselves stay opaque dictionaries.
"""

from enum import Enum, IntEnum
from typing import Any, Dict, FrozenSet, List, Optional

from pydantic import BaseModel, Field


DEFAULT_ENDPOINT = "https://www.topconsulenten.nl"


class SortOption(str, Enum):
    """Sort order accepted by the consultants listing."""
    STATUS = "status"
    RATING = "rating"
    RATE = "rate"


class FilterKey(str, Enum):
    """Filter names accepted by the consultants listing."""
    CHAT = "chat"
    PREMIUM = "premium"


class FilterValue(str, Enum):
    """Filter switch values."""
    ON = "on"
    OFF = "off"


class ConsultantStatus(IntEnum):
    """
    Availability status of a consultant.

    BUSY and IN_CHAT are set by the platform itself and can only be read.
    """
    UNAVAILABLE = 0
    AVAILABLE = 1
    BUSY = 2
    PAUSED = 3
    FAKE_BUSY = 4
    IN_CHAT = 5


# Targets a client may request through the status change endpoint
SETTABLE_STATUSES: FrozenSet[ConsultantStatus] = frozenset({
    ConsultantStatus.AVAILABLE,
    ConsultantStatus.UNAVAILABLE,
    ConsultantStatus.PAUSED,
    ConsultantStatus.FAKE_BUSY,
})


class ConsultantsResponse(BaseModel):
    """Body of GET /api/promoter/consultants."""

    promoted_consultants: List[Dict[str, Any]] = Field(
        ..., description="Consultant records, returned verbatim"
    )


class InviteResponse(BaseModel):
    """Body of POST /api/promoter/consultants/create."""

    # Read by truthiness; the API does not guarantee a strict boolean
    success: Any = Field(default=None, description="Falsy when the invite was refused")
    registration_url: Optional[str] = Field(
        default=None, description="URL a human opens to finish the registration"
    )
