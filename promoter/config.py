"""
Configuration for applications embedding the Promoter API client.

Values come from the process environment, optionally seeded from a .env file:

    PROMOTER_API_TOKEN     promoter bearer token (required)
    PROMOTER_API_ENDPOINT  API base URL, production by default
    LOG_LEVEL              DEBUG, INFO, WARNING or ERROR (INFO by default)

Usage:
    from promoter.config import create_promoter_client

    with create_promoter_client() as client:
        consultants = client.list_consultants()
"""

import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from promoter.client import PromoterClient
from promoter.models import DEFAULT_ENDPOINT

TOKEN_ENV = "PROMOTER_API_TOKEN"
ENDPOINT_ENV = "PROMOTER_API_ENDPOINT"
LOG_LEVEL_ENV = "LOG_LEVEL"


class PromoterSettings(BaseModel):
    """Settings needed to build a PromoterClient."""

    api_token: str = Field(..., description="Promoter bearer token")
    endpoint: str = Field(default=DEFAULT_ENDPOINT, description="API base URL")
    log_level: str = Field(default="INFO", description="Minimum log level")

    @classmethod
    def from_env(cls) -> "PromoterSettings":
        """
        Build settings from the environment (and .env, if present).

        Raises:
            ValueError: PROMOTER_API_TOKEN is not set
        """
        load_dotenv()

        api_token = os.getenv(TOKEN_ENV, "").strip()
        if not api_token:
            raise ValueError(f"{TOKEN_ENV} not set")

        return cls(
            api_token=api_token,
            endpoint=os.getenv(ENDPOINT_ENV) or DEFAULT_ENDPOINT,
            log_level=os.getenv(LOG_LEVEL_ENV, "INFO").upper(),
        )


def create_promoter_client(settings: Optional[PromoterSettings] = None) -> PromoterClient:
    """
    Create a PromoterClient.

    Args:
        settings: Explicit settings. Read from the environment when omitted.

    Returns:
        A client owning its own HTTP connection pool
    """
    if settings is None:
        settings = PromoterSettings.from_env()

    return PromoterClient(token=settings.api_token, endpoint=settings.endpoint)
