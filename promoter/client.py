"""
Promoter API client.

Wraps the three promoter endpoints:
- GET  /api/promoter/consultants            — list promoted consultants
- POST /api/promoter/consultants/create     — invite a new consultant
- GET  /api/consultant/status/change/<int>  — change a consultant's status

Sort, filter and status arguments are checked before anything is sent.
HTTP 401 maps to InvalidCredentialsError, every other failure (status,
transport, body) to UnexpectedResponseError. Each call is a single attempt.
"""

from collections.abc import Mapping
from typing import Any, Dict, Iterable, List, Optional, Tuple, Type, TypeVar, Union

import httpx
import structlog
from pydantic import BaseModel

from promoter.exceptions import (
    InvalidCredentialsError,
    InvalidFilterOptionError,
    InvalidSortOptionError,
    InvalidStatusError,
    UnexpectedResponseError,
)
from promoter.models import (
    DEFAULT_ENDPOINT,
    SETTABLE_STATUSES,
    ConsultantsResponse,
    ConsultantStatus,
    FilterKey,
    FilterValue,
    InviteResponse,
    SortOption,
)

logger = structlog.get_logger("api")

CONSULTANTS_PATH = "/api/promoter/consultants"
CREATE_CONSULTANT_PATH = "/api/promoter/consultants/create"
STATUS_CHANGE_PATH = "/api/consultant/status/change/{status}"

FiltersArg = Union[Mapping, Iterable[Tuple[str, str]], None]
ModelT = TypeVar("ModelT", bound=BaseModel)


class PromoterClient:
    """Client for the Promoter API."""

    def __init__(
        self,
        token: str,
        endpoint: str = DEFAULT_ENDPOINT,
        http_client: Optional[httpx.Client] = None,
    ):
        """
        Args:
            token: Promoter bearer token, sent with every promoter request
            endpoint: API base URL (the default is production)
            http_client: Pre-configured httpx client (timeouts, proxies,
                mock transport). Created on demand when omitted.
        """
        self._token = token
        self._endpoint = endpoint.rstrip("/")
        self._owns_http_client = http_client is None
        self._http_client = http_client if http_client is not None else httpx.Client()

    @property
    def endpoint(self) -> str:
        return self._endpoint

    def close(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_http_client:
            self._http_client.close()

    def __enter__(self) -> "PromoterClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def list_consultants(
        self,
        sort: Union[SortOption, str] = SortOption.STATUS,
        filters: FiltersArg = None,
    ) -> List[Dict[str, Any]]:
        """
        Retrieve the promoted consultants.

        Args:
            sort: One of status, rating, rate
            filters: chat/premium switches set to on/off, as a mapping or
                as (key, value) pairs. A repeated key keeps its last value.

        Returns:
            Consultant records exactly as the API returned them

        Raises:
            InvalidSortOptionError: sort is not supported
            InvalidFilterOptionError: a filter key or value is not supported
            InvalidCredentialsError: the API answered 401
            UnexpectedResponseError: any other failure
        """
        query = {"sort": _validate_sort(sort).value}
        query.update(_validate_filters(filters))

        response = self._send("GET", CONSULTANTS_PATH, self._token, params=query)
        _raise_for_status(response)

        parsed = _parse_body(response, ConsultantsResponse)
        logger.info("consultants_listed", count=len(parsed.promoted_consultants), sort=query["sort"])
        return parsed.promoted_consultants

    def create_consultant_invite(self, profile_name: str, rate: int, note: str) -> str:
        """
        Create an invite for a new consultant.

        Arguments are forwarded as-is; the API decides whether they are valid.

        Args:
            profile_name: Profile name for the consultant
            rate: Rate in euro cents
            note: Free-form note

        Returns:
            Registration URL to be opened by a human, or an empty string
            when the API refused the invite without an HTTP error.

        Raises:
            InvalidCredentialsError: the API answered 401
            UnexpectedResponseError: any other failure
        """
        payload = {
            "profile_name": profile_name,
            "rate": rate,
            "note": note,
        }

        response = self._send("POST", CREATE_CONSULTANT_PATH, self._token, json=payload)
        _raise_for_status(response)

        parsed = _parse_body(response, InviteResponse)
        if parsed.success:
            logger.info("consultant_invite_created", profile_name=profile_name)
            return parsed.registration_url or ""

        logger.warning("consultant_invite_refused", profile_name=profile_name)
        return ""

    def change_consultant_status(
        self,
        consultant_token: str,
        new_status: Union[ConsultantStatus, int],
    ) -> bool:
        """
        Change the availability of a consultant.

        This call authenticates as the consultant, not as the promoter.

        Args:
            consultant_token: The consultant's own API key
            new_status: AVAILABLE, UNAVAILABLE, PAUSED or FAKE_BUSY

        Returns:
            True when the API answered with a status in 201..299.
            HTTP 200 and other non-error statuses return False.

        Raises:
            InvalidStatusError: new_status is not an integer or not settable
            InvalidCredentialsError: the API answered 401
            UnexpectedResponseError: 4xx/5xx or a transport fault
        """
        status = _validate_status(new_status)
        path = STATUS_CHANGE_PATH.format(status=int(status))

        response = self._send("GET", path, consultant_token)
        code = response.status_code

        if 200 < code < 300:
            logger.info("consultant_status_changed", status=status.name)
            return True

        if code == 401:
            raise InvalidCredentialsError("Invalid credentials supplied")

        if code >= 400:
            raise UnexpectedResponseError(
                f"The API returned a non-20x status code ({code}): {_detail(response)}",
                status_code=code,
            )

        logger.warning("consultant_status_not_changed", status=status.name, status_code=code)
        return False

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    def _send(self, method: str, path: str, token: str, **kwargs: Any) -> httpx.Response:
        """Send one request, converting transport faults to UnexpectedResponseError."""
        url = f"{self._endpoint}{path}"
        headers = {"Authorization": f"Bearer {token}"}

        logger.debug("api_request", method=method, path=path)
        try:
            response = self._http_client.request(method, url, headers=headers, **kwargs)
        except httpx.HTTPError as e:
            logger.error("api_transport_error", method=method, path=path, error=str(e))
            raise UnexpectedResponseError(str(e)) from e

        if response.status_code >= 300:
            logger.warning(
                "api_unexpected_status",
                method=method,
                path=path,
                status_code=response.status_code,
            )
        return response


# ----------------------------------------------------------------------
# Validation helpers
# ----------------------------------------------------------------------

def _validate_sort(sort: Any) -> SortOption:
    try:
        return SortOption(sort)
    except (TypeError, ValueError):
        raise InvalidSortOptionError(f"Invalid option for sort supplied: {sort!r}") from None


def _validate_filters(filters: FiltersArg) -> Dict[str, str]:
    """Check every filter and return them as query parameters."""
    if not filters:
        return {}

    if isinstance(filters, Mapping):
        items = filters.items()
    else:
        try:
            items = iter(filters)
        except TypeError:
            raise InvalidFilterOptionError(
                f"Filters must be a mapping or (key, value) pairs: {filters!r}"
            ) from None

    query: Dict[str, str] = {}
    for entry in items:
        try:
            key, value = entry
            query[FilterKey(key).value] = FilterValue(value).value
        except (TypeError, ValueError):
            raise InvalidFilterOptionError(
                f"One or more invalid filters passed: {entry!r}"
            ) from None
    return query


def _validate_status(new_status: Any) -> ConsultantStatus:
    # bool is an int subclass but never a meaningful status
    if isinstance(new_status, bool) or not isinstance(new_status, int):
        raise InvalidStatusError(f"The given new-status is invalid: {new_status!r}")

    try:
        status = ConsultantStatus(new_status)
    except ValueError:
        raise InvalidStatusError(f"The given new-status is invalid: {new_status!r}") from None

    if status not in SETTABLE_STATUSES:
        raise InvalidStatusError(f"The given new-status cannot be set: {status.name}")
    return status


# ----------------------------------------------------------------------
# Response helpers
# ----------------------------------------------------------------------

def _detail(response: httpx.Response) -> str:
    return (response.text or "")[:200]


def _raise_for_status(response: httpx.Response) -> None:
    """Only HTTP 200 counts as success for the promoter endpoints."""
    if response.status_code == 401:
        raise InvalidCredentialsError("Invalid credentials supplied")

    if response.status_code != 200:
        raise UnexpectedResponseError(
            f"The API returned a non-200 status code ({response.status_code}): {_detail(response)}",
            status_code=response.status_code,
        )


def _parse_body(response: httpx.Response, model: Type[ModelT]) -> ModelT:
    # json.JSONDecodeError and pydantic.ValidationError are both ValueErrors
    try:
        return model.model_validate(response.json())
    except ValueError as e:
        logger.error("api_malformed_body", model=model.__name__, error=str(e))
        raise UnexpectedResponseError(
            f"Malformed response body: {e}", status_code=response.status_code
        ) from e
