"""Core Reporting API transport.

Thin wrapper around google-api-python-client discovery and google-auth
service-account credentials. The rest of the package only relies on
``ReportsApi.execute(parameters)`` returning a ReportResponse.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import google_auth_httplib2
import httplib2
from google.auth import exceptions as auth_exceptions
from googleapiclient import errors as api_errors
from googleapiclient.discovery import build
from googleapiclient.http import set_user_agent

from .errors import AuthenticationError, HttpError, RetrievalError

DEFAULT_TIMEOUT = 360
DEFAULT_APPLICATION_NAME = "python-google-analytics-feeds"

logger = logging.getLogger(__name__)


@dataclass
class ColumnHeader:
    name: str
    column_type: Optional[str] = None
    data_type: Optional[str] = None


@dataclass
class ReportResponse:
    """Tabular result of a report query."""

    column_headers: List[ColumnHeader]
    rows: List[List[str]]
    total_results: int = 0
    items_per_page: Optional[int] = None
    contains_sampled_data: bool = False
    raw: Dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "ReportResponse":
        """Build a response from the API's JSON body.

        The API omits ``rows`` entirely when a report is empty.
        """
        headers = [
            ColumnHeader(
                name=h["name"],
                column_type=h.get("columnType"),
                data_type=h.get("dataType"),
            )
            for h in payload.get("columnHeaders") or []
        ]
        return cls(
            column_headers=headers,
            rows=[list(row) for row in payload.get("rows") or []],
            total_results=int(payload.get("totalResults") or 0),
            items_per_page=payload.get("itemsPerPage"),
            contains_sampled_data=bool(payload.get("containsSampledData", False)),
            raw=payload,
        )


def _to_api_kwargs(parameters: Dict[str, str]) -> Dict[str, str]:
    # Discovery exposes "start-date" as the keyword "start_date".
    return {key.replace("-", "_"): value for key, value in parameters.items()}


class ReportsApi:
    """Executes report queries against a discovered ``analytics`` service."""

    def __init__(self, service: Any):
        self.service = service

    def execute(self, parameters: Dict[str, str]) -> ReportResponse:
        """Run a ``data.ga.get`` query.

        Args:
            parameters: Wire-level query parameters (``ids``, ``start-date``, ...)

        Returns:
            ReportResponse

        Raises:
            HttpError: the API answered with an error status
            RetrievalError: transport or token refresh failure, or a payload
                that is not a report
        """
        logger.debug(f"[GA Transport] Executing report query: {parameters}")
        try:
            request = self.service.data().ga().get(**_to_api_kwargs(parameters))
            payload = request.execute()
        except api_errors.HttpError as e:
            status = getattr(e.resp, "status", None)
            logger.error(f"[GA Transport] Report query failed with HTTP {status}: {e}")
            raise HttpError(f"Report query failed: {e}", status=status) from e
        except (
            api_errors.Error,
            httplib2.HttpLib2Error,
            auth_exceptions.GoogleAuthError,
            OSError,
        ) as e:
            logger.error(f"[GA Transport] Report query failed: {e}")
            raise RetrievalError(f"Report query failed: {e}") from e

        try:
            return ReportResponse.from_payload(payload)
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logger.error(f"[GA Transport] Malformed report payload: {e!r}")
            raise RetrievalError(f"Malformed report payload: {e!r}") from e


class AnalyticsClient:
    """Authorized HTTP client for Google Analytics APIs."""

    def __init__(
        self,
        credentials: Any,
        application_name: str = DEFAULT_APPLICATION_NAME,
        timeout: int = DEFAULT_TIMEOUT,
    ):
        self.credentials = credentials
        self.application_name = application_name
        self.timeout = timeout

    def _http(self) -> httplib2.Http:
        return httplib2.Http(timeout=self.timeout)

    def fetch_access_token(self) -> None:
        """Exchange the signed assertion for an access token.

        Raises:
            AuthenticationError: if the token endpoint rejects the credentials
                or cannot be reached
        """
        try:
            self.credentials.refresh(google_auth_httplib2.Request(self._http()))
        except (auth_exceptions.GoogleAuthError, httplib2.HttpLib2Error, OSError) as e:
            logger.error(f"[GA Transport] Access token request failed: {e}")
            raise AuthenticationError(f"Access token request failed: {e}") from e
        logger.info("[GA Transport] Access token fetched")

    def discovered_api(self, name: str, version: str) -> ReportsApi:
        """Discover an API and wrap it for report execution.

        Raises:
            RetrievalError: if discovery fails
        """
        http = google_auth_httplib2.AuthorizedHttp(self.credentials, http=self._http())
        set_user_agent(http, self.application_name)
        try:
            service = build(name, version, http=http, cache_discovery=False)
        except api_errors.HttpError as e:
            status = getattr(e.resp, "status", None)
            raise HttpError(f"Discovery of {name} {version} failed: {e}", status=status) from e
        except (
            api_errors.Error,
            httplib2.HttpLib2Error,
            auth_exceptions.GoogleAuthError,
            OSError,
        ) as e:
            raise RetrievalError(f"Discovery of {name} {version} failed: {e}") from e
        logger.info(f"[GA Transport] Discovered {name} {version}")
        return ReportsApi(service)
