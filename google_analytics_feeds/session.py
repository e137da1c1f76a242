"""Google Analytics session used to retrieve reports.

Example usage:
    session = Session()
    session.login("reports@project.iam.gserviceaccount.com", "/path/to/key.pem")

    query = (
        QueryBuilder()
        .set_profile("12345")
        .set_metrics("visits")
        .set_dimensions("visitor_type")
        .set_date_range(date(2024, 1, 1), date(2024, 1, 31))
    )
    session.fetch_report(query, lambda row: print(row["visitor_type"], row["visits"]))
"""

import logging
from typing import Any, Optional, Union

from google.auth import crypt
from google.auth import exceptions as auth_exceptions
from google.oauth2 import service_account

from .config import Settings, load_settings
from .errors import AuthenticationError
from .parser import ResponseParser
from .query import QueryBuilder
from .transport import (
    DEFAULT_APPLICATION_NAME,
    DEFAULT_TIMEOUT,
    AnalyticsClient,
    ReportResponse,
    ReportsApi,
)

API_NAME = "analytics"
API_VERSION = "v3"
SCOPES = ["https://www.googleapis.com/auth/analytics.readonly"]
TOKEN_URI = "https://oauth2.googleapis.com/token"

logger = logging.getLogger(__name__)


def _load_credentials(
    service_account_email: str, key_material: Union[str, bytes]
) -> service_account.Credentials:
    """Build signed JWT bearer credentials from a PEM key or a key file."""
    if isinstance(key_material, bytes):
        key_material = key_material.decode("utf-8")

    if "-----BEGIN" not in key_material:
        if key_material.endswith(".json"):
            return service_account.Credentials.from_service_account_file(
                key_material, scopes=SCOPES
            )
        with open(key_material, "r") as f:
            key_material = f.read()

    signer = crypt.RSASigner.from_string(key_material)
    return service_account.Credentials(
        signer, service_account_email, TOKEN_URI, scopes=SCOPES
    )


class Session:
    """A Google Analytics session.

    Authentication and API discovery happen once and are reused by every
    ``fetch_report`` call. A session is not safe for concurrent use.
    """

    def __init__(
        self,
        application_name: str = DEFAULT_APPLICATION_NAME,
        timeout: int = DEFAULT_TIMEOUT,
        api_version: str = API_VERSION,
    ):
        self.application_name = application_name
        self.timeout = timeout
        self.api_version = api_version
        self._client: Optional[AnalyticsClient] = None
        self._analytics: Optional[ReportsApi] = None
        self._authorized = False

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "Session":
        """Create a session and log in with configured credentials.

        Raises:
            AuthenticationError: if no service account or key file is configured
        """
        settings = settings or load_settings()
        if not settings.service_account or not settings.key_file:
            raise AuthenticationError(
                "Missing credentials. Set GA_FEEDS_SERVICE_ACCOUNT and GA_FEEDS_KEY_FILE "
                "or provide google_analytics.service_account and google_analytics.key_file in config."
            )
        session = cls(
            application_name=settings.application_name,
            timeout=settings.timeout,
            api_version=settings.api_version,
        )
        session.login(settings.service_account, settings.key_file)
        return session

    @property
    def authorized(self) -> bool:
        return self._authorized

    def login(
        self, service_account_email: str, key_material: Union[str, bytes]
    ) -> AnalyticsClient:
        """Log in using a service account and its private key.

        Calling it again returns the existing client without reloading the key.

        Args:
            service_account_email: Service account identifier
            key_material: PEM private key, path to a PEM file, or path to a
                JSON key file

        Returns:
            The AnalyticsClient used for all requests of this session

        Raises:
            AuthenticationError: if the key cannot be loaded
        """
        if self._client is not None:
            return self._client

        try:
            credentials = _load_credentials(service_account_email, key_material)
        except (ValueError, OSError, auth_exceptions.GoogleAuthError) as e:
            logger.error(f"[GA Session] Failed to load key for {service_account_email}: {e}")
            raise AuthenticationError(f"Failed to load service account key: {e}") from e

        self._client = AnalyticsClient(
            credentials,
            application_name=self.application_name,
            timeout=self.timeout,
        )
        logger.info(f"[GA Session] Logged in as {service_account_email}")
        return self._client

    def authorize(self) -> None:
        """Fetch an access token for the logged-in service account."""
        if self._client is None:
            raise AuthenticationError("Not logged in. Call login() before fetching reports.")
        self._client.fetch_access_token()
        self._authorized = True

    def discover_api(self) -> ReportsApi:
        if self._analytics is None:
            if self._client is None:
                raise AuthenticationError("Not logged in. Call login() before fetching reports.")
            self._analytics = self._client.discovered_api(API_NAME, self.api_version)
        return self._analytics

    def fetch_report(self, query: QueryBuilder, handler: Any = None) -> ReportResponse:
        """Retrieve a report and push each row to ``handler``.

        Args:
            query: Configured QueryBuilder
            handler: RowHandler subclass or instance, object with a ``row``
                method, or a callable taking one row

        Returns:
            The raw ReportResponse (useful for paging with ``total_results``)

        Raises:
            AuthenticationError: login or token exchange failed
            RetrievalError: the report could not be retrieved
            DataIntegrityError: a row did not match the column headers
        """
        parser = ResponseParser(handler)

        if not self._authorized:
            self.authorize()
        analytics = self.discover_api()

        logger.debug(f"[GA Session] Fetching report: {query.params}")
        response = query.retrieve(analytics)
        parser.parse_rows(response)
        return response
