"""google-analytics-feeds - Google Analytics Core Reporting API client."""

__version__ = "0.1.0"

from google_analytics_feeds.errors import (
    AuthenticationError,
    DataIntegrityError,
    GoogleAnalyticsFeedsError,
    HttpError,
    RetrievalError,
)
from google_analytics_feeds.filters import FILTER_OPERATORS, FilterExpressionBuilder
from google_analytics_feeds.naming import to_identifier, to_wire_name
from google_analytics_feeds.parser import ResponseParser, RowHandler, RowParser
from google_analytics_feeds.query import QueryBuilder, SortDirection
from google_analytics_feeds.session import Session
from google_analytics_feeds.transport import ColumnHeader, ReportResponse

__all__ = [
    # Session
    "Session",
    # Queries
    "QueryBuilder",
    "SortDirection",
    "FilterExpressionBuilder",
    "FILTER_OPERATORS",
    # Parsing
    "ResponseParser",
    "RowHandler",
    "RowParser",
    "ColumnHeader",
    "ReportResponse",
    # Naming
    "to_identifier",
    "to_wire_name",
    # Errors
    "AuthenticationError",
    "DataIntegrityError",
    "GoogleAnalyticsFeedsError",
    "HttpError",
    "RetrievalError",
]
