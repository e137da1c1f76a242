"""Immutable report query builder.

Every ``set_*`` call returns a new QueryBuilder; the receiver is never
modified, so a partially configured builder can be reused as a template:

    base = QueryBuilder().set_profile("12345").set_metrics("visits")
    by_browser = base.set_dimensions("browser")
    by_country = base.set_dimensions("country")
"""

from datetime import date
from enum import Enum
from typing import Any, Dict, Optional, Union

from .filters import FilterExpressionBuilder, FilterSpec
from .naming import to_wire_name

DYNAMIC_SEGMENT_MARKER = "dynamic::"


class SortDirection(str, Enum):
    ASCENDING = "asc"
    DESCENDING = "desc"


class QueryBuilder:
    """Builds the parameters of a Core Reporting API query."""

    __slots__ = ("_params",)

    def __init__(self, params: Optional[Dict[str, str]] = None):
        self._params: Dict[str, str] = dict(params or {})

    @property
    def params(self) -> Dict[str, str]:
        """A copy of the accumulated query parameters."""
        return dict(self._params)

    def set_profile(self, profile_id: Union[str, int]) -> "QueryBuilder":
        """Sets the profile (view) id the report is based on."""
        return self._clone_and_set({"ids": to_wire_name(str(profile_id))})

    def set_metrics(self, *names: str) -> "QueryBuilder":
        """Sets the metrics for a query.

        Google Analytics requires at least one metric per query and caps the
        number of metrics; neither limit is checked here.
        """
        return self._clone_and_set({"metrics": ",".join(to_wire_name(n) for n in names)})

    def set_dimensions(self, *names: str) -> "QueryBuilder":
        """Sets the dimensions for a query. A query may have none."""
        return self._clone_and_set({"dimensions": ",".join(to_wire_name(n) for n in names)})

    def set_date_range(self, start_date: date, end_date: date) -> "QueryBuilder":
        """Sets the start and end date of the report.

        Ordering is validated by the API, not here.
        """
        return self._clone_and_set(
            {
                "start-date": start_date.strftime("%Y-%m-%d"),
                "end-date": end_date.strftime("%Y-%m-%d"),
            }
        )

    def set_start_index(self, index: int) -> "QueryBuilder":
        return self._clone_and_set({"start-index": _non_negative("start_index", index)})

    def set_max_results(self, count: int) -> "QueryBuilder":
        """Sets the maximum number of rows; Google Analytics has its own cap."""
        return self._clone_and_set({"max-results": _non_negative("max_results", count)})

    def set_filters(self, spec: FilterSpec) -> "QueryBuilder":
        """Filters the result set.

        Args:
            spec: Callable receiving a FilterExpressionBuilder, or a sequence
                of ``(operation, name, value)`` descriptors. Operations are
                eql, not_eql, contains, not_contains, gt, gte, lt, lte,
                match and not_match.

        Example:
            query.set_filters(lambda f: f.eql("browser", "Chrome").gte("visits", 3))
        """
        return self._clone_and_set({"filters": FilterExpressionBuilder().build(spec)})

    def set_segment(self, spec: FilterSpec) -> "QueryBuilder":
        """Uses a dynamic segment described the same way as filters.

        Named (saved) segments are not supported.
        """
        return self._clone_and_set(
            {"segment": DYNAMIC_SEGMENT_MARKER + FilterExpressionBuilder().build(spec)}
        )

    def set_sort(
        self, column: str, direction: Union[SortDirection, str] = SortDirection.ASCENDING
    ) -> "QueryBuilder":
        """Sorts the result set by a column, ascending or descending."""
        name = to_wire_name(column)
        if SortDirection(direction) is SortDirection.DESCENDING:
            name = f"-{name}"
        return self._clone_and_set({"sort": name})

    def retrieve(self, executor: Any) -> Any:
        """Runs the query through ``executor`` and returns its raw response.

        ``executor`` is anything with an ``execute(parameters)`` method, usually
        the ReportsApi returned by ``AnalyticsClient.discovered_api``.
        """
        return executor.execute(self.params)

    def _clone_and_set(self, changes: Dict[str, str]) -> "QueryBuilder":
        params = dict(self._params)
        params.update(changes)
        return QueryBuilder(params)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, QueryBuilder):
            return NotImplemented
        return self._params == other._params

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"QueryBuilder({self._params!r})"


def _non_negative(name: str, value: int) -> str:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    if value < 0:
        raise ValueError(f"{name} must be a non-negative integer, got {value}")
    return str(value)
