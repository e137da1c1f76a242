"""Filter expression builder for report filters and dynamic segments.

A filter expression is a list of ``<name><operator><value>`` clauses joined
with ``;`` (logical AND). Expressions are described either with a callable
that receives the builder:

    def spec(f):
        f.eql("browser", "Chrome")
        f.gte("visits", 3)

or with a sequence of ``(operation, name, value)`` descriptors:

    [("eql", "browser", "Chrome"), ("gte", "visits", 3)]

Both forms render ``ga:browser==Chrome;ga:visits>=3``.
"""

from typing import Any, Callable, Iterable, List, Tuple, Union

from .naming import to_wire_name

# Operation name -> Google Analytics operator
FILTER_OPERATORS = {
    "eql": "==",
    "not_eql": "!=",
    "contains": "=@",
    "not_contains": "!@",
    "gt": ">",
    "gte": ">=",
    "lt": "<",
    "lte": "<=",
    "match": "=~",
    "not_match": "!~",
}

CLAUSE_SEPARATOR = ";"

FilterDescriptor = Tuple[str, str, Any]
FilterSpec = Union[Callable[["FilterExpressionBuilder"], Any], Iterable[FilterDescriptor]]


class FilterExpressionBuilder:
    """Builds a single filter expression string.

    Field names are not validated; Google Analytics rejects unknown ones.
    """

    def __init__(self):
        self._filters: List[str] = []

    def build(self, spec: FilterSpec) -> str:
        """Run ``spec`` against this builder and return the joined expression.

        Args:
            spec: Callable taking the builder, or iterable of
                ``(operation, name, value)`` descriptors

        Returns:
            The expression, or an empty string if no clause was added
        """
        self._filters = []
        if callable(spec):
            spec(self)
        else:
            for operation, name, value in spec:
                if operation not in FILTER_OPERATORS:
                    raise ValueError(
                        f"Unknown filter operation '{operation}'. "
                        f"Supported: {', '.join(FILTER_OPERATORS)}"
                    )
                self._filter(name, value, FILTER_OPERATORS[operation])
        return CLAUSE_SEPARATOR.join(self._filters)

    def eql(self, name: str, value: Any) -> "FilterExpressionBuilder":
        return self._filter(name, value, FILTER_OPERATORS["eql"])

    def not_eql(self, name: str, value: Any) -> "FilterExpressionBuilder":
        return self._filter(name, value, FILTER_OPERATORS["not_eql"])

    def contains(self, name: str, value: Any) -> "FilterExpressionBuilder":
        return self._filter(name, value, FILTER_OPERATORS["contains"])

    def not_contains(self, name: str, value: Any) -> "FilterExpressionBuilder":
        return self._filter(name, value, FILTER_OPERATORS["not_contains"])

    def gt(self, name: str, value: Any) -> "FilterExpressionBuilder":
        return self._filter(name, value, FILTER_OPERATORS["gt"])

    def gte(self, name: str, value: Any) -> "FilterExpressionBuilder":
        return self._filter(name, value, FILTER_OPERATORS["gte"])

    def lt(self, name: str, value: Any) -> "FilterExpressionBuilder":
        return self._filter(name, value, FILTER_OPERATORS["lt"])

    def lte(self, name: str, value: Any) -> "FilterExpressionBuilder":
        return self._filter(name, value, FILTER_OPERATORS["lte"])

    def match(self, name: str, value: Any) -> "FilterExpressionBuilder":
        """Regular expression match."""
        return self._filter(name, value, FILTER_OPERATORS["match"])

    def not_match(self, name: str, value: Any) -> "FilterExpressionBuilder":
        return self._filter(name, value, FILTER_OPERATORS["not_match"])

    def _filter(self, name: str, value: Any, operator: str) -> "FilterExpressionBuilder":
        self._filters.append(f"{to_wire_name(name)}{operator}{value}")
        return self
