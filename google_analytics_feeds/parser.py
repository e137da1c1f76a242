"""Report response parsing.

Rows are pushed to a SAX-style handler one at a time instead of being
collected, so large result sets never have to be held in memory by the
caller.
"""

import inspect
import logging
from typing import Any, Callable, Dict, List, Sequence

from .errors import DataIntegrityError
from .naming import to_identifier

logger = logging.getLogger(__name__)


class RowHandler:
    """A SAX-style row handler.

    Subclass and override ``row`` to receive parsed rows. By default each
    row is ignored.
    """

    def row(self, row: Dict[str, str]) -> None:
        """Called once for every parsed row, in response order."""


class _CallableRowHandler(RowHandler):
    def __init__(self, callback: Callable[[Dict[str, str]], Any]):
        self._callback = callback

    def row(self, row: Dict[str, str]) -> None:
        self._callback(row)


def resolve_handler(handler: Any) -> RowHandler:
    """Normalize the accepted handler forms into something with ``row``.

    Args:
        handler: class with a ``row`` method (instantiated here), any object
            with a ``row`` method, a plain callable, or None for a no-op handler

    Raises:
        TypeError: if ``handler`` is none of the above
    """
    if handler is None:
        return RowHandler()
    if inspect.isclass(handler):
        if not callable(getattr(handler, "row", None)):
            raise TypeError(f"Row handler class {handler.__name__} has no row() method")
        return handler()
    if callable(getattr(handler, "row", None)):
        return handler
    if callable(handler):
        return _CallableRowHandler(handler)
    raise TypeError(
        f"Row handler must be a RowHandler, an object with a row() method or a callable, "
        f"got {type(handler).__name__}"
    )


class RowParser:
    """Turns positional row values into records keyed by identifier."""

    def __init__(self, header: Sequence[str]):
        self._header: List[str] = [to_identifier(name) for name in header]

    @property
    def header(self) -> List[str]:
        return list(self._header)

    def parse(self, row: Sequence[str]) -> Dict[str, str]:
        if len(row) != len(self._header):
            raise DataIntegrityError(
                f"Row has {len(row)} values but the report has {len(self._header)} "
                f"columns ({', '.join(self._header)})"
            )
        return dict(zip(self._header, row))


class ResponseParser:
    """Parses report rows and hands each one to a row handler."""

    def __init__(self, handler: Any = None):
        self._handler = resolve_handler(handler)

    def parse_rows(self, response: Any) -> None:
        """Parse rows from a response and dispatch them in order.

        Args:
            response: Object exposing ``column_headers`` (each with a ``name``)
                and ``rows`` (sequences of string values)

        Raises:
            DataIntegrityError: if a row's length differs from the header's
        """
        row_parser = RowParser([column.name for column in response.column_headers])
        count = 0
        for row in response.rows or []:
            self._handler.row(row_parser.parse(row))
            count += 1
        logger.debug(f"[GA Parser] Dispatched {count} rows ({', '.join(row_parser.header)})")
