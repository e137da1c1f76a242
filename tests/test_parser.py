"""Tests for row parsing and handler dispatch."""

import pytest

from google_analytics_feeds.errors import DataIntegrityError
from google_analytics_feeds.parser import (
    ResponseParser,
    RowHandler,
    RowParser,
    resolve_handler,
)


class CollectingHandler(RowHandler):
    def __init__(self):
        self.rows = []

    def row(self, row):
        self.rows.append(row)
        return "ignored"


EXPECTED_ROWS = [
    {"visitor_type": "New", "sessions": "12"},
    {"visitor_type": "Returning", "sessions": "5"},
]


class TestRowParser:
    """Test positional row to record conversion."""

    def test_header_converted_once(self):
        """Header wire names become identifiers."""
        parser = RowParser(["ga:visitorType", "ga:sessions"])
        assert parser.header == ["visitor_type", "sessions"]

    def test_parse(self):
        """Values are keyed by identifier."""
        parser = RowParser(["ga:visitorType", "ga:sessions"])
        assert parser.parse(["New", "12"]) == {"visitor_type": "New", "sessions": "12"}

    def test_short_row_fails(self):
        """Rows shorter than the header raise DataIntegrityError."""
        parser = RowParser(["ga:visitorType", "ga:sessions"])
        with pytest.raises(DataIntegrityError) as exc:
            parser.parse(["New"])
        assert "1 values" in str(exc.value)

    def test_long_row_fails(self):
        """Rows longer than the header raise DataIntegrityError."""
        parser = RowParser(["ga:visitorType"])
        with pytest.raises(DataIntegrityError):
            parser.parse(["New", "12"])


class TestResponseParser:
    """Test dispatch of parsed rows to handlers."""

    def test_dispatches_rows_in_order(self, visitor_response):
        """Handler receives one record per row, in order."""
        handler = CollectingHandler()

        result = ResponseParser(handler).parse_rows(visitor_response)

        assert result is None
        assert handler.rows == EXPECTED_ROWS

    def test_callable_handler(self, visitor_response):
        """Bare callables are accepted as handlers."""
        rows = []
        ResponseParser(rows.append).parse_rows(visitor_response)
        assert rows == EXPECTED_ROWS

    def test_handler_class_is_instantiated(self, visitor_response):
        """RowHandler subclasses are instantiated once."""
        created = []

        class Handler(RowHandler):
            def __init__(self):
                created.append(self)
                self.rows = []

            def row(self, row):
                self.rows.append(row)

        ResponseParser(Handler).parse_rows(visitor_response)

        assert len(created) == 1
        assert created[0].rows == EXPECTED_ROWS

    def test_plain_handler_class_is_instantiated(self, visitor_response):
        """Classes with a row method but no RowHandler base are instantiated too."""
        created = []

        class Plain:
            def __init__(self):
                created.append(self)
                self.rows = []

            def row(self, row):
                self.rows.append(row)

        ResponseParser(Plain).parse_rows(visitor_response)

        assert len(created) == 1
        assert created[0].rows == EXPECTED_ROWS

    def test_duck_typed_handler(self, visitor_response):
        """Any object with a row method is used as is."""
        class Duck:
            def __init__(self):
                self.seen = []

            def row(self, row):
                self.seen.append(row["visitor_type"])

        duck = Duck()
        ResponseParser(duck).parse_rows(visitor_response)
        assert duck.seen == ["New", "Returning"]

    def test_default_handler_does_nothing(self, visitor_response):
        """No handler means rows are parsed and ignored."""
        ResponseParser().parse_rows(visitor_response)

    def test_empty_report(self, report_factory):
        """Reports without rows dispatch nothing."""
        handler = CollectingHandler()
        ResponseParser(handler).parse_rows(report_factory(["ga:visits"], []))
        assert handler.rows == []

    def test_mismatched_row_stops_dispatch(self, report_factory):
        """A malformed row fails without producing a record."""
        handler = CollectingHandler()
        response = report_factory(
            ["ga:visitorType", "ga:sessions"], [["New", "12"], ["Returning"]]
        )

        with pytest.raises(DataIntegrityError):
            ResponseParser(handler).parse_rows(response)

        assert handler.rows == [{"visitor_type": "New", "sessions": "12"}]


class TestResolveHandler:
    """Test normalization of handler forms."""

    def test_none_is_noop_handler(self):
        """None resolves to the default RowHandler."""
        assert isinstance(resolve_handler(None), RowHandler)

    def test_instance_returned_unchanged(self):
        """Handler instances are returned as is."""
        handler = CollectingHandler()
        assert resolve_handler(handler) is handler

    def test_rejects_non_handlers(self):
        """Objects without row that are not callable raise TypeError."""
        with pytest.raises(TypeError):
            resolve_handler(42)

    def test_rejects_class_without_row(self):
        """Classes without a row method raise TypeError up front."""
        class NoRow:
            pass

        with pytest.raises(TypeError) as exc:
            resolve_handler(NoRow)
        assert "NoRow" in str(exc.value)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
