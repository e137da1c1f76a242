"""Shared fixtures for google-analytics-feeds tests."""

import pytest

from google_analytics_feeds.transport import ColumnHeader, ReportResponse


class FakeReportsApi:
    """Records executed parameters and answers with a canned response."""

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def execute(self, parameters):
        self.calls.append(parameters)
        if self.error is not None:
            raise self.error
        return self.response


def make_response(headers, rows):
    return ReportResponse(
        column_headers=[ColumnHeader(name=h) for h in headers],
        rows=rows,
        total_results=len(rows),
    )


@pytest.fixture
def visitor_response():
    return make_response(
        ["ga:visitorType", "ga:sessions"],
        [["New", "12"], ["Returning", "5"]],
    )


@pytest.fixture
def fake_api(visitor_response):
    return FakeReportsApi(response=visitor_response)


@pytest.fixture
def report_factory():
    return make_response
