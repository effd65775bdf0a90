"""
Unit tests for the pagination driver.
"""

import json

import pytest

from datalink.core.exceptions import FetchError, ParseError
from datalink.core.upstream import FetchResponse
from datalink.pagination import PaginationDriver


def link_header(last_page, per_page=100):
    base = "https://api.github.com/repositories/1/stargazers"
    return (
        f'<{base}?page=2&per_page={per_page}>; rel="next", '
        f'<{base}?page={last_page}&per_page={per_page}>; rel="last"'
    )


class FakePages:
    """Serves numbered pages and records the page numbers requested."""

    def __init__(self, pages, headers=None, failing_page=None, bad_page=None):
        self.pages = pages
        self.headers = headers or {}
        self.failing_page = failing_page
        self.bad_page = bad_page
        self.calls = []

    def __call__(self, request, page_number):
        self.calls.append(page_number)
        if page_number == self.failing_page:
            raise FetchError("HTTP 502", status_code=502)
        if page_number == self.bad_page:
            return FetchResponse(status_code=200, body_text="<html>oops", headers=self.headers)
        return FetchResponse(
            status_code=200,
            body_text=json.dumps(self.pages[page_number - 1]),
            headers=self.headers,
        )


class TestNumberOfPages:
    """Tests for reading the last page from the Link header."""

    def test_no_header_means_one_page(self):
        driver = PaginationDriver(FakePages([]))

        assert driver.number_of_pages(FetchResponse(200, "[]", headers={})) == 1

    def test_last_page_parsed(self):
        driver = PaginationDriver(FakePages([]))
        response = FetchResponse(200, "[]", headers={"Link": link_header(7)})

        assert driver.number_of_pages(response) == 7

    def test_header_lookup_ignores_case(self):
        driver = PaginationDriver(FakePages([]))
        response = FetchResponse(200, "[]", headers={"link": link_header(3)})

        assert driver.number_of_pages(response) == 3

    def test_header_without_last_link(self):
        """Test a Link header without rel=last is a single page."""
        driver = PaginationDriver(FakePages([]))
        header = '<https://x/y?page=1&per_page=100>; rel="prev"'

        assert driver.number_of_pages(FetchResponse(200, "[]", headers={"Link": header})) == 1


class TestFetchAllPages:
    """Tests for PaginationDriver.fetch_all_pages."""

    def test_single_page(self, make_request):
        """Test one page is fetched twice and returned once."""
        pages = FakePages([[{"n": 1}, {"n": 2}]])

        records = PaginationDriver(pages).fetch_all_pages(make_request())

        assert records == [{"n": 1}, {"n": 2}]
        assert pages.calls == [1, 1]

    def test_multiple_pages_in_order(self, make_request):
        """Test last-page=N gives N+1 fetches and page-ordered records."""
        pages = FakePages(
            [[{"n": 1}], [{"n": 2}, {"n": 3}], [{"n": 4}]],
            headers={"Link": link_header(3)},
        )

        records = PaginationDriver(pages).fetch_all_pages(make_request())

        assert pages.calls == [1, 1, 2, 3]
        assert records == [{"n": 1}, {"n": 2}, {"n": 3}, {"n": 4}]

    def test_sample_mode_skips_fetching(self, make_request):
        """Test sample mode returns canned data without fetching."""
        pages = FakePages([])
        sample = [{"starred_at": "2017-05-31T12:50:00Z"}]

        records = PaginationDriver(pages, sample_data=sample).fetch_all_pages(
            make_request(sample_mode=True)
        )

        assert records == sample
        assert records is not sample
        assert pages.calls == []

    def test_fetch_failure_aborts(self, make_request):
        """Test a failing page discards everything and is user-facing."""
        pages = FakePages(
            [[{"n": 1}], [{"n": 2}], [{"n": 3}]],
            headers={"Link": link_header(3)},
            failing_page=2,
        )

        with pytest.raises(FetchError) as exc_info:
            PaginationDriver(pages).fetch_all_pages(make_request())

        assert exc_info.value.user_facing
        assert exc_info.value.status_code == 502
        assert exc_info.value.host_message() == "DS_USER:Unable to fetch data from source."
        assert pages.calls == [1, 1, 2]

    def test_first_page_failure(self, make_request):
        pages = FakePages([[{"n": 1}]], failing_page=1)

        with pytest.raises(FetchError):
            PaginationDriver(pages).fetch_all_pages(make_request())

        assert pages.calls == [1]

    def test_parse_failure_is_distinct(self, make_request):
        """Test an unparseable page raises ParseError, not FetchError."""
        pages = FakePages(
            [[{"n": 1}], [{"n": 2}]],
            headers={"Link": link_header(2)},
            bad_page=2,
        )

        with pytest.raises(ParseError) as exc_info:
            PaginationDriver(pages).fetch_all_pages(make_request())

        assert exc_info.value.user_facing
        assert not isinstance(exc_info.value, FetchError)

    def test_non_list_page(self, make_request):
        pages = FakePages([{"message": "Not Found"}])

        with pytest.raises(ParseError):
            PaginationDriver(pages).fetch_all_pages(make_request())
