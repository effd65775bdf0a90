"""
Sequential multi-page fetch driver.

The total page count comes from the first response's ``Link`` header, e.g.::

    <https://api.github.com/repositories/1/stargazers?page=2&per_page=100>; rel="next",
    <https://api.github.com/repositories/1/stargazers?page=7&per_page=100>; rel="last"
"""

import logging
import re
from typing import Any, Callable, List, Optional

from ..core.exceptions import FetchError, ParseError
from ..core.models import ConnectorRequest
from ..core.upstream import FetchResponse


logger = logging.getLogger(__name__)


LAST_PAGE_PATTERN = re.compile(r'[?&]page=([0-9]+)&per_page=[0-9]+[^>]*>;\s*rel="last"')

PageFetcher = Callable[[ConnectorRequest, int], FetchResponse]


class PaginationDriver:
    """
    Drives a page-numbered fetch loop and concatenates the records.

    Page 1 is fetched once to learn the page count, then pages 1..N are
    fetched in order, so page 1 is requested twice. Any failure abandons the
    whole call; partial results are never returned.
    """

    def __init__(
        self,
        fetch_page: PageFetcher,
        sample_data: Optional[List[Any]] = None,
        link_header: str = "Link",
    ):
        """
        Initialize the driver.

        Args:
            fetch_page: Callable ``(request, page_number) -> FetchResponse``;
                raises FetchError on transport or HTTP failure
            sample_data: Canned records returned in sample mode
            link_header: Name of the header carrying the last-page link
        """
        self.fetch_page = fetch_page
        self.sample_data = list(sample_data or [])
        self.link_header = link_header

    def number_of_pages(self, response: FetchResponse) -> int:
        """Read the last page number from a response; 1 when absent."""
        link = response.header(self.link_header)
        if not link:
            return 1

        match = LAST_PAGE_PATTERN.search(link)
        if match is None:
            logger.debug(f"No rel=\"last\" entry in {self.link_header} header: {link}")
            return 1

        return max(int(match.group(1)), 1)

    def fetch_all_pages(self, request: ConnectorRequest) -> List[Any]:
        """
        Fetch every page and concatenate their records in page order.

        Args:
            request: The originating request; ``sample_mode`` short-circuits
                to the canned sample data

        Returns:
            All records, page order then in-page order

        Raises:
            FetchError: If any page cannot be fetched (user-facing)
            ParseError: If any page body is not a JSON list (user-facing)
        """
        if request.sample_mode:
            logger.debug(f"Sample mode: returning {len(self.sample_data)} canned records")
            return list(self.sample_data)

        total_pages = self.number_of_pages(self._fetch(request, 1))
        logger.info(f"Fetching {total_pages} page(s)")

        records: List[Any] = []
        for page_number in range(1, total_pages + 1):
            response = self._fetch(request, page_number)
            records.extend(self._parse(response, page_number))

        logger.info(f"Fetched {len(records)} records from {total_pages} page(s)")
        return records

    def _fetch(self, request: ConnectorRequest, page_number: int) -> FetchResponse:
        try:
            return self.fetch_page(request, page_number)
        except FetchError as e:
            logger.warning(
                f"Fetching page {page_number} failed: {e}",
                extra={"page": page_number},
            )
            raise FetchError(
                "Unable to fetch data from source.",
                status_code=e.status_code,
                url=e.url,
                user_facing=True,
            ) from e

    def _parse(self, response: FetchResponse, page_number: int) -> List[Any]:
        try:
            page = response.json()
        except ParseError as e:
            logger.warning(
                f"Parsing page {page_number} failed: {e}",
                extra={"page": page_number},
            )
            raise ParseError(
                "Unable to parse data fetched from source.", user_facing=True
            ) from e

        if not isinstance(page, list):
            raise ParseError(
                "Unable to parse data fetched from source.", user_facing=True
            )
        return page
