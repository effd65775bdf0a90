"""
Deterministic upstream client for tests and offline runs.

Answers requests from a fixed table of canned responses, keyed by full URL,
without any network access. Every request is recorded so tests can assert
on the exact sequence of fetches.
"""

import json
import logging
from typing import Any, Dict, Iterable, List, Optional

from ..core.exceptions import FetchError
from ..core.upstream import FetchRequest, FetchResponse, UpstreamClient


logger = logging.getLogger(__name__)


class StaticUpstreamClient(UpstreamClient):
    """
    Upstream client returning canned responses.

    Features:
    - Responses registered per URL (bodies given as text or JSON-able data)
    - Error simulation for specific URLs
    - Request history for assertions
    """

    def __init__(
        self,
        responses: Optional[Dict[str, Any]] = None,
        error_urls: Optional[Iterable[str]] = None,
    ):
        """
        Initialize the static client.

        Args:
            responses: URL -> FetchResponse, or a body (str, or data encoded
                as JSON) returned with status 200
            error_urls: URLs that fail with a simulated 500
        """
        self.responses: Dict[str, FetchResponse] = {}
        for url, response in (responses or {}).items():
            self.add(url, response)
        self.error_urls = set(error_urls or [])
        self.request_history: List[FetchRequest] = []

    def add(
        self,
        url: str,
        body: Any,
        status_code: int = 200,
        headers: Optional[Dict[str, str]] = None,
    ) -> None:
        """Register the response for a URL."""
        if isinstance(body, FetchResponse):
            self.responses[url] = body
            return
        body_text = body if isinstance(body, str) else json.dumps(body)
        self.responses[url] = FetchResponse(
            status_code=status_code,
            body_text=body_text,
            headers=dict(headers or {"Content-Type": "application/json"}),
            duration_ms=0,
        )

    def fetch(self, request: FetchRequest) -> FetchResponse:
        """
        Answer a request from the response table.

        Raises:
            FetchError: For simulated errors, unknown URLs and non-2xx
                registered responses
        """
        self.request_history.append(request)

        if request.url in self.error_urls:
            logger.debug(f"Simulating error for: {request.url}")
            raise FetchError(
                f"Simulated error for {request.url}", status_code=500, url=request.url
            )

        response = self.responses.get(request.url)
        if response is None:
            logger.debug(f"No canned response for: {request.url}")
            raise FetchError(
                f"Resource not found: {request.url}", status_code=404, url=request.url
            )

        if not 200 <= response.status_code < 300:
            raise FetchError(
                f"{request.method} {request.url} returned HTTP {response.status_code}",
                status_code=response.status_code,
                url=request.url,
            )

        return response

    @property
    def requested_urls(self) -> List[str]:
        return [request.url for request in self.request_history]

    def get_name(self) -> str:
        return "static"

    def reset(self) -> None:
        """Clear the request history."""
        self.request_history.clear()
