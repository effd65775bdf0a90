"""
HTTP upstream client built on requests.
"""

import logging
import time
from typing import Dict, Optional
from urllib.parse import urlencode

import requests

from ..core.exceptions import FetchError
from ..core.upstream import FetchRequest, FetchResponse, UpstreamClient


logger = logging.getLogger(__name__)


RETRYABLE_STATUS_CODES = {429, 500, 502, 503, 504}
SUPPORTED_METHODS = {"GET", "POST", "PUT", "PATCH", "DELETE", "HEAD"}


class HttpUpstreamClient(UpstreamClient):
    """
    Generic HTTP client for upstream sources.

    Supports:
    - Any common HTTP method with custom headers and body
    - Rate limiting
    - Retries with exponential backoff on transport errors and 429/5xx
    """

    def __init__(
        self,
        name: str = "http",
        rate_limit_delay: float = 0.0,
        timeout: int = 30,
        max_retries: int = 3,
        user_agent: Optional[str] = None,
        backoff_base: float = 1.0,
    ):
        """
        Initialize the HTTP client.

        Args:
            name: Client name
            rate_limit_delay: Minimum seconds between requests
            timeout: Request timeout in seconds
            max_retries: Maximum attempts per request
            user_agent: Custom User-Agent header
            backoff_base: Multiplier for the exponential backoff delay
        """
        self.name = name
        self.rate_limit_delay = rate_limit_delay
        self.timeout = timeout
        self.max_retries = max(max_retries, 1)
        self.user_agent = user_agent or "datalink/0.1"
        self.backoff_base = backoff_base
        self.last_request_time = 0.0
        self.session = requests.Session()

    def fetch(self, request: FetchRequest) -> FetchResponse:
        """
        Fetch data via HTTP.

        Args:
            request: The request to execute

        Returns:
            FetchResponse for a 2xx answer

        Raises:
            FetchError: On non-2xx status or after exhausting retries
        """
        method = request.method.upper()
        if method not in SUPPORTED_METHODS:
            raise FetchError(f"Unsupported HTTP method: {request.method}", url=request.url)

        headers = self._prepare_headers(request)

        url = request.url
        if request.params:
            separator = "&" if "?" in url else "?"
            url = f"{url}{separator}{urlencode(request.params)}"

        last_error = None
        last_status = None
        for attempt in range(self.max_retries):
            self._wait_for_rate_limit()
            try:
                start_time = time.time()
                response = self.session.request(
                    method,
                    url,
                    headers=headers,
                    data=request.body,
                    timeout=self.timeout,
                )
                duration_ms = int((time.time() - start_time) * 1000)
            except requests.exceptions.RequestException as e:
                last_error = str(e)
                last_status = None
                logger.warning(
                    f"Request failed (attempt {attempt + 1}/{self.max_retries}): {e}"
                )
            else:
                if 200 <= response.status_code < 300:
                    return FetchResponse(
                        status_code=response.status_code,
                        body_text=response.text,
                        headers=dict(response.headers),
                        duration_ms=duration_ms,
                    )

                last_error = f"HTTP {response.status_code}"
                last_status = response.status_code
                if response.status_code not in RETRYABLE_STATUS_CODES:
                    raise FetchError(
                        f"{method} {url} returned HTTP {response.status_code}",
                        status_code=response.status_code,
                        url=url,
                    )
                logger.warning(
                    f"Retryable HTTP {response.status_code} "
                    f"(attempt {attempt + 1}/{self.max_retries}) for {url}"
                )

            if attempt < self.max_retries - 1:
                time.sleep(self.backoff_base * 2 ** attempt)

        raise FetchError(
            f"Request failed after {self.max_retries} attempts: {last_error}",
            status_code=last_status,
            url=url,
        )

    def _prepare_headers(self, request: FetchRequest) -> Dict[str, str]:
        headers = dict(request.headers or {})
        if "User-Agent" not in headers:
            headers["User-Agent"] = self.user_agent
        if request.content_type and "Content-Type" not in headers:
            headers["Content-Type"] = request.content_type
        return headers

    def _wait_for_rate_limit(self) -> None:
        """Enforce rate limiting between requests."""
        if self.rate_limit_delay > 0:
            elapsed = time.time() - self.last_request_time
            if elapsed < self.rate_limit_delay:
                time.sleep(self.rate_limit_delay - elapsed)
        self.last_request_time = time.time()

    def get_name(self) -> str:
        """Return the client name."""
        return self.name

    def close(self) -> None:
        """Close the session."""
        if self.session:
            self.session.close()
