"""
Upstream client interface for fetching data from external sources.
"""

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .exceptions import ParseError


@dataclass
class FetchRequest:
    """
    Request to be sent to an upstream source.

    Attributes:
        url: The URL to fetch
        method: HTTP method (GET, POST, etc.)
        headers: Optional request headers
        body: Optional request body
        params: Optional query parameters
        content_type: Optional Content-Type of the body
    """
    url: str
    method: str = "GET"
    headers: Optional[Dict[str, str]] = None
    body: Optional[str] = None
    params: Optional[Dict[str, Any]] = None
    content_type: Optional[str] = None


@dataclass
class FetchResponse:
    """
    Response from an upstream source.

    Attributes:
        status_code: HTTP status code
        body_text: Raw response body
        headers: Response headers
        duration_ms: Time taken for the request in milliseconds
    """
    status_code: int
    body_text: str
    headers: Optional[Dict[str, str]] = None
    duration_ms: Optional[int] = None

    def header(self, name: str) -> Optional[str]:
        """Look up a response header, ignoring case."""
        if not self.headers:
            return None
        lowered = name.lower()
        for key, value in self.headers.items():
            if key.lower() == lowered:
                return value
        return None

    def json(self) -> Any:
        """
        Decode the body as JSON.

        Raises:
            ParseError: If the body is not valid JSON
        """
        try:
            return json.loads(self.body_text)
        except (TypeError, ValueError) as e:
            raise ParseError(f"Response body is not valid JSON: {e}") from e


class UpstreamClient(ABC):
    """
    Abstract base class for upstream clients.

    Clients perform one request/response exchange with the external source
    and return the raw body; decoding is left to the caller.
    """

    @abstractmethod
    def fetch(self, request: FetchRequest) -> FetchResponse:
        """
        Fetch data from the external source.

        Args:
            request: The request to execute

        Returns:
            FetchResponse with a 2xx status

        Raises:
            FetchError: On transport failure or a non-2xx status
        """
        pass

    @abstractmethod
    def get_name(self) -> str:
        """Return the client name/identifier."""
        pass

    def close(self) -> None:
        """Release any held resources."""
        pass
