"""
Upstream clients.
"""

from .http_client import HttpUpstreamClient
from .static_client import StaticUpstreamClient

__all__ = [
    "HttpUpstreamClient",
    "StaticUpstreamClient",
]
