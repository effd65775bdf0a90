"""
Paginated fetching for upstreams that split results across pages.
"""

from .driver import LAST_PAGE_PATTERN, PaginationDriver

__all__ = [
    "LAST_PAGE_PATTERN",
    "PaginationDriver",
]
