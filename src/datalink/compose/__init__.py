"""
Composition of multiple subconnectors behind a single connector.
"""

from .composer import (
    DISPATCH_KEY,
    ComposedConnector,
    compose_connectors,
    make_get_config,
    validate_subconnector,
)

__all__ = [
    "DISPATCH_KEY",
    "ComposedConnector",
    "compose_connectors",
    "make_get_config",
    "validate_subconnector",
]
