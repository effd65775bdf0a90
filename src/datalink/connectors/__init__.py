"""
Connectors package: definition-driven connectors and concrete sources.
"""

from .base import (
    ConnectorDefinition,
    DefinitionConnector,
    PagedConnector,
    StandaloneConnector,
    encode_query,
)
from .github import build_github_connector

__all__ = [
    "ConnectorDefinition",
    "DefinitionConnector",
    "PagedConnector",
    "StandaloneConnector",
    "encode_query",
    "build_github_connector",
]
