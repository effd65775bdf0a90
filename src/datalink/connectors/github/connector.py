"""
Composed GitHub connector: one repository, several data types.
"""

import logging
from typing import Any, Dict

from ...compose.composer import ComposedConnector, compose_connectors
from ...core.models import ConfigParam
from ..base import ClientSource
from .helpers import DEFAULT_API_URL, repository_params
from .issues import GithubIssuesConnector
from .stars import GithubStarsConnector


logger = logging.getLogger(__name__)


GITHUB_CONFIG_PARAMS = [
    ConfigParam(
        name="organization",
        display_name="Organization",
        help_text="The name of the organization (or user) that owns the repository",
        placeholder="google",
    ),
    ConfigParam(
        name="repository",
        display_name="Repository",
        help_text="The name of the repository you want data from",
        placeholder="datastudio",
    ),
]


def validate_github_config(config_params: Dict[str, Any]) -> None:
    """
    Require an organization and a repository.

    Raises:
        ConfigError: Naming the missing parameter
    """
    repository_params(config_params)


def build_github_connector(
    client: ClientSource,
    api_url: str = DEFAULT_API_URL,
    per_page: int = 100,
) -> ComposedConnector:
    """
    Build the composed GitHub connector.

    Args:
        client: Upstream client, or a ClientHandle producing one
        api_url: GitHub API root
        per_page: Page size for paginated endpoints

    Returns:
        Connector offering the "issues" and "stars" data types
    """
    logger.debug(f"Building GitHub connector against {api_url}")
    return compose_connectors(
        shared_config=GITHUB_CONFIG_PARAMS,
        subconnectors={
            "issues": GithubIssuesConnector(client, api_url=api_url),
            "stars": GithubStarsConnector(client, api_url=api_url, per_page=per_page),
        },
        validate_config=validate_github_config,
    )
