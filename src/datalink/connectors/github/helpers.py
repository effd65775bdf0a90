"""
GitHub-specific helpers.
"""

from datetime import datetime
from typing import Any, Mapping, Optional, Tuple, Union
from urllib.parse import quote

from ...core.exceptions import ConfigError
from ..base import URI_COMPONENT_SAFE, encode_query


DEFAULT_API_URL = "https://api.github.com"


def repository_params(config_params: Optional[Mapping[str, Any]]) -> Tuple[str, str]:
    """
    Return (organization, repository) from the config params.

    Raises:
        ConfigError: Naming the missing parameter
    """
    config_params = config_params or {}
    organization = config_params.get("organization")
    if not organization:
        raise ConfigError("You must provide an Organization.")

    repository = config_params.get("repository")
    if not repository:
        raise ConfigError("You must provide a Repository.")

    return organization, repository


def github_repo_api_url(
    organization: str,
    repository: str,
    endpoint: str,
    query: Optional[Mapping[str, Any]] = None,
    api_url: str = DEFAULT_API_URL,
) -> str:
    """
    Build a repository API URL.

    Effectively returns
    ``{api_url}/repos/{organization}/{repository}/{endpoint}?{query}`` with
    every path component escaped.
    """
    path = "/".join(
        quote(str(part), safe=URI_COMPONENT_SAFE)
        for part in (organization, repository, endpoint)
    )
    return f"{api_url.rstrip('/')}/repos/{path}{encode_query(query)}"


def format_date(value: Union[str, datetime, None]) -> Optional[str]:
    """
    Format an ISO-8601 timestamp as YYYYMMDDHH, ignoring time zones.

    Returns None for falsy input.
    """
    if not value:
        return None
    if isinstance(value, datetime):
        value = value.isoformat()
    return value[0:4] + value[5:7] + value[8:10] + value[11:13]
