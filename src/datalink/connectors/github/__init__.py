"""
GitHub repository connectors.
"""

from .connector import GITHUB_CONFIG_PARAMS, build_github_connector, validate_github_config
from .helpers import DEFAULT_API_URL, format_date, github_repo_api_url, repository_params
from .issues import ISSUE_SCHEMA, GithubIssuesConnector
from .stars import SAMPLE_STARS, STAR_SCHEMA, GithubStarsConnector

__all__ = [
    "GITHUB_CONFIG_PARAMS",
    "build_github_connector",
    "validate_github_config",
    "DEFAULT_API_URL",
    "format_date",
    "github_repo_api_url",
    "repository_params",
    "ISSUE_SCHEMA",
    "GithubIssuesConnector",
    "SAMPLE_STARS",
    "STAR_SCHEMA",
    "GithubStarsConnector",
]
