"""
GitHub issues subconnector.
"""

from typing import Any, Optional

from ...core.models import ConceptType, ConnectorRequest, DataType, SchemaField, Semantics
from ..base import ClientSource, ConnectorDefinition, DefinitionConnector
from .helpers import DEFAULT_API_URL, format_date, github_repo_api_url, repository_params


ISSUE_SCHEMA = [
    SchemaField(
        name="number",
        label="Number",
        description="The issue number",
        data_type=DataType.NUMBER,
        semantics=Semantics(ConceptType.DIMENSION, "NUMBER", "ID"),
    ),
    SchemaField(
        name="title",
        label="Title",
        description="The title of the issue",
        data_type=DataType.STRING,
        semantics=Semantics(ConceptType.DIMENSION, "TEXT"),
    ),
    SchemaField(
        name="open",
        label="Open",
        description="True if the issue is open, false if closed",
        data_type=DataType.BOOLEAN,
        semantics=Semantics(ConceptType.DIMENSION, "BOOLEAN"),
    ),
    SchemaField(
        name="url",
        label="URL",
        description="URL of the issue",
        data_type=DataType.STRING,
        semantics=Semantics(ConceptType.DIMENSION, "URL"),
    ),
    SchemaField(
        name="reporter",
        label="Reporter",
        description="Username of the user who reported the issue",
        data_type=DataType.STRING,
        semantics=Semantics(ConceptType.DIMENSION),
    ),
    SchemaField(
        name="locked",
        label="Locked",
        description="True if the issue is locked",
        data_type=DataType.BOOLEAN,
        semantics=Semantics(ConceptType.DIMENSION, "BOOLEAN"),
    ),
    SchemaField(
        name="num_comments",
        label="Number of Comments",
        description="Number of comments on the issue",
        data_type=DataType.NUMBER,
        semantics=Semantics(ConceptType.METRIC, "NUMBER", "NUMERIC"),
    ),
    SchemaField(
        name="is_pull_request",
        label="Pull Request",
        description="True if this issue is a Pull Request",
        data_type=DataType.BOOLEAN,
        semantics=Semantics(ConceptType.DIMENSION, "BOOLEAN"),
    ),
    SchemaField(
        name="created_at",
        label="Creation Time",
        description="The date and time that this issue was created",
        data_type=DataType.STRING,
        semantics=Semantics(None, "YEAR_MONTH_DAY_HOUR", "DATETIME"),
    ),
    SchemaField(
        name="closed_at",
        label="Close Time",
        description="The date and time that this issue was closed",
        data_type=DataType.STRING,
        semantics=Semantics(None, "YEAR_MONTH_DAY_HOUR", "DATETIME"),
    ),
]


def _login(user: Any) -> Optional[str]:
    return user.get("login") if isinstance(user, dict) else None


ISSUES_DEFINITION = ConnectorDefinition(
    schema=ISSUE_SCHEMA,
    label="Issues",
    query={"state": "all"},
    accept="application/vnd.github.v3.full+json",
    field_mapping={
        "open": "state",
        "reporter": "user",
        "num_comments": "comments",
        "is_pull_request": "pull_request",
    },
    default_fields={
        "locked": False,
        "is_pull_request": None,
        "closed_at": None,
    },
    transformers={
        "open": lambda state: state == "open",
        "reporter": _login,
        "is_pull_request": lambda pull_request: pull_request is not None,
        "created_at": format_date,
        "closed_at": format_date,
    },
)


class GithubIssuesConnector(DefinitionConnector):
    """Issues (and pull requests) of one repository, first page only."""

    def __init__(self, client: ClientSource, api_url: str = DEFAULT_API_URL):
        super().__init__(ISSUES_DEFINITION, client)
        self.api_url = api_url

    def get_base_url(self, request: ConnectorRequest) -> str:
        organization, repository = repository_params(request.config_params)
        return github_repo_api_url(
            organization,
            repository,
            "issues",
            api_url=self.api_url,
        )
