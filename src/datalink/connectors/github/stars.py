"""
GitHub stargazers subconnector.

One row per star; the ``stars`` metric is always 1 so the host can sum it.
"""

from ...core.models import ConceptType, ConnectorRequest, DataType, SchemaField, Semantics
from ..base import ClientSource, ConnectorDefinition, PagedConnector
from .helpers import DEFAULT_API_URL, format_date, github_repo_api_url, repository_params


STAR_SCHEMA = [
    SchemaField(
        name="starred_at",
        label="Starred At",
        description="The date and time the repository was starred",
        data_type=DataType.STRING,
        semantics=Semantics(ConceptType.DIMENSION, "YEAR_MONTH_DAY_HOUR", "DATETIME"),
    ),
    SchemaField(
        name="stars",
        label="Stars",
        data_type=DataType.NUMBER,
        semantics=Semantics(ConceptType.METRIC),
    ),
]

SAMPLE_STARS = [
    {"starred_at": "2017-05-31T12:50:00Z"},
]

STARS_DEFINITION = ConnectorDefinition(
    schema=STAR_SCHEMA,
    label="Stars",
    accept="application/vnd.github.v3.star+json",
    default_fields={"stars": 1},
    transformers={"starred_at": format_date},
    sample_data=SAMPLE_STARS,
)


class GithubStarsConnector(PagedConnector):
    """Stargazers of one repository, across all pages."""

    def __init__(
        self,
        client: ClientSource,
        api_url: str = DEFAULT_API_URL,
        per_page: int = 100,
    ):
        super().__init__(STARS_DEFINITION, client, per_page=per_page)
        self.api_url = api_url

    def get_base_url(self, request: ConnectorRequest) -> str:
        organization, repository = repository_params(request.config_params)
        return github_repo_api_url(
            organization,
            repository,
            "stargazers",
            api_url=self.api_url,
        )
