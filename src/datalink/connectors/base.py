"""
Definition-driven connectors.

A ConnectorDefinition collects everything a simple request/response connector
needs (schema, request shape, field resolution tables) with defaults for
everything optional. DefinitionConnector turns a definition into a working
subconnector; every request-building step is a method that subclasses can
override.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Union
from urllib.parse import quote

from ..core.connector import Connector, SubConnector
from ..core.exceptions import ConfigError, ParseError
from ..core.models import ConnectorConfig, ConnectorRequest, DataResult, SchemaField
from ..core.upstream import FetchRequest, FetchResponse, UpstreamClient
from ..compose.composer import SharedConfig, make_get_config
from ..pagination.driver import PaginationDriver
from ..schema.registry import KeyedSchema, SchemaRegistry, SchemaSource, UnkeyedSchema
from ..transform.records import UNSET, RecordTransformer


logger = logging.getLogger(__name__)


URI_COMPONENT_SAFE = "-_.!~*'()"

ClientSource = Union[UpstreamClient, Callable[[], UpstreamClient]]


def encode_query(query: Optional[Mapping[str, Any]]) -> str:
    """
    Encode a mapping as a URL query string with a leading ``?``.

    Keys and values are escaped; an empty or missing mapping gives "".
    """
    if not query:
        return ""
    encoded = "&".join(
        f"{quote(str(key), safe=URI_COMPONENT_SAFE)}={quote(str(value), safe=URI_COMPONENT_SAFE)}"
        for key, value in query.items()
    )
    return f"?{encoded}"


@dataclass
class ConnectorDefinition:
    """
    Declarative description of a request/response connector.

    Attributes:
        schema: Static list/mapping of fields, or callable (request, credentials)
        label: Display label (required when composed)
        config: Connector configuration (only for standalone connectors)
        url: Full URL; when set, base_url and query are ignored
        base_url: URL without query string
        query: Static query parameters
        method: HTTP method
        accept: Accept header value
        headers: Full header set; when set, accept/auth/extra headers are ignored
        extra_headers: Headers merged under Accept and Authorization
        content_type: Content-Type of the request body
        body: Request body
        auth_scheme: Authorization scheme prefix for the access token
        field_mapping: Requested field name -> raw record key
        default_fields: Requested field name -> default value
        default_field: Default for any unresolved field (UNSET = none)
        transformers: Requested field name -> value transformer
        sample_data: Canned records for sample mode (paged connectors)
    """
    schema: SchemaSource
    label: Optional[str] = None
    config: Optional[SharedConfig] = None
    url: Optional[str] = None
    base_url: Optional[str] = None
    query: Optional[Dict[str, Any]] = None
    method: str = "GET"
    accept: str = "application/json"
    headers: Optional[Dict[str, str]] = None
    extra_headers: Optional[Dict[str, str]] = None
    content_type: Optional[str] = None
    body: Optional[str] = None
    auth_scheme: str = "token"
    field_mapping: Dict[str, str] = field(default_factory=dict)
    default_fields: Dict[str, Any] = field(default_factory=dict)
    default_field: Any = UNSET
    transformers: Dict[str, Callable[[Any], Any]] = field(default_factory=dict)
    sample_data: List[Any] = field(default_factory=list)


class DefinitionConnector(SubConnector):
    """
    Subconnector built from a ConnectorDefinition.

    get_data fetches one response from the upstream client, decodes it as
    JSON and runs it through the record transformer.
    """

    def __init__(self, definition: ConnectorDefinition, client: ClientSource):
        """
        Initialize the connector.

        Args:
            definition: The connector definition
            client: Upstream client, or a zero-argument callable returning
                one (e.g. a ClientHandle)

        Raises:
            SchemaError: If a static schema is malformed
        """
        self.definition = definition
        self._client = client
        self.schema_registry = SchemaRegistry(definition.schema)
        self.transformer = RecordTransformer(
            field_mapping=definition.field_mapping,
            default_fields=definition.default_fields,
            default_field=definition.default_field,
            transformers=definition.transformers,
        )

    @property
    def label(self) -> Optional[str]:
        return self.definition.label

    @property
    def client(self) -> UpstreamClient:
        if isinstance(self._client, UpstreamClient):
            return self._client
        return self._client()

    # Schema

    def get_schema(self, request: Optional[ConnectorRequest] = None) -> Dict[str, UnkeyedSchema]:
        return self.schema_registry.get_schema(request)

    def get_keyed_schema(self, request: Optional[ConnectorRequest] = None) -> KeyedSchema:
        return self.schema_registry.get_keyed_schema(request)

    def get_unkeyed_schema(self, request: Optional[ConnectorRequest] = None) -> UnkeyedSchema:
        return self.schema_registry.get_unkeyed_schema(request)

    # Data

    def get_data(self, request: ConnectorRequest) -> DataResult:
        """Fetch, decode and transform the requested fields."""
        records = self.fetch_records(request)
        return self.transformer.build_result(
            records,
            request.fields,
            self.get_keyed_schema(request),
            request,
        )

    def fetch_records(self, request: ConnectorRequest) -> Any:
        """Return the decoded list or mapping of records."""
        payload = self.fetch_response(request).json()
        if not isinstance(payload, (list, dict)):
            logger.warning(
                f"Expected a list or mapping of records, got {type(payload).__name__}",
                extra={"connector": self.label},
            )
            raise ParseError("Unable to parse data fetched from source.", user_facing=True)
        return payload

    def fetch_response(self, request: ConnectorRequest, **kwargs: Any) -> FetchResponse:
        fetch_request = self.build_fetch_request(request, **kwargs)
        logger.debug(f"{fetch_request.method} {fetch_request.url}", extra={"connector": self.label})
        return self.client.fetch(fetch_request)

    def fetch_content(self, request: ConnectorRequest) -> str:
        """Return the raw response body."""
        return self.fetch_response(request).body_text

    def build_fetch_request(self, request: ConnectorRequest, **kwargs: Any) -> FetchRequest:
        return FetchRequest(
            url=self.get_url(request, **kwargs),
            method=self.get_method(request),
            headers=self.get_headers(request),
            body=self.get_body(request),
            content_type=self.get_content_type(request),
        )

    # Request building hooks

    def get_url(self, request: ConnectorRequest, **kwargs: Any) -> str:
        if self.definition.url:
            return self.definition.url
        base_url = self.get_base_url(request)
        return f"{base_url}{encode_query(self.get_query(request, **kwargs))}"

    def get_base_url(self, request: ConnectorRequest) -> str:
        if self.definition.base_url:
            return self.definition.base_url
        raise ConfigError(
            "Connector needs a url or base_url, or must override get_base_url()",
            user_facing=False,
        )

    def get_query(self, request: ConnectorRequest, **kwargs: Any) -> Optional[Dict[str, Any]]:
        return self.definition.query

    def get_headers(self, request: ConnectorRequest) -> Dict[str, str]:
        if self.definition.headers:
            return dict(self.definition.headers)

        headers = dict(self.get_extra_headers(request) or {})
        headers["Accept"] = self.get_accept(request)
        auth = self.get_auth_header(request)
        if auth is not None:
            headers["Authorization"] = auth
        return headers

    def get_extra_headers(self, request: ConnectorRequest) -> Optional[Dict[str, str]]:
        return self.definition.extra_headers

    def get_accept(self, request: ConnectorRequest) -> str:
        return self.definition.accept

    def get_auth_header(self, request: ConnectorRequest) -> Optional[str]:
        token = request.auth_token()
        return f"{self.definition.auth_scheme} {token}" if token else None

    def get_method(self, request: ConnectorRequest) -> str:
        return self.definition.method

    def get_content_type(self, request: ConnectorRequest) -> Optional[str]:
        return self.definition.content_type

    def get_body(self, request: ConnectorRequest) -> Optional[str]:
        return self.definition.body


class PagedConnector(DefinitionConnector):
    """
    Definition connector for page-numbered upstreams.

    Each page is requested with ``page`` and ``per_page`` query parameters
    and the pages are collected by a PaginationDriver.
    """

    def __init__(
        self,
        definition: ConnectorDefinition,
        client: ClientSource,
        per_page: int = 100,
    ):
        if definition.url:
            raise ConfigError(
                "Paged connectors build page URLs from base_url; url is not supported",
                user_facing=False,
            )
        super().__init__(definition, client)
        self.per_page = per_page
        self.driver = PaginationDriver(
            fetch_page=self.fetch_page,
            sample_data=definition.sample_data,
        )

    def fetch_records(self, request: ConnectorRequest) -> List[Any]:
        return self.driver.fetch_all_pages(request)

    def fetch_page(self, request: ConnectorRequest, page_number: int) -> FetchResponse:
        return self.fetch_response(request, page=page_number)

    def get_query(self, request: ConnectorRequest, page: Optional[int] = None, **kwargs: Any) -> Dict[str, Any]:
        query = {"page": page or 1, "per_page": self.per_page}
        query.update(self.definition.query or {})
        return query


class StandaloneConnector(DefinitionConnector, Connector):
    """Definition connector with its own configuration (not composable)."""

    def __init__(self, definition: ConnectorDefinition, client: ClientSource):
        if definition.config is None:
            raise ConfigError(
                "Standalone connectors must define config as a configuration or callable",
                user_facing=False,
            )
        super().__init__(definition, client)
        self._get_config = make_get_config(definition.config)

    def get_config(self, request: Optional[ConnectorRequest] = None) -> ConnectorConfig:
        return self._get_config(request)
