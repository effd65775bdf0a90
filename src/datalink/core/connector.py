"""
Connector interfaces exposed to the analytics host.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Mapping, Optional

from .exceptions import ConnectorError
from .logging import logged
from .models import ConnectorConfig, ConnectorRequest, DataResult, SchemaField


logger = logging.getLogger(__name__)


class SubConnector(ABC):
    """
    A connector-like object without its own configuration.

    Subconnectors are composed under a ComposedConnector, which supplies the
    shared configuration and routes requests to them.
    """

    label: str = ""

    @abstractmethod
    def get_schema(self, request: ConnectorRequest) -> Dict[str, List[SchemaField]]:
        """Return ``{"schema": [SchemaField, ...]}`` for the request."""
        pass

    @abstractmethod
    def get_data(self, request: ConnectorRequest) -> DataResult:
        """Fetch and transform the requested fields."""
        pass


class Connector(SubConnector):
    """
    Abstract base class for complete connectors.

    A connector exposes one data source to the host through get_config,
    get_schema and get_data.
    """

    @abstractmethod
    def get_config(self, request: ConnectorRequest) -> ConnectorConfig:
        """Return the configuration screen description."""
        pass


class ConnectorInterface:
    """
    Host-facing adapter around a connector.

    Translates host request dicts into ConnectorRequest objects (injecting the
    credential provider) and results back into host dicts.

    Example:
        >>> interface = ConnectorInterface(github_connector, credentials)
        >>> interface.get_data({"configParams": {...}, "fields": [{"name": "title"}]})
    """

    def __init__(self, connector: Any, credentials: Optional[Any] = None):
        """
        Initialize the interface.

        Args:
            connector: Object providing get_config, get_schema and get_data
            credentials: Optional credential provider passed to every request
        """
        self.connector = connector
        self.credentials = credentials

    def _request(self, request: Optional[Mapping[str, Any]]) -> ConnectorRequest:
        return ConnectorRequest.from_host(request, credentials=self.credentials)

    @logged("getConfig")
    def get_config(self, request: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        """Host getConfig."""
        return self._call("getConfig", request).to_dict()

    @logged("getSchema")
    def get_schema(self, request: Mapping[str, Any]) -> Dict[str, Any]:
        """Host getSchema."""
        result = self._call("getSchema", request)
        return {"schema": [f.to_dict() for f in result["schema"]]}

    @logged("getData")
    def get_data(self, request: Mapping[str, Any]) -> Dict[str, Any]:
        """Host getData; field names come from ``request["fields"]``."""
        return self._call("getData", request).to_dict()

    def _call(self, operation: str, request: Optional[Mapping[str, Any]]) -> Any:
        method = {
            "getConfig": self.connector.get_config,
            "getSchema": self.connector.get_schema,
            "getData": self.connector.get_data,
        }[operation]
        connector_request = self._request(request)
        try:
            return method(connector_request)
        except ConnectorError as e:
            if e.user_facing:
                logger.info(f"{operation} rejected: {e.message}")
            else:
                logger.error(f"{operation} failed: {e}")
            raise
