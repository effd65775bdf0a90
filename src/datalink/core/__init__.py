"""
Core abstractions and interfaces for the datalink connector framework.
"""

from .connector import Connector, ConnectorInterface, SubConnector
from .exceptions import (
    CompositionError,
    ConfigError,
    ConnectorError,
    DispatchError,
    FetchError,
    MissingFieldError,
    ParseError,
    SchemaError,
    USER_ERROR_PREFIX,
)
from .models import (
    ConceptType, ConfigOption, ConfigParam, ConfigParamType, ConnectorConfig,
    ConnectorRequest, DataResult, DataType, KeyedRecords, RecordList, Row,
    SchemaField, Semantics, as_payload, iter_records,
)
from .upstream import FetchRequest, FetchResponse, UpstreamClient

__all__ = [
    "Connector",
    "ConnectorInterface",
    "SubConnector",
    "CompositionError",
    "ConfigError",
    "ConnectorError",
    "DispatchError",
    "FetchError",
    "MissingFieldError",
    "ParseError",
    "SchemaError",
    "USER_ERROR_PREFIX",
    "ConceptType",
    "ConfigOption",
    "ConfigParam",
    "ConfigParamType",
    "ConnectorConfig",
    "ConnectorRequest",
    "DataResult",
    "DataType",
    "KeyedRecords",
    "RecordList",
    "Row",
    "SchemaField",
    "Semantics",
    "as_payload",
    "iter_records",
    "FetchRequest",
    "FetchResponse",
    "UpstreamClient",
]
