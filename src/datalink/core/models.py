"""
Core data models for the connector framework.

The dataclasses here are the Python-side view of the analytics host's wire
shapes. ``to_dict``/``from_dict`` convert to and from the camelCase dicts the
host sends and expects.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple, Union

from .exceptions import SchemaError


class DataType(str, Enum):
    """Column data type understood by the host."""
    NUMBER = "NUMBER"
    STRING = "STRING"
    BOOLEAN = "BOOLEAN"


class ConceptType(str, Enum):
    """Whether a column is a dimension or a metric."""
    DIMENSION = "DIMENSION"
    METRIC = "METRIC"


class ConfigParamType(str, Enum):
    """Widget type of a configuration parameter."""
    TEXTINPUT = "TEXTINPUT"
    TEXTAREA = "TEXTAREA"
    TEXTINFO = "TEXTINFO"
    CHECKBOX = "CHECKBOX"
    SELECT_SINGLE = "SELECT_SINGLE"
    SELECT_MULTIPLE = "SELECT_MULTIPLE"


@dataclass
class Semantics:
    """
    Display semantics of a schema field.

    Attributes:
        concept_type: DIMENSION or METRIC (optional, host infers if absent)
        semantic_type: Host semantic type (e.g. 'URL', 'YEAR_MONTH_DAY_HOUR')
        semantic_group: Host semantic group (e.g. 'ID', 'DATETIME')
    """
    concept_type: Optional[ConceptType] = None
    semantic_type: Optional[str] = None
    semantic_group: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        result = {}
        if self.concept_type is not None:
            result["conceptType"] = self.concept_type.value
        if self.semantic_type is not None:
            result["semanticType"] = self.semantic_type
        if self.semantic_group is not None:
            result["semanticGroup"] = self.semantic_group
        return result

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Semantics":
        concept_type = data.get("conceptType")
        if concept_type is not None:
            try:
                concept_type = ConceptType(concept_type)
            except ValueError as e:
                raise SchemaError(f"Unknown concept type: {concept_type}") from e
        return cls(
            concept_type=concept_type,
            semantic_type=data.get("semanticType"),
            semantic_group=data.get("semanticGroup"),
        )


@dataclass
class SchemaField:
    """
    A named, typed column descriptor with display metadata.

    Attributes:
        name: Field identifier, unique within its schema
        label: Human-readable column name
        data_type: NUMBER, STRING or BOOLEAN
        description: Optional longer description
        semantics: Display semantics
    """
    name: Optional[str]
    label: str
    data_type: DataType
    description: Optional[str] = None
    semantics: Semantics = field(default_factory=Semantics)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the host wire shape."""
        result = {
            "name": self.name,
            "label": self.label,
            "dataType": self.data_type.value,
        }
        if self.description is not None:
            result["description"] = self.description
        semantics = self.semantics.to_dict()
        if semantics:
            result["semantics"] = semantics
        return result

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SchemaField":
        """Create from the host wire shape."""
        try:
            data_type = DataType(data["dataType"])
        except KeyError as e:
            raise SchemaError(f"Schema field {data.get('name')!r} has no dataType") from e
        except ValueError as e:
            raise SchemaError(
                f"Schema field {data.get('name')!r} has unknown dataType "
                f"{data['dataType']!r}"
            ) from e
        return cls(
            name=data.get("name"),
            label=data.get("label", data.get("name")),
            data_type=data_type,
            description=data.get("description"),
            semantics=Semantics.from_dict(data.get("semantics") or {}),
        )


@dataclass
class ConfigOption:
    """One choice of a SELECT_* configuration parameter."""
    value: str
    label: str

    def to_dict(self) -> Dict[str, str]:
        return {"value": self.value, "label": self.label}


@dataclass
class ConfigParam:
    """
    Definition of one user-supplied configuration parameter.

    Attributes:
        name: Parameter key in request config params
        display_name: Label shown in the host configuration screen
        help_text: Optional help text
        placeholder: Optional placeholder value
        type: Widget type (defaults to a text input)
        options: Choices for SELECT_* parameters
    """
    name: str
    display_name: str
    help_text: Optional[str] = None
    placeholder: Optional[str] = None
    type: ConfigParamType = ConfigParamType.TEXTINPUT
    options: List[ConfigOption] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        result = {
            "type": self.type.value,
            "name": self.name,
            "displayName": self.display_name,
        }
        if self.help_text is not None:
            result["helpText"] = self.help_text
        if self.placeholder is not None:
            result["placeholder"] = self.placeholder
        if self.options:
            result["options"] = [option.to_dict() for option in self.options]
        return result


@dataclass
class ConnectorConfig:
    """
    Configuration screen description returned by get_config.

    Attributes:
        config_params: Ordered parameter definitions
        date_range_required: Whether the host must send a date range
    """
    config_params: List[ConfigParam] = field(default_factory=list)
    date_range_required: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "configParams": [param.to_dict() for param in self.config_params],
            "dateRangeRequired": self.date_range_required,
        }

    @classmethod
    def normalize(cls, config: Union["ConnectorConfig", List[ConfigParam]]) -> "ConnectorConfig":
        """Accept either a full config or a bare list of parameters."""
        if isinstance(config, ConnectorConfig):
            return config
        return cls(config_params=list(config), date_range_required=False)


@dataclass
class ConnectorRequest:
    """
    A single get_schema/get_data request.

    Attributes:
        config_params: User-supplied configuration values
        fields: Requested field names, in host order
        credentials: Optional credential provider for upstream auth
        sample_mode: When set, connectors may answer with canned data
    """
    config_params: Dict[str, Any] = field(default_factory=dict)
    fields: List[str] = field(default_factory=list)
    credentials: Optional[Any] = None
    sample_mode: bool = False

    def auth_token(self) -> Optional[str]:
        """Return the upstream access token, if any."""
        if self.credentials is None:
            return None
        return self.credentials.get_access_token()

    @classmethod
    def from_host(
        cls,
        request: Optional[Mapping[str, Any]],
        credentials: Optional[Any] = None,
    ) -> "ConnectorRequest":
        """Build from the host's request dict."""
        request = request or {}
        script_params = request.get("scriptParams") or {}
        return cls(
            config_params=dict(request.get("configParams") or {}),
            fields=[f["name"] for f in request.get("fields") or []],
            credentials=credentials,
            sample_mode=script_params.get("sampleExtraction") is True,
        )


@dataclass
class RecordList:
    """Decoded payload holding an ordered list of raw records."""
    records: List[Any]


@dataclass
class KeyedRecords:
    """Decoded payload holding raw records keyed by an identifier."""
    records: Dict[Any, Any]


Payload = Union[RecordList, KeyedRecords]


def as_payload(data: Any) -> Payload:
    """
    Tag decoded JSON as a RecordList or KeyedRecords payload.

    Already-tagged payloads are returned unchanged.
    """
    if isinstance(data, (RecordList, KeyedRecords)):
        return data
    if isinstance(data, Mapping):
        return KeyedRecords(dict(data))
    if isinstance(data, (list, tuple)):
        return RecordList(list(data))
    raise TypeError(f"Expected a list or mapping of records, got {type(data).__name__}")


def iter_records(payload: Any) -> Iterator[Tuple[Any, Any]]:
    """
    Yield (record, key) pairs from a payload.

    Lists yield their index as key, in list order. Mappings yield their keys
    in mapping iteration order (insertion order, not sorted).
    """
    payload = as_payload(payload)
    if isinstance(payload, RecordList):
        for index, record in enumerate(payload.records):
            yield record, index
    else:
        for key, record in payload.records.items():
            yield record, key


@dataclass
class Row:
    """One output row; values align positionally with the requested fields."""
    values: List[Any]

    def to_dict(self) -> Dict[str, List[Any]]:
        return {"values": self.values}


@dataclass
class DataResult:
    """
    Result of a get_data call.

    Attributes:
        schema: Schema fields filtered and ordered to the requested fields
        rows: Output rows
        cached_data: Always False; no result caching is performed
    """
    schema: List[SchemaField]
    rows: List[Row]
    cached_data: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "schema": [f.to_dict() for f in self.schema],
            "rows": [row.to_dict() for row in self.rows],
            "cachedData": self.cached_data,
        }
