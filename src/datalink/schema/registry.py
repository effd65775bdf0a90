"""
Schema registry: keyed and unkeyed views over a connector schema.

A schema source is either a static list of fields, a static mapping of
name -> field, or a callable ``(request, credentials)`` returning either
form. Fields may be SchemaField objects or host-shaped dicts.
"""

import dataclasses
import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple, Union

from ..core.exceptions import SchemaError
from ..core.models import ConnectorRequest, SchemaField


logger = logging.getLogger(__name__)


SchemaSource = Union[
    List[Any],
    Mapping[str, Any],
    Callable[[Optional[ConnectorRequest], Any], Union[List[Any], Mapping[str, Any]]],
]

KeyedSchema = Dict[str, SchemaField]
UnkeyedSchema = List[SchemaField]


def _coerce_field(value: Any) -> SchemaField:
    if isinstance(value, SchemaField):
        return value
    if isinstance(value, Mapping):
        return SchemaField.from_dict(value)
    raise SchemaError(f"Expected a schema field, got {type(value).__name__}")


def make_keyed_schema(unkeyed_schema: List[Any]) -> KeyedSchema:
    """
    Convert an ordered list of fields into a mapping keyed on field name.

    Raises:
        SchemaError: If a field has no name or two fields share a name
    """
    keyed_schema: KeyedSchema = {}
    for value in unkeyed_schema:
        schema_field = _coerce_field(value)
        if not schema_field.name:
            raise SchemaError(f"Schema field {schema_field.label!r} has no name")
        if schema_field.name in keyed_schema:
            raise SchemaError(f"Duplicate schema field name: {schema_field.name}")
        keyed_schema[schema_field.name] = schema_field
    return keyed_schema


def make_unkeyed_schema(keyed_schema: Mapping[str, Any]) -> UnkeyedSchema:
    """
    Convert a keyed schema into an ordered list, in mapping order.

    A field without a name takes its key as name; the caller's field object
    is not modified.

    Raises:
        SchemaError: If a field's name disagrees with its key
    """
    unkeyed_schema: UnkeyedSchema = []
    for name, value in keyed_schema.items():
        schema_field = _coerce_field(value)
        if not schema_field.name:
            schema_field = dataclasses.replace(schema_field, name=name)
        elif schema_field.name != name:
            raise SchemaError(
                f"Schema field {schema_field.name!r} is registered under key {name!r}"
            )
        unkeyed_schema.append(schema_field)
    return unkeyed_schema


def make_schemas(schema: Union[List[Any], Mapping[str, Any]]) -> Tuple[KeyedSchema, UnkeyedSchema]:
    """Build the (keyed, unkeyed) pair from either schema form."""
    if isinstance(schema, Mapping):
        unkeyed_schema = make_unkeyed_schema(schema)
        return make_keyed_schema(unkeyed_schema), unkeyed_schema
    if isinstance(schema, (list, tuple)):
        keyed_schema = make_keyed_schema(list(schema))
        return keyed_schema, list(keyed_schema.values())
    raise SchemaError(
        f"Schema must be a list, a mapping or a callable, got {type(schema).__name__}"
    )


def _same_value(lhs: Any, rhs: Any) -> bool:
    return lhs is rhs or (type(lhs) is type(rhs) and lhs == rhs)


def shallow_compare(lhs: Mapping[str, Any], rhs: Mapping[str, Any]) -> bool:
    """
    Compare two config mappings key by key over the keys of ``lhs``.

    Key-set size differences are ignored: keys only present in ``rhs`` are
    never looked at. Values compare equal only when of the same type.
    """
    for key, value in lhs.items():
        if key not in rhs or not _same_value(value, rhs[key]):
            return False
    return True


class SchemaRegistry:
    """
    Derives keyed and unkeyed schema views from a schema source.

    Static sources are converted (and validated) once at construction.
    Dynamic sources are evaluated lazily and cached together with the config
    params that produced them; the cache is replaced only when a request
    arrives whose config params differ.

    Example:
        >>> registry = SchemaRegistry([{"name": "a", "label": "A", "dataType": "NUMBER"}])
        >>> registry.get_keyed_schema()["a"].label
        'A'
    """

    def __init__(self, source: SchemaSource):
        """
        Initialize the registry.

        Args:
            source: Static list/mapping of fields, or a callable
                ``(request, credentials)`` returning one

        Raises:
            SchemaError: If a static source is malformed
        """
        if source is None:
            raise SchemaError("A schema source is required")

        self.source = source
        self.dynamic = callable(source)
        self._keyed: Optional[KeyedSchema] = None
        self._unkeyed: Optional[UnkeyedSchema] = None
        self._known_config: Optional[Dict[str, Any]] = None
        self.compute_count = 0

        if not self.dynamic:
            self._keyed, self._unkeyed = make_schemas(source)

    def _refresh(self, request: Optional[ConnectorRequest]) -> None:
        if not self.dynamic:
            return

        config_params = dict(request.config_params) if request else {}
        if self._known_config is not None and shallow_compare(config_params, self._known_config):
            return

        credentials = request.credentials if request else None
        logger.debug(f"Computing dynamic schema for config: {config_params}")
        keyed, unkeyed = make_schemas(self.source(request, credentials))
        self.compute_count += 1
        self._keyed, self._unkeyed = keyed, unkeyed
        self._known_config = config_params

    def get_unkeyed_schema(self, request: Optional[ConnectorRequest] = None) -> UnkeyedSchema:
        """Return the schema as an ordered list of fields."""
        self._refresh(request)
        return self._unkeyed

    def get_keyed_schema(self, request: Optional[ConnectorRequest] = None) -> KeyedSchema:
        """Return the schema as a mapping of name -> field."""
        self._refresh(request)
        return self._keyed

    def get_schema(self, request: Optional[ConnectorRequest] = None) -> Dict[str, UnkeyedSchema]:
        """Return the host getSchema wrapper ``{"schema": [...]}``."""
        return {"schema": self.get_unkeyed_schema(request)}

    def reset(self) -> None:
        """Drop the cached dynamic schema."""
        if self.dynamic:
            self._keyed = None
            self._unkeyed = None
            self._known_config = None
