"""
Record transformation: raw upstream records to host rows.

Each requested field is resolved against a raw record in this order:
1. the field-mapping table (raw value looked up under an alternate key)
2. the raw value under the field's own name
3. the per-field default table
4. the single scalar default
The resolved value then goes through the field's transformer, if any.
"""

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional

from ..core.exceptions import MissingFieldError
from ..core.models import ConnectorRequest, DataResult, Row, SchemaField, iter_records


logger = logging.getLogger(__name__)


class _Unset:
    def __repr__(self) -> str:
        return "UNSET"


UNSET = _Unset()


class RecordTransformer:
    """
    Converts raw records into rows aligned to the requested field names.

    Subclasses can override ``find_field``, ``default_for`` and
    ``transform_field`` to customise resolution.

    Attributes:
        field_mapping: Requested field name -> raw record key
        default_fields: Requested field name -> default value
        default_field: Default for any field; UNSET means no default
        transformers: Requested field name -> callable applied to the value
    """

    def __init__(
        self,
        field_mapping: Optional[Mapping[str, str]] = None,
        default_fields: Optional[Mapping[str, Any]] = None,
        default_field: Any = UNSET,
        transformers: Optional[Mapping[str, Callable[[Any], Any]]] = None,
    ):
        self.field_mapping = dict(field_mapping or {})
        self.default_fields = dict(default_fields or {})
        self.default_field = default_field
        self.transformers = dict(transformers or {})

    def transform_records(
        self,
        raw_payload: Any,
        field_names: List[str],
        request: Optional[ConnectorRequest] = None,
    ) -> List[Row]:
        """
        Transform a whole payload into rows.

        Args:
            raw_payload: List of records, mapping of key -> record, or a
                tagged RecordList/KeyedRecords payload
            field_names: Requested field names, in output order
            request: The originating request, passed to resolution hooks

        Returns:
            One Row per record, in payload iteration order

        Raises:
            MissingFieldError: If any field of any record cannot be resolved
        """
        rows = [
            self.transform_row(record, field_names, key, request)
            for record, key in iter_records(raw_payload)
        ]
        logger.debug(f"Transformed {len(rows)} records into rows of {len(field_names)} fields")
        return rows

    def transform_row(
        self,
        record: Any,
        field_names: List[str],
        key: Any = None,
        request: Optional[ConnectorRequest] = None,
    ) -> Row:
        """Resolve and transform every requested field of one record."""
        return Row(values=[
            self.transform_field(
                self.resolve_field(field_name, record, key, request),
                field_name,
                request,
            )
            for field_name in field_names
        ])

    def resolve_field(
        self,
        field_name: str,
        record: Any,
        key: Any = None,
        request: Optional[ConnectorRequest] = None,
    ) -> Any:
        """
        Find a field's raw value, falling back to configured defaults.

        Raises:
            MissingFieldError: If neither the record nor the defaults provide
                a value
        """
        value = self.find_field(field_name, record, key, request)
        if value is not UNSET:
            return value

        value = self.default_for(field_name, request)
        if value is not UNSET:
            return value

        raise MissingFieldError(
            f"Couldn't find field {field_name!r} in record {key!r}: {record!r}. "
            "Ensure that the key is available in the upstream record, or "
            "configure field_mapping, default_fields or default_field.",
            field_name=field_name,
            record=record,
            key=key,
        )

    def find_field(
        self,
        field_name: str,
        record: Any,
        key: Any = None,
        request: Optional[ConnectorRequest] = None,
    ) -> Any:
        """Look the field up in the record; UNSET when absent."""
        if not isinstance(record, Mapping):
            return UNSET

        mapped_name = self.field_mapping.get(field_name)
        if mapped_name is not None and mapped_name in record:
            return record[mapped_name]

        if field_name in record:
            return record[field_name]

        return UNSET

    def default_for(self, field_name: str, request: Optional[ConnectorRequest] = None) -> Any:
        """Return the configured default for a field; UNSET when none."""
        if field_name in self.default_fields:
            return self.default_fields[field_name]
        return self.default_field

    def transform_field(
        self,
        value: Any,
        field_name: str,
        request: Optional[ConnectorRequest] = None,
    ) -> Any:
        """Apply the field's transformer, or pass the value through."""
        transformer = self.transformers.get(field_name)
        if transformer is None:
            return value
        return transformer(value)

    def build_result(
        self,
        raw_payload: Any,
        field_names: List[str],
        keyed_schema: Mapping[str, SchemaField],
        request: Optional[ConnectorRequest] = None,
    ) -> DataResult:
        """
        Build a complete get_data result.

        Raises:
            MissingFieldError: If a requested field is not in the schema, or
                a record cannot supply it
        """
        schema = []
        for field_name in field_names:
            if field_name not in keyed_schema:
                raise MissingFieldError(
                    f"Requested field {field_name!r} is not declared in the schema",
                    field_name=field_name,
                )
            schema.append(keyed_schema[field_name])

        return DataResult(
            schema=schema,
            rows=self.transform_records(raw_payload, field_names, request),
            cached_data=False,
        )
