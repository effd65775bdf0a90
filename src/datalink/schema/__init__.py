"""
Schema registry and keyed/unkeyed schema conversion.
"""

from .registry import (
    SchemaRegistry,
    make_keyed_schema,
    make_schemas,
    make_unkeyed_schema,
    shallow_compare,
)

__all__ = [
    "SchemaRegistry",
    "make_keyed_schema",
    "make_schemas",
    "make_unkeyed_schema",
    "shallow_compare",
]
