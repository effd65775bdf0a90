"""
Transformation of raw upstream records into host rows.
"""

from .records import UNSET, RecordTransformer

__all__ = [
    "UNSET",
    "RecordTransformer",
]
