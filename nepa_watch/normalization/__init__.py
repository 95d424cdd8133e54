"""Normalization of upstream search rows into canonical records.

- FIELD_ALIASES: ordered upstream field names per canonical attribute
- normalize_record: one row to a Record (or None)
- normalize_payload: any supported response shape to a list of Records
"""

from .fields import FIELD_ALIASES, ROW_CONTAINER_KEYS, first_present
from .service import (
    find_row_list,
    locate_rows,
    normalize_payload,
    normalize_record,
    normalize_rows,
    resolve_state,
)

__all__ = [
    "FIELD_ALIASES",
    "ROW_CONTAINER_KEYS",
    "first_present",
    "find_row_list",
    "locate_rows",
    "normalize_payload",
    "normalize_record",
    "normalize_rows",
    "resolve_state",
]
