"""
Format definitions for schema_scout data handling.
"""
from __future__ import annotations

from enum import Enum, auto


class Format(str, Enum):
    JSON = auto()
    ARRAY_JSON = auto()
    DSV = auto()

    @classmethod
    def _missing_(cls, value):
        # accept strings like "dsv" or "array-json"
        val = str(value).strip().upper().replace("-", "_")
        try:
            return cls[val]
        except KeyError:
            raise ValueError(f"Unrecognized format: {value!r}") from None

    def __str__(self) -> str:
        return self.name
