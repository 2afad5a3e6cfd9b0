"""
Configuration model produced by a schema inference run.

A Domain holds Schemas, a Schema holds Attributes and an optional Metadata
block. All of them are frozen; ``to_dict`` gives the plain structure the
YAML emitter writes, keys in document order.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from .formats import Format


class PrimitiveType(str, Enum):
    STRING = "string"
    INTEGER = "integer"
    LONG = "long"
    DOUBLE = "double"
    DECIMAL = "decimal"
    BOOLEAN = "boolean"
    DATE = "date"
    TIMESTAMP = "timestamp"
    BINARY = "binary"
    STRUCT = "struct"


@dataclass(frozen=True)
class Attribute:
    name: str
    type: PrimitiveType
    array: bool = False
    required: bool = False
    attributes: tuple["Attribute", ...] = ()

    def __post_init__(self):
        _check_unique(self.attributes, f"attribute {self.name!r}")

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "name": self.name,
            "type": self.type.value,
            "array": self.array,
            "required": self.required,
        }
        if self.attributes:
            out["attributes"] = [a.to_dict() for a in self.attributes]
        return out


@dataclass(frozen=True)
class Metadata:
    """Read options detected for a schema; None means not detected or not applicable."""

    format: Optional[Format] = None
    array: Optional[bool] = None
    with_header: Optional[bool] = None
    separator: Optional[str] = None
    encoding: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        out = {
            "format": self.format.name if self.format is not None else None,
            "array": self.array,
            "withHeader": self.with_header,
            "separator": self.separator,
            "encoding": self.encoding,
        }
        return {k: v for k, v in out.items() if v is not None}


@dataclass(frozen=True)
class Schema:
    name: str
    pattern: re.Pattern
    attributes: tuple[Attribute, ...]
    metadata: Optional[Metadata] = None

    def __post_init__(self):
        _check_unique(self.attributes, f"schema {self.name!r}")

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "name": self.name,
            "pattern": self.pattern.pattern,
            "attributes": [a.to_dict() for a in self.attributes],
        }
        if self.metadata is not None:
            out["metadata"] = self.metadata.to_dict()
        return out


@dataclass(frozen=True)
class Domain:
    name: str
    directory: str
    schemas: tuple[Schema, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "directory": self.directory,
            "schemas": [s.to_dict() for s in self.schemas],
        }


def _check_unique(attributes: tuple[Attribute, ...], owner: str) -> None:
    seen = set()
    for attr in attributes:
        if attr.name in seen:
            raise ValueError(f"Duplicate attribute {attr.name!r} in {owner}")
        seen.add(attr.name)
