"""
assembler.py  ── turn a typed column list into a Domain configuration
"""
from __future__ import annotations

import logging
import posixpath
import re
from typing import Iterable, Optional

import pyarrow as pa

from .exceptions import PatternCompileError, ReadError
from .formats import Format
from .model import Attribute, Domain, Metadata, PrimitiveType, Schema
from .reader import Column

logger = logging.getLogger(__name__)

__all__ = [
    "file_name",
    "schema_pattern",
    "domain_directory",
    "primitive_type",
    "build_attributes",
    "build_metadata",
    "assemble_domain",
]


# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------

def file_name(path: str) -> str:
    """Base name of a local path or storage URL."""
    return posixpath.basename(str(path))


def schema_pattern(path: str, *, literal: bool = False) -> re.Pattern:
    """
    Compile the base name of *path* as the schema's file-name pattern.

    By default the name is used as a regular expression as is, so ``.`` in
    ``orders.csv`` matches any character. ``literal=True`` escapes it.

    Raises:
        PatternCompileError: If the name is not a valid regular expression.
    """
    name = file_name(path)
    try:
        return re.compile(re.escape(name) if literal else name)
    except re.error as exc:
        raise PatternCompileError(f"File name {name!r} is not a valid pattern: {exc}") from exc


def domain_directory(path: str) -> str:
    """*path* without its base name: ``/data/orders.csv`` gives ``/data/``."""
    path = str(path)
    return path[: len(path) - len(file_name(path))]


# ---------------------------------------------------------------------------
# Types & attributes
# ---------------------------------------------------------------------------

def primitive_type(pa_type: pa.DataType) -> PrimitiveType:
    """Map a scalar PyArrow type onto the configuration's type names."""
    t = pa.types
    if t.is_int8(pa_type) or t.is_int16(pa_type) or t.is_int32(pa_type):
        return PrimitiveType.INTEGER
    if t.is_integer(pa_type):
        return PrimitiveType.LONG
    if t.is_floating(pa_type):
        return PrimitiveType.DOUBLE
    if t.is_decimal(pa_type):
        return PrimitiveType.DECIMAL
    if t.is_boolean(pa_type):
        return PrimitiveType.BOOLEAN
    if t.is_date(pa_type):
        return PrimitiveType.DATE
    if t.is_timestamp(pa_type):
        return PrimitiveType.TIMESTAMP
    if t.is_binary(pa_type) or t.is_large_binary(pa_type) or t.is_fixed_size_binary(pa_type):
        return PrimitiveType.BINARY
    if t.is_struct(pa_type):
        return PrimitiveType.STRUCT
    # strings, nulls (all-empty columns) and anything exotic
    return PrimitiveType.STRING


def _attribute(name: str, pa_type: pa.DataType, nullable: bool) -> Attribute:
    array = False
    while pa.types.is_list(pa_type) or pa.types.is_large_list(pa_type):
        array = True
        pa_type = pa_type.value_type

    children: tuple[Attribute, ...] = ()
    if pa.types.is_struct(pa_type):
        fields = [pa_type.field(i) for i in range(pa_type.num_fields)]
        children = tuple(_attribute(f.name, f.type, f.nullable) for f in fields)
    return Attribute(
        name=name,
        type=primitive_type(pa_type),
        array=array,
        required=not nullable,
        attributes=children,
    )


def build_attributes(columns: Iterable[Column]) -> tuple[Attribute, ...]:
    """
    One attribute per column, same names and order.

    Raises:
        ReadError: If two columns share a name.
    """
    attributes = []
    seen = set()
    for col in columns:
        if col.name in seen:
            raise ReadError(f"Column {col.name!r} appears more than once")
        seen.add(col.name)
        attributes.append(_attribute(col.name, col.type, col.nullable))
    return tuple(attributes)


def build_metadata(
    fmt: Format,
    header: bool,
    separator: Optional[str] = None,
    encoding: Optional[str] = None,
) -> Metadata:
    return Metadata(
        format=fmt,
        array=fmt is Format.ARRAY_JSON,
        with_header=header,
        separator=separator if fmt is Format.DSV else None,
        encoding=encoding,
    )


def assemble_domain(
    domain_name: str,
    schema_name: str,
    path: str,
    columns: Iterable[Column],
    metadata: Optional[Metadata] = None,
    *,
    literal_pattern: bool = False,
) -> Domain:
    """Build the one-schema Domain describing the file at *path*."""
    attributes = build_attributes(columns)
    if not attributes:
        logger.warning("No column found in %s, the schema has no attribute", path)

    schema = Schema(
        name=schema_name,
        pattern=schema_pattern(path, literal=literal_pattern),
        attributes=attributes,
        metadata=metadata,
    )
    return Domain(name=domain_name, directory=domain_directory(path), schemas=(schema,))
