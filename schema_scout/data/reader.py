"""
reader.py  ── typed read of a data file once its layout is known

Type inference is left to PyArrow: the file is read with the options the
detectors found and only the resulting column schema is kept.

Public API
==========

    from schema_scout.data.reader import read_columns

    cols = read_columns("orders.csv", Format.DSV, separator=";", header=True)
    [(c.name, c.type) for c in cols]      # [('id', DataType(int64)), ...]

---------------------------------------------------------------------------
"""
from __future__ import annotations

import io
import json
import logging
import os
from dataclasses import dataclass
from typing import Optional

import pyarrow as pa
import pyarrow.csv as pacsv
import pyarrow.json as pajson

from .exceptions import ReadError
from .filesystems import FileSystemHandler
from .formats import Format

logger = logging.getLogger(__name__)

__all__ = ["Column", "read_columns", "read_table"]

_UTF8 = {"utf-8", "utf8"}


@dataclass(frozen=True)
class Column:
    name: str
    type: pa.DataType
    nullable: bool = True


def read_columns(
    path: str,
    fmt: Format,
    *,
    separator: Optional[str] = None,
    header: bool = False,
    encoding: Optional[str] = None,
    block_size: Optional[int] = None,
    use_threads: bool = True,
) -> list[Column]:
    """
    Read *path* as *fmt* and return its columns in file order.

    Args:
        path: Local path or ADLS Gen2 URL of the data file.
        fmt: Container format found by the format detector.
        separator: Field delimiter, DSV only. ``None`` reads with ``,``, which
            only happens when no delimiter candidate was found in the sample.
        header: Whether the first DSV row holds the column names. Without a
            header PyArrow names the columns ``f0, f1, ...``.
        encoding: Text encoding of the file, UTF-8 when not given.
        block_size: Reader block size in bytes, PyArrow's default when None.
        use_threads: Let PyArrow parse blocks in parallel.

    Raises:
        ReadError: If the file cannot be read or is malformed for *fmt*.
    """
    table = read_table(
        path,
        fmt,
        separator=separator,
        header=header,
        encoding=encoding,
        block_size=block_size,
        use_threads=use_threads,
    )
    columns = [Column(f.name, f.type, f.nullable) for f in table.schema]
    logger.info("Read %d column(s) from %s as %s", len(columns), path, fmt.name)
    return columns


def read_table(
    path: str,
    fmt: Format,
    *,
    separator: Optional[str] = None,
    header: bool = False,
    encoding: Optional[str] = None,
    block_size: Optional[int] = None,
    use_threads: bool = True,
) -> pa.Table:
    """Read *path* into a PyArrow Table with inferred column types."""
    encoding = (encoding or "utf-8").lower()
    try:
        with FileSystemHandler.open_file(path, "rb") as fh:
            if fmt is Format.JSON:
                return _read_json_lines(fh, encoding, block_size, use_threads)
            elif fmt is Format.ARRAY_JSON:
                return _read_json_array(fh, encoding)
            elif fmt is Format.DSV:
                return _read_dsv(fh, separator, header, encoding, block_size, use_threads)
            else:
                raise AssertionError("unreachable")
    except (pa.ArrowException, OSError, ValueError) as exc:
        raise ReadError(
            f"Reading {os.path.basename(str(path))!r} as {fmt.name} failed: {exc}"
        ) from exc


# ---------------------------------------------------------------------------
# Per-format implementations
# ---------------------------------------------------------------------------

def _read_json_lines(fh, encoding: str, block_size: Optional[int], use_threads: bool) -> pa.Table:
    # PyArrow only parses UTF-8 JSON
    source = fh if encoding in _UTF8 else io.BytesIO(fh.read().decode(encoding).encode("utf-8"))
    read_options = pajson.ReadOptions(use_threads=use_threads)
    if block_size is not None:
        read_options.block_size = block_size
    return pajson.read_json(source, read_options=read_options)


def _read_json_array(fh, encoding: str) -> pa.Table:
    document = json.loads(fh.read().decode(encoding))
    if not isinstance(document, list):
        raise ValueError("top-level JSON value is not an array")
    if not all(isinstance(record, dict) for record in document):
        raise ValueError("JSON array elements must all be objects")
    if not document:
        return pa.table({})
    # pa.array infers one struct type over all records, keys in first-seen order
    records = pa.array(document)
    return pa.Table.from_batches([pa.RecordBatch.from_struct_array(records)])


def _read_dsv(
    fh,
    separator: Optional[str],
    header: bool,
    encoding: str,
    block_size: Optional[int],
    use_threads: bool,
) -> pa.Table:
    read_options = pacsv.ReadOptions(
        use_threads=use_threads,
        autogenerate_column_names=not header,
        encoding="utf8" if encoding in _UTF8 else encoding,
    )
    if block_size is not None:
        read_options.block_size = block_size
    parse_options = pacsv.ParseOptions(delimiter=separator or ",")
    return pacsv.read_csv(fh, read_options=read_options, parse_options=parse_options)
