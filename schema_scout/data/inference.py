"""
schema_scout.data.inference
==========================

Schema inference for a data file of unknown layout.

Public API
----------
• detect(path) → Detection                          - format, separator, encoding
• infer_domain(domain, schema, path) → Domain       - full inference, raises InferError
• infer_schema(domain, schema, path, save_path) → InferResult
                                                     - inference + YAML config, never raises InferError

Example
-------

>>> from schema_scout.data import infer_schema
>>> result = infer_schema("sales", "orders", "/data/orders.csv", "orders.yml", header=True)
>>> result.ok
True
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from . import assembler
from .detection import detect_format, detect_separator
from .emitter import emit_config
from .exceptions import ErrorKind, InferError
from .formats import Format
from .model import Domain
from .reader import read_columns
from .sampling import DEFAULT_BLOCK_SIZE, SAMPLE_LINES, LineSample, LineSampler

logger = logging.getLogger(__name__)

__all__ = ["Detection", "InferResult", "detect", "infer_domain", "infer_schema"]


@dataclass(frozen=True)
class Detection:
    """What the line heuristics found out about a file."""

    format: Format
    separator: Optional[str]
    encoding: str
    sample: LineSample


@dataclass(frozen=True)
class InferResult:
    """Outcome of :func:`infer_schema`: either a Domain or the error that stopped the run."""

    domain: Optional[Domain] = None
    error: Optional[InferError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def error_kind(self) -> Optional[ErrorKind]:
        return self.error.kind if self.error is not None else None

    def unwrap(self) -> Domain:
        if self.error is not None:
            raise self.error
        return self.domain


# ============================== public helpers ============================== #


def detect(
    path: str,
    *,
    separator: Optional[str] = None,
    encoding: Optional[str] = None,
    sample_size: int = SAMPLE_LINES,
    block_size: int = DEFAULT_BLOCK_SIZE,
    use_threads: bool = True,
) -> Detection:
    """
    Classify the container format of *path* and, for DSV, find its delimiter.

    Args:
        path: Local path or ADLS Gen2 URL of the data file.
        separator: Delimiter to use instead of detecting one (DSV only).
        encoding: Text encoding; sniffed from the file when None.
        sample_size: Number of leading lines scored by the separator detector.
        block_size: Partition size in bytes for the line scan.
        use_threads: Scan partitions in parallel.

    Raises:
        ValueError: If *separator* is not a single character or *sample_size*
            is not positive.
        EmptyInputError: If the file holds no line.
        ReadError: If the file cannot be read or decoded.
    """
    if separator is not None and len(separator) != 1:
        raise ValueError(f"separator must be a single character, not {separator!r}")
    if sample_size <= 0:
        raise ValueError("sample_size must be positive")

    sampler = LineSampler(path, encoding=encoding, block_size=block_size, use_threads=use_threads)
    sample = sampler.endpoints()
    fmt = detect_format(sample.first, sample.last)
    logger.info("Detected format %s for %s", fmt.name, path)

    if fmt is not Format.DSV:
        if separator is not None:
            logger.warning("Ignoring separator %r: %s is not delimiter-separated", separator, path)
        separator = None
    elif separator is None:
        lines = sampler.head(sample_size)
        logger.debug("Separator sample for %s: %r", path, lines)
        separator = detect_separator(lines)

    return Detection(format=fmt, separator=separator, encoding=sampler.encoding, sample=sample)


def infer_domain(
    domain_name: str,
    schema_name: str,
    data_path: str,
    header: bool = False,
    *,
    separator: Optional[str] = None,
    encoding: Optional[str] = None,
    sample_size: int = SAMPLE_LINES,
    literal_pattern: bool = False,
    block_size: int = DEFAULT_BLOCK_SIZE,
    use_threads: bool = True,
) -> Domain:
    """
    Infer the Domain configuration describing *data_path*.

    Each step runs once and the first failure propagates.

    Raises:
        EmptyInputError, ReadError, PatternCompileError: see :class:`InferError`.
    """
    data_path = str(data_path)
    found = detect(
        data_path,
        separator=separator,
        encoding=encoding,
        sample_size=sample_size,
        block_size=block_size,
        use_threads=use_threads,
    )
    columns = read_columns(
        data_path,
        found.format,
        separator=found.separator,
        header=header,
        encoding=found.encoding,
        use_threads=use_threads,
    )
    metadata = assembler.build_metadata(found.format, header, found.separator, found.encoding)
    return assembler.assemble_domain(
        domain_name,
        schema_name,
        data_path,
        columns,
        metadata,
        literal_pattern=literal_pattern,
    )


def infer_schema(
    domain_name: str,
    schema_name: str,
    data_path: str,
    save_path: str,
    header: bool = False,
    **options,
) -> InferResult:
    """
    Infer the schema of *data_path* and write it as a YAML config to *save_path*.

    Keyword options are those of :func:`infer_domain`. Inference failures do
    not raise: the returned result carries the error, and *save_path* is left
    untouched.
    """
    try:
        domain = infer_domain(domain_name, schema_name, data_path, header, **options)
        emit_config(domain, save_path)
    except InferError as exc:
        logger.error("Schema inference for %s failed: %s", data_path, exc)
        return InferResult(error=exc)
    return InferResult(domain=domain)
