"""
exceptions.py  ── Custom exceptions for the schema_scout.data module
"""
from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    EMPTY_INPUT = "empty_input"
    READ_ERROR = "read_error"
    PATTERN_COMPILE_ERROR = "pattern_compile_error"
    WRITE_ERROR = "write_error"


class InferError(RuntimeError):
    """Base class for every failure of a schema inference run."""

    kind: ErrorKind


class EmptyInputError(InferError):
    """Raised when the data file holds no line to sample."""

    kind = ErrorKind.EMPTY_INPUT


class ReadError(InferError):
    """Raised when a file cannot be read with the requested options."""

    kind = ErrorKind.READ_ERROR


class PatternCompileError(InferError):
    """Raised when the file-name pattern of a schema is not a valid regex."""

    kind = ErrorKind.PATTERN_COMPILE_ERROR


class WriteError(InferError):
    """Raised when the configuration cannot be persisted."""

    kind = ErrorKind.WRITE_ERROR
