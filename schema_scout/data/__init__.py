"""
schema_scout.data
==============

Data handling modules for schema_scout.
"""

from .formats import Format
from .exceptions import (
    ErrorKind,
    InferError,
    EmptyInputError,
    ReadError,
    PatternCompileError,
    WriteError,
)
from .model import Attribute, Domain, Metadata, PrimitiveType, Schema
from .detection import detect_format, detect_separator
from .sampling import LineSample, LineSampler
from .inference import Detection, InferResult, detect, infer_domain, infer_schema

__all__ = [
    "Format", "ErrorKind", "InferError", "EmptyInputError", "ReadError",
    "PatternCompileError", "WriteError", "Attribute", "Domain", "Metadata",
    "PrimitiveType", "Schema", "detect_format", "detect_separator",
    "LineSample", "LineSampler", "Detection", "InferResult", "detect",
    "infer_domain", "infer_schema",
]
