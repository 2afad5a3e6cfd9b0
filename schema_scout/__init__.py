"""
schema_scout
==========

Infer the layout of an unknown data file (JSON lines, JSON array or delimited
text) and write it as a declarative YAML configuration for ingestion pipelines.
"""

from .data.formats import Format
from .data.inference import infer_schema, infer_domain, detect

__all__ = ["Format", "infer_schema", "infer_domain", "detect"]
