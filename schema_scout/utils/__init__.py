"""
schema_scout.utils
===============

Utility functions for schema_scout.
"""
from .json2md import config_to_markdown

__all__ = ["config_to_markdown"]
