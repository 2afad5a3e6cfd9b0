"""Utilities for converting an inferred configuration to Markdown format.

This module renders the plain dict form of a Domain (``Domain.to_dict()``)
as Markdown for better human readability in CLI output.
"""

from typing import Any, Dict, Iterator, List

import pandas as pd


def config_to_markdown(config: Dict[str, Any]) -> str:
    """
    Convert a domain configuration to a Markdown formatted string.

    One section per schema: its pattern, its read options and a table of
    attributes. Nested attributes are listed with dotted names.

    Args:
        config (Dict[str, Any]): Domain mapping with keys 'name', 'directory'
            and 'schemas'; each schema has 'name', 'pattern', 'attributes' and
            optionally 'metadata'.

    Returns:
        str: Markdown formatted representation of the configuration.
    """
    markdown = [f"# Domain `{config.get('name', '')}`\n"]
    markdown.append(f"Directory: `{config.get('directory', '')}`\n")

    for schema in config.get("schemas", []):
        markdown.append(f"## Schema `{schema.get('name', '')}`\n")
        markdown.append(f"Pattern: `{schema.get('pattern', '')}`\n")

        metadata = schema.get("metadata")
        if metadata:
            options = [f"{key}={_format_value(value)}" for key, value in metadata.items()]
            markdown.append("Metadata: " + ", ".join(options) + "\n")

        rows = list(_attribute_rows(schema.get("attributes", [])))
        if rows:
            df = pd.DataFrame(rows)
            markdown.append(df.to_markdown(index=False, tablefmt="github"))
            markdown.append("")

    return "\n".join(markdown)


def _attribute_rows(attributes: List[Dict[str, Any]], prefix: str = "") -> Iterator[Dict[str, str]]:
    for attr in attributes:
        name = f"{prefix}{attr.get('name', '')}"
        dtype = str(attr.get("type", ""))
        if attr.get("array"):
            dtype = f"array<{dtype}>"
        yield {
            "Attribute": name,
            "Type": dtype,
            "Required": "yes" if attr.get("required") else "no",
        }
        yield from _attribute_rows(attr.get("attributes", []), prefix=f"{name}.")


def _format_value(value: Any) -> str:
    """Format a metadata value for display."""
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, str) and len(value) == 1 and not value.isalnum():
        return repr(value)
    return str(value)
