"""
emitter.py  ── YAML rendering of an inferred Domain
"""
from __future__ import annotations

import logging

import yaml

from .exceptions import WriteError
from .filesystems import FileSystemHandler
from .model import Domain

logger = logging.getLogger(__name__)


def render_config(domain: Domain) -> str:
    """YAML text of *domain*, keys in document order."""
    return yaml.safe_dump(
        domain.to_dict(),
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
    )


def emit_config(domain: Domain, save_path: str) -> str:
    """
    Write the YAML configuration of *domain* to *save_path*.

    An existing file is replaced only once the new content is fully written.

    Returns:
        The YAML text that was written.

    Raises:
        WriteError: If the file cannot be written.
    """
    text = render_config(domain)
    try:
        FileSystemHandler.write_text_atomic(str(save_path), text)
    except OSError as exc:
        raise WriteError(f"Cannot write configuration to {save_path!r}: {exc}") from exc
    logger.info("Configuration for domain %r written to %s", domain.name, save_path)
    return text
