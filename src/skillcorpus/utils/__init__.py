"""Utilities package."""

from skillcorpus.utils.def_loader import (
    DefNotFoundError,
    InvalidDefError,
    discover_definitions,
    parse_frontmatter,
)
from skillcorpus.utils.logging import setup_logging

__all__ = [
    "DefNotFoundError",
    "InvalidDefError",
    "discover_definitions",
    "parse_frontmatter",
    "setup_logging",
]
