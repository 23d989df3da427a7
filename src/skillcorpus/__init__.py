"""Tooling for Markdown skill-document corpora."""

__version__ = "0.1.0"
