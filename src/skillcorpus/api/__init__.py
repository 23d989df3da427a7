"""HTTP API for skillcorpus."""

from skillcorpus.api.app import create_app

__all__ = ["create_app"]
