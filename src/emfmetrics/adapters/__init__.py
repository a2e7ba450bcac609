"""Adapters implementing core ports."""

from emfmetrics.adapters.logging import LoggingSink

__all__ = ["LoggingSink"]
