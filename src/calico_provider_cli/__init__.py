"""Command line helpers for the Calico provider."""

from .config import load_options  # noqa: F401

__all__ = [
    "load_options",
]
