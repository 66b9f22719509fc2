# utils/__init__.py
"""General utility functions for the Biglio writing assistant."""

from .logging import setup_logging

__all__ = ["setup_logging"]
