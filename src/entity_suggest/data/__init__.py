"""Bundled static data."""

from .reference_lists import REFERENCE_LISTS

__all__ = ["REFERENCE_LISTS"]
