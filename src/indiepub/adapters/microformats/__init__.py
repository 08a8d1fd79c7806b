"""Microformats2 parsing and source resolution."""

from __future__ import annotations

from .parser import parse_items
from .resolver import HttpSourceResolver, select_properties

__all__ = [
    "HttpSourceResolver",
    "parse_items",
    "select_properties",
]
