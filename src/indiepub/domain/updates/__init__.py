"""Partial-update subsystem for post documents."""

from __future__ import annotations

from .apply import apply_update
from .dto import UPDATE_ACTION, UpdateInstruction

__all__ = [
    "UPDATE_ACTION",
    "UpdateInstruction",
    "apply_update",
]
