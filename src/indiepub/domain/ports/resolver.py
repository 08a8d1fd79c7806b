"""Ports for looking up the mf2 source of a published URL."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence


@runtime_checkable
class SourceResolver(Protocol):
    """Callable port returning the mf2 JSON for ``url``.

    With ``properties`` the result holds only ``{"properties": {...}}`` for
    the requested names; without it the full ``{"type", "properties"}`` item.
    """

    def __call__(
        self,
        url: str,
        properties: Sequence[str] | None = None,
    ) -> dict[str, Any]: ...


__all__ = ["SourceResolver"]
