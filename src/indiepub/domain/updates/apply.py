"""Apply update instructions to post documents."""

from __future__ import annotations

import copy
from dataclasses import replace
from logging import getLogger
from typing import TYPE_CHECKING, Any

from indiepub.domain.errors import InvalidTarget
from indiepub.domain.model import Mf2
from indiepub.domain.updates.dto import UpdateInstruction

if TYPE_CHECKING:
    from collections.abc import Mapping

    from indiepub.domain.model import Document, Properties

log = getLogger(__name__)


def apply_update(
    document: Document | None,
    instruction: UpdateInstruction | Mapping[str, Any],
) -> Document:
    """Return a new document with ``instruction`` applied.

    Passes run delete, then replace, then add. The input document is left
    untouched; only ``mf2.properties`` differ in the result.
    """

    if document is None:
        raise InvalidTarget("No post found to update")
    if not isinstance(instruction, UpdateInstruction):
        instruction = UpdateInstruction.from_body(instruction)

    properties = copy.deepcopy(document.mf2.properties)
    _apply_delete(properties, instruction.delete)
    _apply_replace(properties, instruction.replace)
    _apply_add(properties, instruction.add)

    log.debug(
        "Applied update to %s: delete=%s, replace=%s, add=%s",
        document.url,
        list(instruction.delete),
        list(instruction.replace),
        list(instruction.add),
    )
    return replace(document, mf2=Mf2(type=document.mf2.type, properties=properties))


def _apply_delete(properties: Properties, targets: list[str] | Properties) -> None:
    if isinstance(targets, list):
        for name in targets:
            properties.pop(name, None)
        return

    for name, values in targets.items():
        existing = properties.get(name)
        if existing is None:
            continue
        remaining = [value for value in existing if value not in values]
        if remaining:
            properties[name] = remaining
        else:
            del properties[name]


def _apply_replace(properties: Properties, replacements: Properties) -> None:
    for name, values in replacements.items():
        properties[name] = copy.deepcopy(values)


def _apply_add(properties: Properties, additions: Properties) -> None:
    for name, values in additions.items():
        properties.setdefault(name, []).extend(copy.deepcopy(values))
