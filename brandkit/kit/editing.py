"""
Path-addressed edits over a whole brand kit.

PR-5: Operator edit / reset at tree level.

Paths are dotted, with optional list indexes:
- "verbal_identity.tagline"                                  whole field
- "visual_identity.color_system.primary_colors.items[0].hex" inside a field

Edits inside a field rewrite a copy of the field's value and still go
through update_field_with_edit, so provenance tracking is never bypassed.
The input kit is never mutated; every operation returns a new kit.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import MutableMapping, MutableSequence
from datetime import datetime
from typing import Any

from brandkit.kit.exceptions import UnknownFieldPathError, UnknownSectionError
from brandkit.kit.fields import ArrayField, FieldValue, reset_field_to_original, update_field_with_edit
from brandkit.kit.schema import is_field_path
from brandkit.kit.tree import SECTION_IDS, ComprehensiveBrandKit, KitNode, SectionNode, split_path

logger = logging.getLogger(__name__)


def get_field_by_path(kit: ComprehensiveBrandKit | None, path: str) -> KitNode | None:
    """Return the node at `path`, or None if absent."""
    if kit is None:
        return None
    return kit.resolve(path)


def list_editable_field_paths(kit: ComprehensiveBrandKit) -> list[str]:
    """Every leaf path of the kit, in schema order."""
    return [path for path, _ in kit.iter_fields()]


# =============================================================================
# PATH RESOLUTION
# =============================================================================


def _split_field_path(path: str) -> tuple[str, list[str]]:
    """Split a path into (schema leaf path, sub-path inside the leaf value)."""
    parts = split_path(path)
    if not parts:
        raise UnknownFieldPathError(path, "empty path")
    if parts[0] not in SECTION_IDS:
        raise UnknownSectionError(parts[0])
    for end in range(2, len(parts) + 1):
        candidate = ".".join(parts[:end])
        if is_field_path(candidate):
            return candidate, parts[end:]
    raise UnknownFieldPathError(path)


def _require_leaf(kit: ComprehensiveBrandKit, field_path: str) -> FieldValue | ArrayField:
    node = kit.resolve(field_path)
    if not isinstance(node, (FieldValue, ArrayField)):
        raise UnknownFieldPathError(field_path, "field not present on kit")
    return node


def _replace_leaf(
    kit: ComprehensiveBrandKit,
    field_path: str,
    leaf: FieldValue | ArrayField,
) -> ComprehensiveBrandKit:
    updated = kit.model_copy(deep=True)
    section_id, *parents, name = split_path(field_path)
    node: SectionNode = getattr(updated, section_id)
    for part in parents:
        node = node.children[part]
    node.children[name] = leaf
    return updated


def _assign(container: Any, parts: list[str], new_value: Any, path: str) -> Any:
    """Return a copy of `container` with `new_value` stored at `parts`."""
    root = copy.deepcopy(container)
    if root is None:
        root = {}

    node = root
    for index, part in enumerate(parts):
        last = index == len(parts) - 1
        if isinstance(node, MutableSequence):
            if not part.isdigit() or int(part) >= len(node):
                raise UnknownFieldPathError(path, f"no list index {part!r}")
            key: Any = int(part)
            child = node[key]
        elif isinstance(node, MutableMapping):
            key = part
            child = node.get(key)
        else:
            raise UnknownFieldPathError(path, f"cannot descend into {type(node).__name__}")

        if last:
            node[key] = copy.deepcopy(new_value)
        else:
            if child is None:
                child = [] if parts[index + 1].isdigit() else {}
                node[key] = child
            node = child
    return root


# =============================================================================
# EDIT / RESET
# =============================================================================


def apply_field_edit(
    kit: ComprehensiveBrandKit,
    path: str,
    value: Any,
    *,
    now: datetime | None = None,
) -> tuple[ComprehensiveBrandKit, str]:
    """
    Apply an operator edit at `path`.

    Args:
        kit: The kit to edit (not mutated)
        path: Field path, optionally followed by a sub-path into the value
        value: New value for the field, or for the addressed part of it
        now: Edit timestamp (defaults to now, UTC)

    Returns:
        (new kit, path of the edited field)

    Raises:
        UnknownSectionError: If the path starts with an unknown section.
        UnknownFieldPathError: If the path does not reach a schema field.
    """
    field_path, sub_parts = _split_field_path(path)
    leaf = _require_leaf(kit, field_path)

    if sub_parts:
        # "items" / "value" name the leaf's own payload slot
        if sub_parts[0] == leaf.CURRENT_FIELD:
            sub_parts = sub_parts[1:]
        if sub_parts:
            value = _assign(leaf.current, sub_parts, value, path)

    edited = update_field_with_edit(leaf, value, now=now)
    logger.info("Edited brand kit field %s", path)
    return _replace_leaf(kit, field_path, edited), field_path


def reset_field(kit: ComprehensiveBrandKit, path: str) -> ComprehensiveBrandKit:
    """
    Reset the field at `path` to its captured original.

    A field that never captured an original is left as it is.

    Raises:
        UnknownSectionError: If the path starts with an unknown section.
        UnknownFieldPathError: If the path is not exactly a schema field.
    """
    field_path, sub_parts = _split_field_path(path)
    if sub_parts:
        raise UnknownFieldPathError(path, "reset applies to whole fields")
    leaf = _require_leaf(kit, field_path)
    restored = reset_field_to_original(leaf)
    logger.info("Reset brand kit field %s to status %s", field_path, restored.status)
    return _replace_leaf(kit, field_path, restored)
