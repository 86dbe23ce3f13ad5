"""
Unwrapped brand kit view.

PR-7: Wrapped tree → {value, meta} pairs for consumers.

Consumers that only need values (copy generation, templates, the dashboard)
read this view instead of walking wrappers. Every leaf keeps its status,
confidence, sources and description under `meta`; the section nesting of the
kit is preserved.
"""

from __future__ import annotations

import copy
import logging
from typing import Any

from brandkit.kit.dto import FieldMetaDTO, UnwrappedFieldDTO
from brandkit.kit.exceptions import BrandKitError
from brandkit.kit.fields import ArrayField, FieldValue
from brandkit.kit.tree import ComprehensiveBrandKit

logger = logging.getLogger(__name__)


def unwrap_field(field: FieldValue | ArrayField) -> UnwrappedFieldDTO:
    return UnwrappedFieldDTO(
        value=copy.deepcopy(field.current),
        meta=FieldMetaDTO(
            status=field.status,
            confidence=field.confidence,
            sources=list(field.source),
            description=field.description,
        ),
    )


def unwrap_brand_kit(kit: ComprehensiveBrandKit | None) -> dict[str, Any]:
    """
    Reduce every leaf of `kit` to {"value": ..., "meta": {...}}.

    Returns:
        {section_id: nested leaves, ..., "gaps": {critical_gaps, by_section,
        total_completeness}} as plain JSON-compatible data.

    Raises:
        BrandKitError: If there is no kit to unwrap.
    """
    if kit is None:
        raise BrandKitError("No brand kit to unwrap")

    view: dict[str, Any] = {section_id: {} for section_id, _ in kit.iter_sections()}
    for path, field in kit.iter_fields():
        section_id, *parents, name = path.split(".")
        node = view[section_id]
        for part in parents:
            node = node.setdefault(part, {})
        node[name] = unwrap_field(field).model_dump(mode="json")

    summary = kit.gaps_summary
    view["gaps"] = {
        "critical_gaps": [gap.model_dump(mode="json") for gap in summary.critical_gaps],
        "by_section": {
            section_id: stats.model_dump(mode="json") for section_id, stats in summary.by_section.items()
        },
        "total_completeness": summary.total_completeness,
    }
    logger.debug("Unwrapped brand kit with %d leaves", sum(1 for _ in kit.iter_fields()))
    return view
