"""
Manual brand kit builder.

PR-7: Operator-supplied basics → complete brand kit.

Used when no analysis has run yet. The values the operator supplies become
`found` fields with source ["manual"] and full confidence; every other leaf
comes from ensure_comprehensive_structure (missing, or an inferred preset
derived from the supplied primary color).
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from datetime import datetime
from typing import Any

from brandkit.core.enums import FieldSource
from brandkit.kit.fields import ArrayField, FieldValue, create_found_array_field, create_found_field, utcnow
from brandkit.kit.gaps.service import build_gaps_summary
from brandkit.kit.normalization.service import ensure_comprehensive_structure
from brandkit.kit.presets import normalize_hex
from brandkit.kit.schema import get_field_spec
from brandkit.kit.tree import ComprehensiveBrandKit

logger = logging.getLogger(__name__)

DEFAULT_PRIMARY_LANGUAGE = "English"
DEFAULT_COLOR_ROLE = "primary"
DEFAULT_COLOR_USAGE = ("buttons", "links", "brand_elements")

MANUAL_DATA_SOURCES = {"onsite": False, "web_search": False, "screenshots": False, "manual": True}


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, dict)):
        return not value
    return False


def _manual_field(full_path: str, value: Any, source: str = FieldSource.MANUAL.value) -> FieldValue | ArrayField:
    spec = get_field_spec(full_path)
    if spec.array:
        items = list(value) if isinstance(value, (list, tuple)) else [value]
        return create_found_array_field(items, spec.description, spec.usage, [source])
    return create_found_field(value, spec.description, spec.usage, [source])


def _color_entries(colors: Sequence[str | Mapping[str, Any]]) -> list[dict[str, Any]]:
    """Accept "#FF5500" or {"hex", "role", "usage"}; entries without a valid hex are dropped."""
    entries: list[dict[str, Any]] = []
    for color in colors:
        raw = color.get("hex") if isinstance(color, Mapping) else color
        hex_value = normalize_hex(raw)
        if hex_value is None:
            logger.warning("Dropping manual color without a valid hex: %r", color)
            continue
        details = color if isinstance(color, Mapping) else {}
        entries.append(
            {
                "hex": hex_value,
                "role": details.get("role") or DEFAULT_COLOR_ROLE,
                "usage": list(details.get("usage") or DEFAULT_COLOR_USAGE),
            }
        )
    return entries


def _set_leaf(document: dict[str, Any], full_path: str, leaf: FieldValue | ArrayField) -> None:
    *parents, name = full_path.split(".")
    node = document
    for part in parents:
        node = node.setdefault(part, {})
    node[name] = leaf


def build_manual_brand_kit(
    brand_name: str,
    domain: str,
    *,
    primary_logo_url: str | None = None,
    primary_colors: Sequence[str | Mapping[str, Any]] = (),
    tagline: str | None = None,
    primary_language: str = DEFAULT_PRIMARY_LANGUAGE,
    values: Mapping[str, Any] | None = None,
    now: datetime | None = None,
) -> ComprehensiveBrandKit:
    """
    Build a complete brand kit from operator input.

    Args:
        brand_name: Official brand name
        domain: Primary website domain
        primary_logo_url: Main logo URL
        primary_colors: Hex strings or {"hex", "role", "usage"} mappings
        tagline: Brand tagline
        primary_language: Primary content language
        values: Any other operator values, keyed by full field path
            ("audience_positioning.problems_solved")
        now: Build time (defaults to now, UTC)

    Returns:
        ComprehensiveBrandKit with gaps_summary computed.

    Raises:
        UnknownSectionError / UnknownFieldPathError: If a key of `values` is
            not a schema field.
    """
    supplied: dict[str, Any] = {
        "meta.brand_name": brand_name,
        "meta.canonical_domain": domain,
        "meta.primary_language": primary_language,
        "visual_identity.logos.primary_logo_url": primary_logo_url,
        "visual_identity.color_system.primary_colors": _color_entries(primary_colors),
        "verbal_identity.tagline": tagline,
    }
    supplied.update(values or {})

    document: dict[str, Any] = {}
    filled = 0
    for full_path, value in supplied.items():
        get_field_spec(full_path)  # unknown paths raise before anything is built
        if _is_blank(value):
            continue
        _set_leaf(document, full_path, _manual_field(full_path, value))
        filled += 1
    _set_leaf(
        document,
        "meta.data_sources",
        _manual_field("meta.data_sources", dict(MANUAL_DATA_SOURCES), FieldSource.SYSTEM.value),
    )

    kit = ensure_comprehensive_structure(document, brand_name, domain, now=now or utcnow())
    kit = kit.model_copy(update={"gaps_summary": build_gaps_summary(kit)})
    logger.info("Built manual brand kit for %s from %d supplied fields", domain, filled)
    return kit
