"""
Structure normalizer for brand kits.

PR-2: Raw/partial kit → fully populated ComprehensiveBrandKit.

Main entrypoint: ensure_comprehensive_structure(existing, brand_name, domain)

Responsibilities:
1. Walk the declarative schema (one generic fold, no per-section code)
2. Keep every wrapped field the input already supplies, verbatim
3. Synthesize schema defaults (found / inferred / missing) for the rest
4. Keep a valid gaps_summary, else start from an empty one

Guarantees:
- Never raises on malformed or partial input
- Idempotent: ensure(ensure(x)) == ensure(x)
- Every leaf of the result is a FieldValue or ArrayField
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from datetime import datetime
from typing import Any, Union

from pydantic import ValidationError

from brandkit.kit.config import default_primary_color
from brandkit.kit.dto import GapsSummaryDTO
from brandkit.kit.fields import ArrayField, FieldValue, coerce_field, utcnow
from brandkit.kit.gaps.service import build_gaps_summary
from brandkit.kit.normalization.audit import audit_raw_payload
from brandkit.kit.presets import normalize_hex
from brandkit.kit.schema import SECTION_SCHEMAS, DefaultContext, FieldSpec, iter_field_specs
from brandkit.kit.tree import ComprehensiveBrandKit, SectionNode, split_path

logger = logging.getLogger(__name__)

KitInput = Union[ComprehensiveBrandKit, Mapping[str, Any], None]

DEFAULT_BRAND_NAME = "Brand"
DEFAULT_DOMAIN = "example.com"

_PRIMARY_COLORS_PATH = "visual_identity.color_system.primary_colors"


# =============================================================================
# LOOKUP
# =============================================================================


def _lookup_raw(source: KitInput, parts: Sequence[str]) -> Any:
    """
    Return whatever sits at `parts` in a typed kit or a raw document.

    Raw section objects may be plain nested mappings or the
    {"kind": "section", "children": {...}} form.
    """
    if isinstance(source, ComprehensiveBrandKit):
        return source.resolve(parts)

    node: Any = source
    for part in parts:
        if isinstance(node, SectionNode):
            node = node.children.get(part)
            continue
        if not isinstance(node, Mapping):
            return None
        if node.get("kind") == "section" and isinstance(node.get("children"), Mapping):
            node = node["children"]
        node = node.get(part)
        if node is None:
            return None
    return node


def _existing_field(source: KitInput, full_path: str) -> FieldValue | ArrayField | None:
    raw = _lookup_raw(source, split_path(full_path))
    if raw is None:
        return None
    return coerce_field(raw, path=full_path)


def _primary_color(source: KitInput) -> str:
    """First valid hex among the input's primary colors, else the configured fallback."""
    colors = _existing_field(source, _PRIMARY_COLORS_PATH)
    if isinstance(colors, ArrayField):
        for item in colors.items:
            candidate = item.get("hex") if isinstance(item, Mapping) else item
            color = normalize_hex(candidate)
            if color:
                return color
    return default_primary_color()


def _existing_gaps_summary(source: KitInput) -> GapsSummaryDTO:
    if isinstance(source, ComprehensiveBrandKit):
        return source.gaps_summary.model_copy(deep=True)
    if not isinstance(source, Mapping):
        return GapsSummaryDTO()

    raw = source.get("gaps_summary")
    if isinstance(raw, GapsSummaryDTO):
        return raw.model_copy(deep=True)
    if not isinstance(raw, Mapping):
        return GapsSummaryDTO()
    try:
        return GapsSummaryDTO.model_validate(raw)
    except ValidationError as exc:
        logger.warning("Discarding malformed gaps_summary (%d validation errors)", exc.error_count())
        return GapsSummaryDTO()


# =============================================================================
# BUILD
# =============================================================================


def _place(section: SectionNode, spec: FieldSpec, leaf: FieldValue | ArrayField) -> None:
    """Insert a leaf under its relative path, creating intermediate sections."""
    *parents, name = spec.path.split(".")
    node = section
    for part in parents:
        child = node.children.get(part)
        if not isinstance(child, SectionNode):
            child = SectionNode()
            node.children[part] = child
        node = child
    node.children[name] = leaf


def _build_section(
    section_id: str,
    specs: Sequence[FieldSpec],
    source: KitInput,
    ctx: DefaultContext,
) -> tuple[SectionNode, int]:
    section = SectionNode()
    kept = 0
    for spec in specs:
        full_path = f"{section_id}.{spec.path}"
        leaf = _existing_field(source, full_path)
        if leaf is None:
            leaf = spec.build_default(ctx)
        else:
            kept += 1
        _place(section, spec, leaf)
    return section, kept


def ensure_comprehensive_structure(
    existing: KitInput = None,
    brand_name: str = DEFAULT_BRAND_NAME,
    domain: str = DEFAULT_DOMAIN,
    *,
    now: datetime | None = None,
) -> ComprehensiveBrandKit:
    """
    Build a fully populated brand kit from whatever is available.

    Args:
        existing: None, a raw/partial document, or an existing kit
        brand_name: Used for meta.brand_name, contact_info.company_name, footer
        domain: Used for meta.canonical_domain, contact_info.website, sources
        now: Analysis time for synthesized timestamps (defaults to now, UTC)

    Returns:
        ComprehensiveBrandKit with every schema leaf present.
    """
    if existing is not None and not isinstance(existing, (ComprehensiveBrandKit, Mapping)):
        logger.warning("Ignoring non-mapping brand kit input of type %s", type(existing).__name__)
        existing = None

    if isinstance(existing, Mapping):
        audit = audit_raw_payload(existing)
        logger.debug(
            "Raw kit audit: %d wrapped fields %s, %d malformed",
            audit.wrapped_field_count,
            audit.status_counts,
            len(audit.malformed_paths),
        )

    ctx = DefaultContext(
        brand_name=brand_name,
        domain=domain,
        primary_color=_primary_color(existing),
        now=now or utcnow(),
    )

    sections: dict[str, SectionNode] = {}
    kept_total = 0
    for section_id, specs in SECTION_SCHEMAS.items():
        sections[section_id], kept = _build_section(section_id, specs, existing, ctx)
        kept_total += kept

    kit = ComprehensiveBrandKit(**sections, gaps_summary=_existing_gaps_summary(existing))
    logger.info(
        "Normalized brand kit for %s: kept %d supplied fields, synthesized %d defaults",
        domain,
        kept_total,
        sum(len(specs) for specs in SECTION_SCHEMAS.values()) - kept_total,
    )
    return kit


def load_brand_kit(
    document: Mapping[str, Any] | None,
    brand_name: str = DEFAULT_BRAND_NAME,
    domain: str = DEFAULT_DOMAIN,
) -> ComprehensiveBrandKit:
    """Reload a persisted kit document (see ComprehensiveBrandKit.to_document)."""
    return ensure_comprehensive_structure(document, brand_name, domain)


# =============================================================================
# MERGE
# =============================================================================


def _set_nested(document: dict[str, Any], full_path: str, leaf: FieldValue | ArrayField) -> None:
    *parents, name = full_path.split(".")
    node = document
    for part in parents:
        node = node.setdefault(part, {})
    node[name] = leaf


def merge_preserving_edits(
    existing: KitInput,
    fresh: KitInput,
    brand_name: str = DEFAULT_BRAND_NAME,
    domain: str = DEFAULT_DOMAIN,
    *,
    now: datetime | None = None,
) -> ComprehensiveBrandKit:
    """
    Merge a fresh analysis into an existing kit without losing operator edits.

    For each schema leaf:
    - edited in `existing` (isEdited) → kept
    - otherwise supplied by `fresh` → replaced
    - otherwise the existing field stays (or the default is synthesized)

    The stored gaps_summary is recomputed for the merged kit.
    """
    merged: dict[str, Any] = {}
    preserved = 0
    for full_path, _spec in iter_field_specs():
        current = _existing_field(existing, full_path)
        incoming = _existing_field(fresh, full_path)
        if current is not None and current.is_edited:
            leaf = current
            preserved += 1
        elif incoming is not None:
            leaf = incoming
        else:
            leaf = current
        if leaf is not None:
            _set_nested(merged, full_path, leaf)

    kit = ensure_comprehensive_structure(merged, brand_name, domain, now=now)
    logger.info("Merged fresh analysis for %s, preserved %d edited fields", domain, preserved)
    return kit.model_copy(update={"gaps_summary": build_gaps_summary(kit)})
