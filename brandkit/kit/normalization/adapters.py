"""
Analysis payload adapters.

PR-4: Upstream brand analysis → wrapped brand kit fields.

Each section has one adapter function that reads the loose analysis payload
and returns {relative field path: wrapped field}. Adapters only emit fields
the payload actually supports; everything else is left to
ensure_comprehensive_structure, which synthesizes schema defaults.

Registry pattern: adapters are registered in SECTION_ADAPTERS, keyed by
section id, and run in schema order by transform_analysis_to_brand_kit().

Payload shape (all keys optional):
    {
        "brand_kit": {...},             # per-area analysis output
        "brand_scores": {...},          # not read here
        "competitor_analysis": {...},   # may also live under brand_kit
    }
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from brandkit.core.enums import FieldSource, SectionId
from brandkit.kit.fields import (
    ArrayField,
    FieldValue,
    create_found_array_field,
    create_found_field,
    create_inferred_array_field,
    create_inferred_field,
    utcnow,
)
from brandkit.kit.gaps.service import build_gaps_summary
from brandkit.kit.normalization.service import DEFAULT_BRAND_NAME, ensure_comprehensive_structure
from brandkit.kit.schema import get_field_spec
from brandkit.kit.tree import ComprehensiveBrandKit

logger = logging.getLogger(__name__)

SectionFields = dict[str, FieldValue | ArrayField]


@dataclass(frozen=True)
class AdapterContext:
    """Shared inputs for every section adapter."""

    brand_kit: Mapping[str, Any]
    payload: Mapping[str, Any]
    domain: str
    brand_name: str | None
    now: datetime


AdapterFunc = Callable[[AdapterContext], SectionFields]


# =============================================================================
# HELPERS
# =============================================================================


def _safe_get(data: Any, *keys: str, default: Any = None) -> Any:
    """Safely traverse nested dict keys, returning default if any key is missing."""
    result = data
    for key in keys:
        if not isinstance(result, Mapping):
            return default
        result = result.get(key)
        if result is None:
            return default
    return result


def _as_list(value: Any) -> list[Any]:
    return list(value) if isinstance(value, (list, tuple)) else []


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, dict)):
        return not value
    return False


def _positive_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0


class _SectionFields:
    """Collects wrapped fields for one section, skipping empty payload values."""

    def __init__(self, section_id: str, ctx: AdapterContext):
        self.section_id = section_id
        self.ctx = ctx
        self.fields: SectionFields = {}

    def found(
        self,
        path: str,
        value: Any,
        confidence: float,
        notes: str | None = None,
        *,
        source: list[str] | None = None,
    ) -> None:
        if _is_empty(value):
            return
        spec = get_field_spec(f"{self.section_id}.{path}")
        sources = source or [self.ctx.domain]
        if spec.array:
            self.fields[path] = create_found_array_field(
                _as_list(value), spec.description, spec.usage, sources, confidence, notes
            )
        else:
            self.fields[path] = create_found_field(
                value, spec.description, spec.usage, sources, confidence, notes
            )

    def inferred(self, path: str, value: Any, confidence: float, notes: str | None = None) -> None:
        if _is_empty(value):
            return
        spec = get_field_spec(f"{self.section_id}.{path}")
        if spec.array:
            self.fields[path] = create_inferred_array_field(
                _as_list(value), spec.description, spec.usage, confidence, notes
            )
        else:
            self.fields[path] = create_inferred_field(
                value, spec.description, spec.usage, confidence, notes
            )


# =============================================================================
# SECTION ADAPTERS
# =============================================================================


def adapt_meta(ctx: AdapterContext) -> SectionFields:
    kit = ctx.brand_kit
    out = _SectionFields(SectionId.META.value, ctx)

    name = kit.get("brand_name") or ctx.brand_name
    if name:
        out.found("brand_name", name, 1.0 if kit.get("brand_name") else 0.5)
    out.found("industry", _safe_get(kit, "positioning", "industry"), 0.8, "Inferred from site content")
    out.found("category", _safe_get(kit, "positioning", "category"), 0.9)
    out.found("company_type", _safe_get(kit, "positioning", "company_type"), 0.8)
    out.found("region", kit.get("region"), 0.8, "Detected from currency, language, or contact info")

    generated_at = kit.get("generated_at")
    if isinstance(generated_at, str) and generated_at:
        out.found("audit_timestamp", generated_at, 1.0, source=[FieldSource.SYSTEM.value])

    evidence = kit.get("evidence_sources")
    if isinstance(evidence, Mapping):
        out.found(
            "data_sources",
            {
                "onsite": True,
                "web_search": _positive_number(evidence.get("web_searches_performed")),
                "screenshots": _positive_number(evidence.get("screenshots_captured")),
                "manual": False,
            },
            1.0,
            source=[FieldSource.SYSTEM.value],
        )
    return out.fields


def _color_items(colors: Any, role: str, usage: str) -> list[dict[str, str]]:
    items = []
    for color in _as_list(colors):
        hex_value = color.get("hex") if isinstance(color, Mapping) else color
        if isinstance(hex_value, str) and hex_value:
            items.append({"hex": hex_value, "role": role, "usage": usage})
    return items


def adapt_visual_identity(ctx: AdapterContext) -> SectionFields:
    kit = ctx.brand_kit
    visual = kit.get("visual") if isinstance(kit.get("visual"), Mapping) else {}
    logos = kit.get("logos") if isinstance(kit.get("logos"), Mapping) else {}
    out = _SectionFields(SectionId.VISUAL_IDENTITY.value, ctx)

    logo_url = visual.get("logo_url") or logos.get("primary_url")
    out.found("logos.primary_logo_url", logo_url, 1.0, "Extracted from HTML and screenshots")
    if logo_url:
        fallback = "Using primary logo as fallback; verify contrast"
        out.inferred("logos.logo_on_light", logo_url, 0.6, fallback)
        out.inferred("logos.logo_on_dark", logo_url, 0.6, fallback)
    out.found("logos.logo_variations", logos.get("variations"), 0.9)
    out.found("logos.favicon_url", logos.get("favicon_url"), 1.0)

    out.found(
        "color_system.primary_colors",
        _color_items(visual.get("primary_colors"), "primary", "Main brand color for CTAs and links"),
        0.9,
    )
    out.found(
        "color_system.secondary_colors",
        _color_items(visual.get("secondary_colors"), "secondary", "Supporting accents"),
        0.8,
    )

    if visual.get("primary_font"):
        heading = {"name": visual["primary_font"]}
        if visual.get("typography_style"):
            heading["style_notes"] = visual["typography_style"]
        out.found("typography.heading_font", heading, 0.9)
    if visual.get("secondary_font"):
        out.found("typography.body_font", {"name": visual["secondary_font"]}, 0.8)

    if visual.get("button_radius") is not None:
        out.found(
            "components.button_style",
            {"radius": visual["button_radius"], "type": "filled", "shape": "rounded"},
            0.7,
        )

    design_style = visual.get("design_style")
    if isinstance(design_style, str) and "minimal" in design_style.lower():
        out.inferred("components.spacing_vibe", "airy", 0.6, f"Inferred from design style: {design_style}")
    out.found("components.layout_tags", visual.get("layout_patterns"), 0.7)
    out.found("imagery.style_type", visual.get("imagery_style"), 0.8)
    return out.fields


def adapt_verbal_identity(ctx: AdapterContext) -> SectionFields:
    voice = ctx.brand_kit.get("voice_and_tone")
    if not isinstance(voice, Mapping):
        return {}
    out = _SectionFields(SectionId.VERBAL_IDENTITY.value, ctx)
    out.found("tagline", voice.get("tagline"), 0.9)
    out.found("elevator_pitch", voice.get("elevator_pitch"), 0.85)
    out.found("core_value_props", voice.get("value_propositions"), 0.8)
    out.found("tone_of_voice.adjectives", voice.get("tone_adjectives"), 0.75)
    out.found("tone_of_voice.guidance", voice.get("tone_guidance"), 0.7)
    out.found("brand_personality", voice.get("brand_personality"), 0.75)
    out.found("key_phrases", voice.get("key_phrases"), 0.8)
    return out.fields


def adapt_audience_positioning(ctx: AdapterContext) -> SectionFields:
    kit = ctx.brand_kit
    audience = kit.get("audience") if isinstance(kit.get("audience"), Mapping) else {}
    positioning = kit.get("positioning") if isinstance(kit.get("positioning"), Mapping) else {}
    out = _SectionFields(SectionId.AUDIENCE_POSITIONING.value, ctx)

    primary = audience.get("primary_audience")
    if isinstance(primary, Mapping):
        icp = {key: primary.get(key) for key in ("role", "company_type", "company_size") if primary.get(key)}
        out.found("primary_icp", icp, 0.8)
    elif isinstance(primary, str):
        out.found("primary_icp", {"role": primary}, 0.8)
    out.found("secondary_icps", audience.get("secondary_audiences"), 0.7)
    out.found("problems_solved", audience.get("pain_points"), 0.85)
    out.found("benefits_promised", audience.get("goals"), 0.8)
    out.found("category", positioning.get("category"), 0.9)
    out.found("positioning_statement", positioning.get("positioning_statement"), 0.75)
    return out.fields


def adapt_product_offers(ctx: AdapterContext) -> SectionFields:
    kit = ctx.brand_kit
    features = kit.get("features") if isinstance(kit.get("features"), Mapping) else {}
    pricing = kit.get("pricing") if isinstance(kit.get("pricing"), Mapping) else {}
    out = _SectionFields(SectionId.PRODUCT_OFFERS.value, ctx)

    out.found("products", features.get("products"), 0.9)

    plans = []
    for plan in _as_list(pricing.get("plans")):
        if isinstance(plan, Mapping) and plan.get("name"):
            plans.append({"name": plan["name"], "pricing_notes": plan.get("price") or plan.get("pricing_notes")})
        elif isinstance(plan, str) and plan:
            plans.append({"name": plan, "pricing_notes": None})
    out.found("plans.plan_names", plans, 0.95)
    for flag in ("free_trial", "freemium", "demo_only"):
        if isinstance(pricing.get(flag), bool):
            out.found(f"plans.{flag}", pricing[flag], 0.9)

    feature_list = _as_list(features.get("feature_list"))
    if feature_list:
        out.found("key_features", feature_list, 0.85)
    else:
        pillars = _as_list(_safe_get(kit, "content_strategy", "content_pillars"))
        themes = [{"theme": pillar, "features": []} for pillar in pillars if isinstance(pillar, str) and pillar]
        out.inferred("key_features", themes, 0.6, "Inferred from content pillars")
    out.found("guarantees", features.get("guarantees") or pricing.get("guarantees"), 0.9)
    return out.fields


def _named(items: Any) -> list[dict[str, Any]]:
    """Normalize a list of names or {name: ...} objects to {name: ...} objects."""
    named = []
    for item in _as_list(items):
        if isinstance(item, Mapping) and item.get("name"):
            named.append(dict(item))
        elif isinstance(item, str) and item:
            named.append({"name": item})
    return named


def _review_sites(ctx: AdapterContext) -> list[Any]:
    trust = ctx.brand_kit.get("trust_elements")
    return _as_list(_safe_get(trust, "review_sites")) or _as_list(ctx.brand_kit.get("review_sites"))


def adapt_proof_trust(ctx: AdapterContext) -> SectionFields:
    kit = ctx.brand_kit
    trust = kit.get("trust_elements") if isinstance(kit.get("trust_elements"), Mapping) else {}
    out = _SectionFields(SectionId.PROOF_TRUST.value, ctx)

    out.found("client_logos", _named(trust.get("client_logos") or trust.get("customer_logos")), 0.9)
    out.found("testimonials", trust.get("testimonials"), 0.85)

    case_studies = []
    for study in _as_list(trust.get("case_studies")) or _as_list(kit.get("case_studies")):
        if isinstance(study, Mapping):
            case_studies.append(
                {key: study.get(key) for key in ("title", "customer", "industry", "outcomes", "url")}
            )
    out.found("case_studies", case_studies, 0.9)

    reviews = [
        {"platform": site.get("platform") or site.get("name"), "url": site.get("url"), "rating": site.get("rating")}
        for site in _review_sites(ctx)
        if isinstance(site, Mapping)
    ]
    out.found("third_party_reviews", reviews, 0.95)
    out.found("awards_certifications", _named(trust.get("awards") or trust.get("certifications")), 0.8)
    return out.fields


def adapt_seo_identity(ctx: AdapterContext) -> SectionFields:
    kit = ctx.brand_kit
    seo = kit.get("seo_foundation") if isinstance(kit.get("seo_foundation"), Mapping) else {}
    out = _SectionFields(SectionId.SEO_IDENTITY.value, ctx)

    out.found("canonical_pages", seo.get("canonical_pages") or kit.get("canonical_pages"), 0.9)
    out.found("primary_keywords", seo.get("primary_keywords"), 0.85)
    themes = [
        {"theme": theme, "keywords": []} if isinstance(theme, str) else theme
        for theme in _as_list(seo.get("keyword_themes") or seo.get("secondary_keywords"))
        if theme
    ]
    out.found("secondary_keywords", themes, 0.75)
    out.found("branded_keywords", seo.get("branded_keywords"), 0.8)

    serp = seo.get("serp_presence")
    if isinstance(serp, Mapping):
        out.found(
            "serp_snapshot",
            {
                "owned_results": _as_list(serp.get("owned_results")),
                "third_party_results": _as_list(serp.get("third_party_results")),
            },
            0.8,
        )
    if _positive_number(seo.get("technical_score")):
        out.found("technical_score", seo["technical_score"], 0.8)
    return out.fields


def adapt_external_presence(ctx: AdapterContext) -> SectionFields:
    kit = ctx.brand_kit
    out = _SectionFields(SectionId.EXTERNAL_PRESENCE.value, ctx)

    profiles = [
        {key: profile.get(key) for key in ("platform", "url", "followers", "handle")}
        for profile in _as_list(kit.get("social_profiles") or _safe_get(kit, "social", "profiles"))
        if isinstance(profile, Mapping) and profile.get("url")
    ]
    out.found("social_profiles", profiles, 0.95)

    directories = [
        {"name": site.get("name") or site.get("platform"), "url": site.get("url"), "rating": site.get("rating")}
        for site in _review_sites(ctx)
        if isinstance(site, Mapping)
    ]
    out.found("directories_marketplaces", directories, 0.9)
    out.found("other_properties", kit.get("other_properties"), 0.85)
    return out.fields


def adapt_content_assets(ctx: AdapterContext) -> SectionFields:
    kit = ctx.brand_kit
    strategy = kit.get("content_strategy") if isinstance(kit.get("content_strategy"), Mapping) else {}
    inventory = kit.get("content_inventory") if isinstance(kit.get("content_inventory"), Mapping) else {}
    out = _SectionFields(SectionId.CONTENT_ASSETS.value, ctx)

    blog_posts = inventory.get("blog_posts")
    if strategy.get("has_blog") or _positive_number(blog_posts):
        out.found("blog_present", True, 1.0)
    elif strategy.get("has_blog") is False:
        out.found("blog_present", False, 0.8)
    out.found("blog_url", strategy.get("blog_url") or inventory.get("blog_url"), 0.9)
    out.found("posting_frequency", strategy.get("posting_frequency"), 0.7)
    out.found("content_types", strategy.get("content_types"), 0.8)

    total = inventory.get("total_assets")
    if not _positive_number(total):
        counts = [inventory.get(key) for key in ("blog_posts", "case_studies", "guides")]
        total = sum(count for count in counts if _positive_number(count))
    if _positive_number(total):
        out.found("estimated_total_assets", total, 0.85)
    return out.fields


def adapt_competitor_analysis(ctx: AdapterContext) -> SectionFields:
    analysis = ctx.brand_kit.get("competitor_analysis") or ctx.payload.get("competitor_analysis")
    if not isinstance(analysis, Mapping):
        return {}
    insights = analysis.get("insights") if isinstance(analysis.get("insights"), Mapping) else {}
    out = _SectionFields(SectionId.COMPETITOR_ANALYSIS.value, ctx)

    out.found("keyword_categories", analysis.get("keyword_categories"), 0.9)
    if isinstance(analysis.get("competitors_found"), int) and not isinstance(analysis["competitors_found"], bool):
        out.found("competitors_found", analysis["competitors_found"], 0.95)
    out.found("top_competitors", analysis.get("top_competitors"), 0.9)
    out.found("insights.market_overview", insights.get("market_overview"), 0.85)
    out.found("insights.keyword_opportunities", insights.get("keyword_opportunities"), 0.85)
    out.found("insights.awareness_strategy", insights.get("awareness_strategy"), 0.8)
    out.found("insights.competitor_weaknesses", insights.get("competitor_weaknesses"), 0.75)
    return out.fields


def adapt_contact_info(ctx: AdapterContext) -> SectionFields:
    contact = ctx.brand_kit.get("contact")
    if not isinstance(contact, Mapping):
        return {}
    out = _SectionFields(SectionId.CONTACT_INFO.value, ctx)
    out.found("email", contact.get("email"), 0.9)
    out.found("phone", contact.get("phone"), 0.8)
    out.found("address", contact.get("address"), 0.8)
    return out.fields


# =============================================================================
# ADAPTER REGISTRY
# =============================================================================

SECTION_ADAPTERS: dict[str, AdapterFunc] = {
    SectionId.META.value: adapt_meta,
    SectionId.VISUAL_IDENTITY.value: adapt_visual_identity,
    SectionId.VERBAL_IDENTITY.value: adapt_verbal_identity,
    SectionId.AUDIENCE_POSITIONING.value: adapt_audience_positioning,
    SectionId.PRODUCT_OFFERS.value: adapt_product_offers,
    SectionId.PROOF_TRUST.value: adapt_proof_trust,
    SectionId.SEO_IDENTITY.value: adapt_seo_identity,
    SectionId.EXTERNAL_PRESENCE.value: adapt_external_presence,
    SectionId.CONTENT_ASSETS.value: adapt_content_assets,
    SectionId.COMPETITOR_ANALYSIS.value: adapt_competitor_analysis,
    SectionId.CONTACT_INFO.value: adapt_contact_info,
}


def get_adapter(section_id: str) -> AdapterFunc | None:
    """Get the adapter function for a section, or None if unregistered."""
    return SECTION_ADAPTERS.get(section_id)


def _nest(fields: SectionFields) -> dict[str, Any]:
    """{"logos.favicon_url": leaf} -> {"logos": {"favicon_url": leaf}}."""
    section: dict[str, Any] = {}
    for path, leaf in fields.items():
        *parents, name = path.split(".")
        node = section
        for part in parents:
            node = node.setdefault(part, {})
        node[name] = leaf
    return section


def transform_analysis_to_brand_kit(
    payload: Mapping[str, Any] | None,
    domain: str,
    brand_name: str | None = None,
    *,
    now: datetime | None = None,
) -> ComprehensiveBrandKit:
    """
    Build a complete brand kit from an upstream analysis payload.

    Args:
        payload: Analysis output ({"brand_kit": ..., "competitor_analysis": ...})
        domain: Analyzed domain
        brand_name: Fallback when the payload carries no brand name
        now: Analysis time (defaults to now, UTC)

    Returns:
        ComprehensiveBrandKit with gaps_summary computed.

    Malformed payload parts are logged and skipped; this never raises on
    payload content.
    """
    if not isinstance(payload, Mapping):
        if payload is not None:
            logger.warning("Ignoring non-mapping analysis payload of type %s", type(payload).__name__)
        payload = {}
    brand_kit = payload.get("brand_kit")
    if not isinstance(brand_kit, Mapping):
        brand_kit = {}

    ctx = AdapterContext(
        brand_kit=brand_kit,
        payload=payload,
        domain=domain,
        brand_name=brand_name,
        now=now or utcnow(),
    )

    document: dict[str, Any] = {}
    for section_id, adapter in SECTION_ADAPTERS.items():
        try:
            fields = adapter(ctx)
        except (TypeError, ValueError, AttributeError, KeyError) as exc:
            logger.warning("Skipping malformed %s analysis data: %s", section_id, exc)
            continue
        document[section_id] = _nest(fields)

    resolved_name = brand_kit.get("brand_name") or brand_name or DEFAULT_BRAND_NAME
    if not isinstance(resolved_name, str):
        resolved_name = DEFAULT_BRAND_NAME

    kit = ensure_comprehensive_structure(document, resolved_name, domain, now=ctx.now)
    kit = kit.model_copy(update={"gaps_summary": build_gaps_summary(kit)})
    logger.info(
        "Transformed analysis for %s: %d of %d sections had payload data",
        domain,
        sum(1 for section in document.values() if section),
        len(SECTION_ADAPTERS),
    )
    return kit
