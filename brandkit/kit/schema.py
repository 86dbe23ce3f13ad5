"""
Declarative brand kit schema.

PR-2: One FieldSpec per leaf, grouped by section.

The normalizer, the analysis adapters and the edit layer all walk this table
instead of hand-written per-section code. Each FieldSpec knows how to build
its own default:
- missing (the common case)
- found from the inputs (brand name, domain, analysis time)
- inferred from a preset, with a confidence in 0.5..0.9 and an explanatory note
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Any

from brandkit.core.enums import FieldSource, SectionId
from brandkit.kit import presets
from brandkit.kit.exceptions import UnknownFieldPathError, UnknownSectionError
from brandkit.kit.fields import (
    ArrayField,
    FieldValue,
    create_found_field,
    create_inferred_array_field,
    create_inferred_field,
    create_missing_array_field,
    create_missing_field,
)


@dataclass(frozen=True)
class DefaultContext:
    """Inputs available when synthesizing defaults."""

    brand_name: str
    domain: str
    primary_color: str
    now: datetime


DefaultBuilder = Callable[["FieldSpec", DefaultContext], "FieldValue | ArrayField"]


def _missing_default(spec: FieldSpec, ctx: DefaultContext) -> FieldValue | ArrayField:
    if spec.array:
        return create_missing_array_field(spec.description, spec.usage)
    return create_missing_field(spec.description, spec.usage)


@dataclass(frozen=True)
class FieldSpec:
    """
    One leaf of the schema.

    Attributes:
        path: Path relative to the section ("logos.primary_logo_url")
        description: Human description stored on the field
        usage: Where the value is used downstream
        array: True for ArrayField leaves
        default: Builder for the value used when input has no wrapped field
    """

    path: str
    description: str
    usage: tuple[str, ...] = ()
    array: bool = False
    default: DefaultBuilder = field(default=_missing_default, compare=False, repr=False)

    @property
    def name(self) -> str:
        """Leaf name (last path segment)."""
        return self.path.rsplit(".", 1)[-1]

    def build_default(self, ctx: DefaultContext) -> FieldValue | ArrayField:
        return self.default(self, ctx)


def _found(value_of: Callable[[DefaultContext], Any], source: str | None = None) -> DefaultBuilder:
    """Default observed from the inputs; source is the domain unless given."""

    def build(spec: FieldSpec, ctx: DefaultContext) -> FieldValue:
        return create_found_field(value_of(ctx), spec.description, spec.usage, [source or ctx.domain])

    return build


def _inferred(
    value_of: Callable[[DefaultContext], Any],
    confidence: float,
    notes: str,
) -> DefaultBuilder:
    def build(spec: FieldSpec, ctx: DefaultContext) -> FieldValue | ArrayField:
        if spec.array:
            return create_inferred_array_field(
                value_of(ctx), spec.description, spec.usage, confidence, notes
            )
        return create_inferred_field(value_of(ctx), spec.description, spec.usage, confidence, notes)

    return build


def _value(spec_path: str, description: str, *usage: str, default: DefaultBuilder | None = None) -> FieldSpec:
    if default is None:
        return FieldSpec(spec_path, description, tuple(usage))
    return FieldSpec(spec_path, description, tuple(usage), default=default)


def _array(spec_path: str, description: str, *usage: str, default: DefaultBuilder | None = None) -> FieldSpec:
    if default is None:
        return FieldSpec(spec_path, description, tuple(usage), array=True)
    return FieldSpec(spec_path, description, tuple(usage), array=True, default=default)


_SYSTEM = FieldSource.SYSTEM.value
_PRIMARY_COLOR_NOTE = "Inferred from primary color"


# =============================================================================
# SECTION SCHEMAS
# =============================================================================

_SCHEMAS: dict[str, tuple[FieldSpec, ...]] = {
    SectionId.META: (
        _value("brand_name", "Brand name", "everywhere", default=_found(lambda ctx: ctx.brand_name)),
        _value("canonical_domain", "Primary domain", "everywhere", default=_found(lambda ctx: ctx.domain)),
        _value("industry", "Industry classification", "targeting", "content"),
        _value("category", "Business category", "targeting"),
        _value(
            "primary_language", "Primary language", "content",
            default=_inferred(lambda ctx: "en", 0.9, "Inferred from website"),
        ),
        _value("company_type", "Company type (B2B, B2C, SaaS)", "targeting"),
        _value("region", "Primary region", "targeting"),
        _value(
            "audit_timestamp", "Analysis timestamp", "audit",
            default=_found(lambda ctx: ctx.now.isoformat(), source=_SYSTEM),
        ),
        _value(
            "data_sources", "Data sources used", "audit",
            default=_found(
                lambda ctx: {"onsite": True, "web_search": False, "screenshots": False, "manual": False},
                source=_SYSTEM,
            ),
        ),
    ),
    SectionId.VISUAL_IDENTITY: (
        _value("logos.primary_logo_url", "Primary logo URL", "slides", "header"),
        _value("logos.logo_on_light", "Logo for light backgrounds", "slides"),
        _value("logos.logo_on_dark", "Logo for dark backgrounds", "slides"),
        _array("logos.logo_variations", "Logo variations", "brand-kit"),
        _value("logos.favicon_url", "Favicon URL", "browser"),
        _value(
            "logos.logo_rules", "Logo usage rules", "brand-kit",
            default=_inferred(lambda ctx: presets.logo_rules(), 0.6, "Standard logo guidelines"),
        ),
        _array("color_system.primary_colors", "Primary brand colors", "buttons", "links", "cta"),
        _array("color_system.secondary_colors", "Secondary brand colors", "accents", "highlights"),
        _array("color_system.accent_colors", "Accent colors", "highlights", "alerts"),
        _array(
            "color_system.neutrals", "Neutral colors", "backgrounds", "text",
            default=_inferred(lambda ctx: presets.neutral_swatches(), 0.8, "Standard neutral palette"),
        ),
        _value(
            "color_system.text_colors", "Text colors", "typography",
            default=_inferred(lambda ctx: presets.text_colors(), 0.8, "Standard text colors"),
        ),
        _value(
            "color_system.backgrounds", "Background colors", "layouts",
            default=_inferred(lambda ctx: presets.backgrounds(), 0.8, "Standard backgrounds"),
        ),
        _array("color_system.gradients", "Brand gradients", "backgrounds", "effects"),
        _value("typography.heading_font", "Heading font", "headings", "titles"),
        _value("typography.body_font", "Body font", "paragraphs", "content"),
        _value(
            "typography.mono_font", "Monospace font", "code",
            default=_inferred(lambda ctx: presets.mono_font(), 0.5, "Standard mono font"),
        ),
        _value("typography.accent_font", "Accent/display font", "special"),
        _value(
            "typography.scale", "Typography scale", "all-text",
            default=_inferred(lambda ctx: presets.typography_scale(), 0.7, "Standard Major Third scale"),
        ),
        _value(
            "components.button_style", "Primary button style", "cta", "forms",
            default=_inferred(
                lambda ctx: presets.button_style(ctx.primary_color), 0.6, _PRIMARY_COLOR_NOTE
            ),
        ),
        _value(
            "components.button_secondary_style", "Secondary button style", "secondary-cta",
            default=_inferred(
                lambda ctx: presets.secondary_button_style(ctx.primary_color), 0.6, _PRIMARY_COLOR_NOTE
            ),
        ),
        _value(
            "components.card_style", "Card style on light background", "cards", "panels",
            default=_inferred(lambda ctx: presets.card_style(), 0.6, "Standard card style"),
        ),
        _value(
            "components.card_dark_style", "Card style on dark background", "cards", "panels",
            default=_inferred(lambda ctx: presets.card_dark_style(), 0.6, "Dark mode card"),
        ),
        _value(
            "components.input_style", "Input field style", "forms",
            default=_inferred(
                lambda ctx: presets.input_style(ctx.primary_color), 0.6, _PRIMARY_COLOR_NOTE
            ),
        ),
        _value("components.spacing_vibe", "Spacing style", "layouts"),
        _array("components.layout_tags", "Layout style tags", "design"),
        _value("imagery.style_type", "Imagery style type", "content"),
        _value("imagery.illustration_style", "Illustration style", "graphics"),
        _value("imagery.icon_style", "Icon style", "ui"),
        _array("imagery.sample_images", "Sample brand images", "reference"),
        _value("imagery.style_description", "Imagery style description", "guidelines"),
    ),
    SectionId.VERBAL_IDENTITY: (
        _value("tagline", "Brand tagline", "hero", "marketing"),
        _value("elevator_pitch", "Elevator pitch", "about", "marketing"),
        _value("value_proposition", "Value proposition", "hero", "marketing"),
        _array("core_value_props", "Core value propositions", "marketing"),
        _value("brand_story", "Brand story", "about"),
        _array("tone_of_voice.adjectives", "Tone adjectives", "content"),
        _value("tone_of_voice.guidance", "Voice guidance", "content"),
        _value("brand_personality", "Brand personality", "content"),
        _array("key_phrases", "Key brand phrases", "marketing"),
        _array("words_to_avoid", "Words to avoid", "content"),
        _array("brand_words", "Brand vocabulary", "content"),
        _array("messaging_pillars", "Messaging pillars", "content-strategy"),
    ),
    SectionId.AUDIENCE_POSITIONING: (
        _value("primary_icp", "Primary ICP", "targeting"),
        _array("secondary_icps", "Secondary ICPs", "targeting"),
        _array("problems_solved", "Problems solved", "messaging"),
        _array("benefits_promised", "Benefits promised", "messaging"),
        _value("category", "Market category", "positioning"),
        _value("positioning_statement", "Positioning statement", "strategy"),
    ),
    SectionId.PRODUCT_OFFERS: (
        _array("products", "Products", "offerings"),
        _array("plans.plan_names", "Plan names", "pricing"),
        _value("plans.free_trial", "Free trial available", "pricing"),
        _value("plans.freemium", "Freemium option", "pricing"),
        _value("plans.demo_only", "Demo only", "pricing"),
        _array("key_features", "Key features", "product"),
        _array("guarantees", "Guarantees", "trust"),
    ),
    SectionId.PROOF_TRUST: (
        _array("client_logos", "Client logos", "social-proof"),
        _array("testimonials", "Testimonials", "social-proof"),
        _array("case_studies", "Case studies", "social-proof"),
        _array("third_party_reviews", "Third-party reviews", "social-proof"),
        _array("awards_certifications", "Awards & certifications", "trust"),
    ),
    SectionId.SEO_IDENTITY: (
        _array("canonical_pages", "Canonical pages", "seo"),
        _array("primary_keywords", "Primary keywords", "seo"),
        _array("secondary_keywords", "Secondary keywords", "seo"),
        _array("branded_keywords", "Branded keywords", "seo"),
        _value("serp_snapshot", "SERP snapshot", "seo"),
        _value("technical_score", "Technical SEO score", "seo"),
    ),
    SectionId.EXTERNAL_PRESENCE: (
        _array("social_profiles", "Social profiles", "presence"),
        _array("directories_marketplaces", "Directories & marketplaces", "presence"),
        _array("other_properties", "Other properties", "presence"),
    ),
    SectionId.CONTENT_ASSETS: (
        _value("blog_present", "Blog present", "content"),
        _value("blog_url", "Blog URL", "content"),
        _value("posting_frequency", "Posting frequency", "content"),
        _array("content_types", "Content types", "content"),
        _value("estimated_total_assets", "Total assets", "content"),
    ),
    SectionId.COMPETITOR_ANALYSIS: (
        _value("keyword_categories", "Keyword categories", "seo"),
        _value("competitors_found", "Competitors found", "competitive"),
        _array("top_competitors", "Top competitors", "competitive"),
        _value("insights.market_overview", "Market overview", "strategy"),
        _array("insights.keyword_opportunities", "Keyword opportunities", "seo"),
        _value("insights.awareness_strategy", "Awareness strategy", "strategy"),
        _array("insights.competitor_weaknesses", "Competitor weaknesses", "competitive"),
    ),
    SectionId.CONTACT_INFO: (
        _value("company_name", "Company name", "contact", default=_found(lambda ctx: ctx.brand_name)),
        _value(
            "website", "Website URL", "contact",
            default=_found(lambda ctx: f"https://{ctx.domain}"),
        ),
        _value("email", "Contact email", "contact"),
        _value("phone", "Phone number", "contact"),
        _value("address", "Address", "contact"),
        _array("social_links", "Social links", "contact"),
        _value(
            "footer_text", "Footer text", "footer",
            default=_inferred(lambda ctx: f"© {ctx.now.year} {ctx.brand_name}", 0.9, "Generated footer"),
        ),
    ),
}

SECTION_SCHEMAS: Mapping[str, tuple[FieldSpec, ...]] = MappingProxyType(
    {str(section_id): specs for section_id, specs in _SCHEMAS.items()}
)

SECTION_LABELS: Mapping[str, str] = MappingProxyType(
    {section_id.value: section_id.label for section_id in SectionId}
    | {"gaps_summary": "Gaps Summary"}
)

_SPEC_INDEX: Mapping[str, FieldSpec] = MappingProxyType(
    {
        f"{section_id}.{spec.path}": spec
        for section_id, specs in SECTION_SCHEMAS.items()
        for spec in specs
    }
)


def section_schema(section_id: str) -> tuple[FieldSpec, ...]:
    try:
        return SECTION_SCHEMAS[section_id]
    except KeyError:
        raise UnknownSectionError(section_id) from None


def iter_field_specs() -> Iterator[tuple[str, FieldSpec]]:
    """Yield (full path, spec) for every leaf in schema order."""
    yield from _SPEC_INDEX.items()


def get_field_spec(full_path: str) -> FieldSpec:
    """Look up a leaf by its full path ("verbal_identity.tagline")."""
    try:
        return _SPEC_INDEX[full_path]
    except KeyError:
        section_id = full_path.split(".", 1)[0]
        if section_id not in SECTION_SCHEMAS:
            raise UnknownSectionError(section_id) from None
        raise UnknownFieldPathError(full_path) from None


def is_field_path(full_path: str) -> bool:
    return full_path in _SPEC_INDEX


def humanize_field_name(name: str) -> str:
    """Title-case a snake_case leaf name ("primary_logo_url" -> "Primary Logo Url")."""
    return " ".join(word[:1].upper() + word[1:] for word in name.split("_") if word)
