"""
Section completeness criteria.

PR-3: Expected fields + weights per section.

All values are deterministic and versioned for reproducibility. The table is
read-only; weights can be overridden per deployment through
BRANDKIT_WEIGHT_<SECTION_ID> (see brandkit.kit.config).
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from brandkit.core.enums import SectionId
from brandkit.kit.config import section_weight
from brandkit.kit.exceptions import UnknownSectionError


# =============================================================================
# CONSTANTS
# =============================================================================

# Scoring version for future evolution
SCORING_VERSION = "v1"


@dataclass(frozen=True)
class SectionDefinition:
    """
    What "complete" means for one section.

    Attributes:
        section_id: Section key on the kit
        label: Display label
        fields: Expected field paths, relative to the section
        weight: Default contribution to the weighted aggregate
    """

    section_id: str
    label: str
    fields: tuple[str, ...]
    weight: float

    @property
    def effective_weight(self) -> float:
        """Weight after environment overrides."""
        return section_weight(self.section_id, self.weight)

    def to_dict(self) -> dict:
        """Convert definition to dictionary for persistence."""
        return {
            "label": self.label,
            "fields": list(self.fields),
            "weight": self.effective_weight,
            "version": SCORING_VERSION,
        }


_DEFINITIONS: dict[str, SectionDefinition] = {
    SectionId.META: SectionDefinition(
        section_id=SectionId.META.value,
        label=SectionId.META.label,
        fields=(
            "brand_name",
            "canonical_domain",
            "industry",
            "category",
            "primary_language",
            "company_type",
            "region",
        ),
        weight=1.0,
    ),
    SectionId.VISUAL_IDENTITY: SectionDefinition(
        section_id=SectionId.VISUAL_IDENTITY.value,
        label=SectionId.VISUAL_IDENTITY.label,
        fields=(
            "logos.primary_logo_url",
            "logos.logo_on_light",
            "logos.logo_on_dark",
            "logos.favicon_url",
            "logos.logo_variations",
            "color_system.primary_colors",
            "color_system.secondary_colors",
            "color_system.accent_colors",
            "color_system.neutrals",
            "color_system.backgrounds",
            "color_system.gradients",
            "typography.heading_font",
            "typography.body_font",
            "typography.mono_font",
            "typography.scale",
            "components.button_style",
            "components.card_style",
            "components.spacing_vibe",
            "imagery.style_type",
            "imagery.icon_style",
        ),
        weight=1.5,
    ),
    SectionId.VERBAL_IDENTITY: SectionDefinition(
        section_id=SectionId.VERBAL_IDENTITY.value,
        label=SectionId.VERBAL_IDENTITY.label,
        fields=(
            "tagline",
            "elevator_pitch",
            "value_proposition",
            "core_value_props",
            "brand_story",
            "tone_of_voice.adjectives",
            "tone_of_voice.guidance",
            "brand_personality",
            "key_phrases",
            "words_to_avoid",
            "messaging_pillars",
        ),
        weight=1.5,
    ),
    SectionId.AUDIENCE_POSITIONING: SectionDefinition(
        section_id=SectionId.AUDIENCE_POSITIONING.value,
        label=SectionId.AUDIENCE_POSITIONING.label,
        fields=(
            "primary_icp",
            "secondary_icps",
            "problems_solved",
            "benefits_promised",
            "category",
            "positioning_statement",
        ),
        weight=1.3,
    ),
    SectionId.PRODUCT_OFFERS: SectionDefinition(
        section_id=SectionId.PRODUCT_OFFERS.value,
        label=SectionId.PRODUCT_OFFERS.label,
        fields=(
            "products",
            "plans.plan_names",
            "plans.free_trial",
            "plans.freemium",
            "key_features",
            "guarantees",
        ),
        weight=1.2,
    ),
    SectionId.PROOF_TRUST: SectionDefinition(
        section_id=SectionId.PROOF_TRUST.value,
        label=SectionId.PROOF_TRUST.label,
        fields=(
            "client_logos",
            "testimonials",
            "case_studies",
            "third_party_reviews",
            "awards_certifications",
        ),
        weight=1.4,
    ),
    SectionId.SEO_IDENTITY: SectionDefinition(
        section_id=SectionId.SEO_IDENTITY.value,
        label=SectionId.SEO_IDENTITY.label,
        fields=(
            "primary_keywords",
            "secondary_keywords",
            "branded_keywords",
            "technical_score",
        ),
        weight=1.0,
    ),
    SectionId.EXTERNAL_PRESENCE: SectionDefinition(
        section_id=SectionId.EXTERNAL_PRESENCE.value,
        label=SectionId.EXTERNAL_PRESENCE.label,
        fields=(
            "social_profiles",
            "directories_marketplaces",
            "other_properties",
        ),
        weight=1.1,
    ),
    SectionId.CONTENT_ASSETS: SectionDefinition(
        section_id=SectionId.CONTENT_ASSETS.value,
        label=SectionId.CONTENT_ASSETS.label,
        fields=(
            "blog_present",
            "blog_url",
            "posting_frequency",
            "content_types",
        ),
        weight=0.8,
    ),
    SectionId.COMPETITOR_ANALYSIS: SectionDefinition(
        section_id=SectionId.COMPETITOR_ANALYSIS.value,
        label=SectionId.COMPETITOR_ANALYSIS.label,
        fields=(
            "competitors_found",
            "top_competitors",
            "insights.market_overview",
            "insights.keyword_opportunities",
        ),
        weight=0.9,
    ),
    SectionId.CONTACT_INFO: SectionDefinition(
        section_id=SectionId.CONTACT_INFO.value,
        label=SectionId.CONTACT_INFO.label,
        fields=(
            "company_name",
            "website",
            "email",
            "phone",
            "social_links",
        ),
        weight=0.7,
    ),
}

SECTION_FIELD_DEFINITIONS: Mapping[str, SectionDefinition] = MappingProxyType(
    {str(section_id): definition for section_id, definition in _DEFINITIONS.items()}
)


def get_section_definition(section_id: str) -> SectionDefinition:
    """Return the definition for a section; unknown ids are a programmer error."""
    try:
        return SECTION_FIELD_DEFINITIONS[section_id]
    except KeyError:
        raise UnknownSectionError(section_id) from None
