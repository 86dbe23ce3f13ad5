"""
Curated gap tables.

Static, read-only lookups used by the gap analyzer:
- CURATED_CRITICAL_GAPS: business-critical fields shown on the snapshot
- RECOMMENDATIONS: operator guidance per curated field
- CRITICAL_SECTION_FIELDS: leaf names that are critical within their section
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from brandkit.core.enums import GapSeverity, SectionId


@dataclass(frozen=True)
class CuratedGap:
    path: str
    label: str
    section: str
    severity: GapSeverity


CURATED_CRITICAL_GAPS: tuple[CuratedGap, ...] = (
    CuratedGap("verbal_identity.tagline", "Tagline", SectionId.VERBAL_IDENTITY.value, GapSeverity.CRITICAL),
    CuratedGap(
        "verbal_identity.elevator_pitch", "Elevator Pitch", SectionId.VERBAL_IDENTITY.value, GapSeverity.CRITICAL
    ),
    CuratedGap(
        "visual_identity.logos.primary_logo_url",
        "Primary Logo",
        SectionId.VISUAL_IDENTITY.value,
        GapSeverity.CRITICAL,
    ),
    CuratedGap(
        "visual_identity.color_system.primary_colors",
        "Primary Colors",
        SectionId.VISUAL_IDENTITY.value,
        GapSeverity.IMPORTANT,
    ),
    CuratedGap(
        "audience_positioning.primary_icp",
        "Target Customer",
        SectionId.AUDIENCE_POSITIONING.value,
        GapSeverity.IMPORTANT,
    ),
    CuratedGap("proof_trust.testimonials", "Testimonials", SectionId.PROOF_TRUST.value, GapSeverity.NICE_TO_HAVE),
    CuratedGap("proof_trust.case_studies", "Case Studies", SectionId.PROOF_TRUST.value, GapSeverity.NICE_TO_HAVE),
)

RECOMMENDATIONS: Mapping[str, str] = MappingProxyType({
    "verbal_identity.tagline": "Create a memorable tagline that captures your unique value proposition",
    "verbal_identity.elevator_pitch": "Write a compelling 1-2 sentence pitch explaining what you do",
    "visual_identity.logos.primary_logo_url": "Upload your primary logo to establish brand recognition",
    "visual_identity.color_system.primary_colors": "Define your primary brand colors for consistent visual identity",
    "audience_positioning.primary_icp": "Define your ideal customer profile to focus your messaging",
    "proof_trust.testimonials": "Collect customer testimonials to build credibility and trust",
    "proof_trust.case_studies": "Create case studies showcasing customer success stories",
})

CRITICAL_SECTION_FIELDS: Mapping[str, frozenset[str]] = MappingProxyType({
    SectionId.VERBAL_IDENTITY.value: frozenset({"tagline", "elevator_pitch"}),
    SectionId.AUDIENCE_POSITIONING.value: frozenset({"primary_icp", "positioning_statement"}),
    SectionId.PROOF_TRUST.value: frozenset({"testimonials", "case_studies"}),
})


def recommendation_for(path: str, label: str) -> str:
    return RECOMMENDATIONS.get(path, f"Add {label} to complete your brand profile")
