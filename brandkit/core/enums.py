"""
Brand Kit domain enums.

PR-1: Provenance model.
PR-4: Added GapSeverity and ScoreDimension for the gap analyzer.

All enums are defined as Django TextChoices so they serialize as lowercase
strings and carry a human label (section and dimension labels live here).
"""

from django.db import models


class FieldStatus(models.TextChoices):
    """Provenance status of a single brand kit field."""
    FOUND = "found", "Found"
    INFERRED = "inferred", "Inferred"
    MISSING = "missing", "Missing"
    MANUAL = "manual", "Manual"


class GapSeverity(models.TextChoices):
    """How urgently a gap should be filled."""
    CRITICAL = "critical", "Critical"
    IMPORTANT = "important", "Important"
    NICE_TO_HAVE = "nice-to-have", "Nice to have"


class SectionId(models.TextChoices):
    """Fixed top-level sections of a comprehensive brand kit."""
    META = "meta", "Meta & Audit"
    VISUAL_IDENTITY = "visual_identity", "Visual Identity"
    VERBAL_IDENTITY = "verbal_identity", "Verbal Identity"
    AUDIENCE_POSITIONING = "audience_positioning", "Audience & Positioning"
    PRODUCT_OFFERS = "product_offers", "Products & Offers"
    PROOF_TRUST = "proof_trust", "Proof & Trust"
    SEO_IDENTITY = "seo_identity", "SEO Identity"
    EXTERNAL_PRESENCE = "external_presence", "External Presence"
    CONTENT_ASSETS = "content_assets", "Content Assets"
    COMPETITOR_ANALYSIS = "competitor_analysis", "Competitor Analysis"
    CONTACT_INFO = "contact_info", "Contact Information"


class ScoreDimension(models.TextChoices):
    """Brand score dimensions used for strengths and risks."""
    VISUAL_CLARITY = "visual_clarity", "Visual Clarity"
    VERBAL_CLARITY = "verbal_clarity", "Verbal Clarity"
    POSITIONING = "positioning", "Positioning"
    PRESENCE = "presence", "Online Presence"
    CONVERSION_TRUST = "conversion_trust", "Conversion & Trust"


class FieldSource(models.TextChoices):
    """Well-known provenance source tags (domains and URLs are also valid sources)."""
    AI_INFERENCE = "ai_inference", "AI Inference"
    MANUAL = "manual", "Manual"
    SYSTEM = "system", "System"
    WEB_SEARCH = "web_search", "Web Search"
