"""
Shared fixtures for brand kit engine tests.
"""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from brandkit.kit.normalization import ensure_comprehensive_structure

FIXED_NOW = datetime(2025, 3, 14, 9, 30, tzinfo=timezone.utc)


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def empty_kit():
    """Kit synthesized from nothing but a brand name and domain."""
    return ensure_comprehensive_structure(None, "Acme", "acme.com", now=FIXED_NOW)


@pytest.fixture
def analysis_payload() -> dict:
    """Representative upstream analysis output."""
    return {
        "brand_kit": {
            "brand_name": "Acme Analytics",
            "generated_at": "2025-03-14T09:00:00Z",
            "region": "North America",
            "evidence_sources": {"web_searches_performed": 4, "screenshots_captured": 0},
            "positioning": {
                "industry": "Software",
                "category": "Product analytics",
                "company_type": "B2B SaaS",
                "positioning_statement": "The analytics platform for product teams",
            },
            "visual": {
                "logo_url": "https://acme.com/logo.svg",
                "primary_colors": ["#FF5500", {"hex": "#222222"}],
                "secondary_colors": ["#00AAFF"],
                "primary_font": "Inter",
                "typography_style": "Geometric sans",
                "secondary_font": "Source Serif",
                "button_radius": "6px",
                "design_style": "Minimal and clean",
                "layout_patterns": ["hero", "grid"],
                "imagery_style": "Product screenshots",
            },
            "logos": {"favicon_url": "https://acme.com/favicon.ico", "variations": ["mono"]},
            "voice_and_tone": {
                "tagline": "Know your users",
                "elevator_pitch": "Acme turns product usage into decisions.",
                "value_propositions": ["Fast setup", "Privacy first"],
                "tone_adjectives": ["confident", "clear"],
                "tone_guidance": "Short sentences, no jargon.",
                "brand_personality": "The expert friend",
                "key_phrases": ["decisions, not dashboards"],
            },
            "audience": {
                "primary_audience": {"role": "Product manager", "company_size": "50-500"},
                "secondary_audiences": ["Growth teams"],
                "pain_points": ["Siloed data"],
                "goals": ["Ship what users want"],
            },
            "features": {
                "products": ["Acme Insights"],
                "feature_list": ["Funnels", "Retention"],
            },
            "pricing": {
                "plans": [{"name": "Starter", "price": "$49/mo"}, "Enterprise"],
                "free_trial": True,
                "freemium": False,
            },
            "trust_elements": {
                "client_logos": ["Globex", {"name": "Initech"}],
                "testimonials": [{"quote": "Indispensable.", "author": "Jane Doe"}],
                "review_sites": [{"platform": "G2", "url": "https://g2.com/acme", "rating": 4.7}],
            },
            "seo_foundation": {
                "primary_keywords": ["product analytics"],
                "keyword_themes": ["retention"],
                "serp_presence": {"owned_results": ["acme.com"]},
            },
            "social_profiles": [
                {"platform": "linkedin", "url": "https://linkedin.com/company/acme", "followers": 1200},
                {"platform": "x"},
            ],
            "content_strategy": {"has_blog": True, "posting_frequency": "weekly"},
            "content_inventory": {"blog_posts": 40, "case_studies": 3, "guides": 2},
            "contact": {"email": "hello@acme.com"},
        },
        "brand_scores": {
            "visual_clarity": 82,
            "verbal_clarity": 74,
            "positioning": 40,
            "presence": 55,
            "conversion_trust": 61,
        },
        "competitor_analysis": {
            "competitors_found": 5,
            "top_competitors": [{"name": "Globex Metrics"}],
            "insights": {"market_overview": "Crowded, feature-driven market"},
        },
    }
