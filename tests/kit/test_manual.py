"""
PR-7 Tests: Manual brand kit builder.

Test Categories:
A) Supplied values - found, source ["manual"], full confidence
B) Completion - every other leaf synthesized, presets follow the primary color
C) Validation - blank values skipped, bad colors dropped, unknown paths raise
"""

from __future__ import annotations

import pytest

from brandkit.core.enums import FieldStatus
from brandkit.kit.editing import apply_field_edit, reset_field
from brandkit.kit.exceptions import UnknownFieldPathError, UnknownSectionError
from brandkit.kit.manual import MANUAL_DATA_SOURCES, build_manual_brand_kit
from brandkit.kit.normalization import ensure_comprehensive_structure
from brandkit.kit.schema import iter_field_specs


@pytest.fixture
def manual_kit(fixed_now):
    return build_manual_brand_kit(
        "Acme",
        "acme.com",
        primary_logo_url="https://acme.com/logo.svg",
        primary_colors=["#FF5500", {"hex": "222222", "role": "text", "usage": ["body"]}],
        tagline="Know your users",
        now=fixed_now,
    )


# =============================================================================
# SUPPLIED VALUES
# =============================================================================


@pytest.mark.unit
class TestSuppliedValues:
    @pytest.mark.parametrize(
        "path,value",
        [
            ("meta.brand_name", "Acme"),
            ("meta.canonical_domain", "acme.com"),
            ("meta.primary_language", "English"),
            ("visual_identity.logos.primary_logo_url", "https://acme.com/logo.svg"),
            ("verbal_identity.tagline", "Know your users"),
        ],
    )
    def test_supplied_values_are_found_manual(self, manual_kit, path, value):
        field = manual_kit.resolve(path)

        assert field.value == value
        assert field.status == FieldStatus.FOUND
        assert field.source == ["manual"]
        assert field.confidence == 1.0
        assert field.original_value == value

    def test_primary_colors_get_defaults(self, manual_kit):
        colors = manual_kit.resolve("visual_identity.color_system.primary_colors")

        assert colors.status == FieldStatus.FOUND
        assert colors.items == [
            {"hex": "#FF5500", "role": "primary", "usage": ["buttons", "links", "brand_elements"]},
            {"hex": "#222222", "role": "text", "usage": ["body"]},
        ]

    def test_data_sources_mark_manual(self, manual_kit):
        data_sources = manual_kit.resolve("meta.data_sources")

        assert data_sources.value == MANUAL_DATA_SOURCES
        assert data_sources.source == ["system"]

    def test_extra_values_by_path(self, fixed_now):
        kit = build_manual_brand_kit(
            "Acme",
            "acme.com",
            values={"audience_positioning.problems_solved": ["Guesswork"], "meta.industry": "Software"},
            now=fixed_now,
        )

        assert kit.resolve("audience_positioning.problems_solved").items == ["Guesswork"]
        assert kit.resolve("meta.industry").source == ["manual"]


# =============================================================================
# COMPLETION
# =============================================================================


@pytest.mark.unit
class TestCompletion:
    def test_every_leaf_present(self, manual_kit):
        paths = [path for path, _ in manual_kit.iter_fields()]

        assert paths == [path for path, _ in iter_field_specs()]

    def test_unsupplied_fields_missing(self, manual_kit):
        assert manual_kit.resolve("verbal_identity.elevator_pitch").status == FieldStatus.MISSING
        assert manual_kit.resolve("proof_trust.testimonials").status == FieldStatus.MISSING

    def test_presets_follow_primary_color(self, manual_kit):
        button = manual_kit.resolve("visual_identity.components.button_style")

        assert button.status == FieldStatus.INFERRED
        assert button.value["states"]["default"]["bg"] == "#FF5500"

    def test_gaps_summary_attached(self, manual_kit):
        gap_fields = [gap.field for gap in manual_kit.gaps_summary.critical_gaps]

        assert "verbal_identity.tagline" not in gap_fields
        assert "verbal_identity.elevator_pitch" in gap_fields
        assert manual_kit.gaps_summary.total_completeness > 0

    def test_normalizing_again_is_a_fixed_point(self, manual_kit, fixed_now):
        assert ensure_comprehensive_structure(manual_kit, "Acme", "acme.com", now=fixed_now) == manual_kit

    def test_supplied_field_round_trips_edit_and_reset(self, manual_kit, fixed_now):
        edited, path = apply_field_edit(manual_kit, "verbal_identity.tagline", "Ship faster", now=fixed_now)

        assert reset_field(edited, path).resolve(path) == manual_kit.resolve(path)


# =============================================================================
# VALIDATION
# =============================================================================


@pytest.mark.unit
class TestValidation:
    def test_blank_values_left_missing(self, fixed_now):
        kit = build_manual_brand_kit("Acme", "acme.com", tagline="  ", primary_logo_url=None, now=fixed_now)

        assert kit.resolve("verbal_identity.tagline").status == FieldStatus.MISSING
        assert kit.resolve("visual_identity.logos.primary_logo_url").status == FieldStatus.MISSING
        assert kit.resolve("visual_identity.color_system.primary_colors").status == FieldStatus.MISSING

    def test_invalid_colors_dropped(self, fixed_now):
        kit = build_manual_brand_kit("Acme", "acme.com", primary_colors=["blue", {"role": "accent"}], now=fixed_now)

        assert kit.resolve("visual_identity.color_system.primary_colors").status == FieldStatus.MISSING

    def test_unknown_field_path_raises(self):
        with pytest.raises(UnknownFieldPathError):
            build_manual_brand_kit("Acme", "acme.com", values={"verbal_identity.slogan": "x"})

    def test_unknown_section_raises(self):
        with pytest.raises(UnknownSectionError):
            build_manual_brand_kit("Acme", "acme.com", values={"branding.tagline": None})
