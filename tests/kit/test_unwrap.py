"""
PR-7 Tests: Unwrapped brand kit view.

Test Categories:
A) Leaves - current value plus provenance meta
B) Whole kit - section nesting kept, gaps block, JSON compatible
"""

from __future__ import annotations

import json

import pytest

from brandkit.kit.editing import apply_field_edit
from brandkit.kit.exceptions import BrandKitError
from brandkit.kit.fields import create_found_array_field, create_missing_field
from brandkit.kit.normalization import transform_analysis_to_brand_kit
from brandkit.kit.unwrap import unwrap_brand_kit, unwrap_field


# =============================================================================
# LEAVES
# =============================================================================


@pytest.mark.unit
class TestUnwrapField:
    def test_array_field_value_is_items(self):
        field = create_found_array_field(["#FF5500"], "Colors", ["cta"], ["acme.com"], 0.8)

        unwrapped = unwrap_field(field)

        assert unwrapped.value == ["#FF5500"]
        assert unwrapped.meta.status == "found"
        assert unwrapped.meta.confidence == 0.8
        assert unwrapped.meta.sources == ["acme.com"]
        assert unwrapped.meta.description == "Colors"

    def test_missing_field(self):
        unwrapped = unwrap_field(create_missing_field("Tagline", ["hero"]))

        assert unwrapped.value is None
        assert unwrapped.meta.status == "missing"
        assert unwrapped.meta.confidence == 0.0

    def test_value_is_a_copy(self):
        field = create_found_array_field([{"hex": "#FF5500"}], "Colors", ["cta"], ["acme.com"])

        unwrap_field(field).value[0]["hex"] = "#000000"

        assert field.items == [{"hex": "#FF5500"}]


# =============================================================================
# WHOLE KIT
# =============================================================================


@pytest.mark.unit
class TestUnwrapBrandKit:
    def test_sections_keep_nesting(self, empty_kit):
        view = unwrap_brand_kit(empty_kit)

        assert view["meta"]["brand_name"] == {
            "value": "Acme",
            "meta": {"status": "found", "confidence": 1.0, "sources": ["acme.com"], "description": "Brand name"},
        }
        assert view["visual_identity"]["logos"]["primary_logo_url"]["meta"]["status"] == "missing"

    def test_edited_value_is_current(self, empty_kit, fixed_now):
        kit, _ = apply_field_edit(empty_kit, "verbal_identity.tagline", "Know your users", now=fixed_now)

        tagline = unwrap_brand_kit(kit)["verbal_identity"]["tagline"]

        assert tagline["value"] == "Know your users"
        assert tagline["meta"]["status"] == "manual"
        assert tagline["meta"]["sources"] == ["manual"]

    def test_gaps_block(self, analysis_payload, fixed_now):
        kit = transform_analysis_to_brand_kit(analysis_payload, "acme.com", now=fixed_now)

        gaps = unwrap_brand_kit(kit)["gaps"]

        assert gaps["total_completeness"] == kit.gaps_summary.total_completeness
        assert [gap["field"] for gap in gaps["critical_gaps"]] == [
            gap.field for gap in kit.gaps_summary.critical_gaps
        ]
        assert set(gaps["by_section"]) == set(kit.gaps_summary.by_section)

    def test_every_leaf_unwrapped(self, empty_kit):
        view = unwrap_brand_kit(empty_kit)

        for path, field in empty_kit.iter_fields():
            node = view
            for part in path.split("."):
                node = node[part]
            assert node["meta"]["status"] == str(field.status), path

    def test_json_compatible(self, empty_kit):
        json.dumps(unwrap_brand_kit(empty_kit))

    def test_no_kit_raises(self):
        with pytest.raises(BrandKitError):
            unwrap_brand_kit(None)
