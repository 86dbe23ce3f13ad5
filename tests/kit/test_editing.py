"""
PR-5 Tests: Path-addressed edit / reset.

Test Categories:
A) Lookup - get_field_by_path, list_editable_field_paths
B) Whole-field edits - provenance recorded, input kit untouched
C) Sub-path edits - value rewritten inside the leaf, still tracked as an edit
D) Reset - restores the analysis value
E) Errors - unknown sections / paths fail fast
"""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from brandkit.core.enums import FieldStatus
from brandkit.kit.editing import apply_field_edit, get_field_by_path, list_editable_field_paths, reset_field
from brandkit.kit.exceptions import BrandKitError, UnknownFieldPathError, UnknownSectionError
from brandkit.kit.fields import FieldValue
from brandkit.kit.normalization import ensure_comprehensive_structure
from brandkit.kit.schema import iter_field_specs

EDIT_TIME = datetime(2025, 4, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def colored_kit(fixed_now):
    raw = {
        "visual_identity": {
            "color_system": {
                "primary_colors": {
                    "kind": "array",
                    "status": "found",
                    "confidence": 0.9,
                    "items": [{"hex": "#FF5500", "role": "primary"}],
                    "originalItems": [{"hex": "#FF5500", "role": "primary"}],
                    "source": ["acme.com"],
                }
            }
        }
    }
    return ensure_comprehensive_structure(raw, "Acme", "acme.com", now=fixed_now)


# =============================================================================
# LOOKUP
# =============================================================================


@pytest.mark.unit
class TestLookup:
    def test_get_field_by_path(self, empty_kit):
        field = get_field_by_path(empty_kit, "meta.brand_name")

        assert isinstance(field, FieldValue)
        assert field.value == "Acme"

    def test_get_field_by_path_absent(self, empty_kit):
        assert get_field_by_path(empty_kit, "meta.nope") is None
        assert get_field_by_path(empty_kit, "branding.tagline") is None
        assert get_field_by_path(None, "meta.brand_name") is None

    def test_list_editable_field_paths(self, empty_kit):
        paths = list_editable_field_paths(empty_kit)

        assert paths == [path for path, _ in iter_field_specs()]


# =============================================================================
# WHOLE-FIELD EDITS
# =============================================================================


@pytest.mark.unit
class TestApplyFieldEdit:
    def test_edit_records_provenance(self, empty_kit):
        kit, field_path = apply_field_edit(empty_kit, "verbal_identity.tagline", "Know your users", now=EDIT_TIME)
        tagline = kit.resolve("verbal_identity.tagline")

        assert field_path == "verbal_identity.tagline"
        assert tagline.value == "Know your users"
        assert tagline.status == FieldStatus.MANUAL
        assert tagline.edited_at == EDIT_TIME
        assert tagline.has_original
        assert tagline.original_value is None

    def test_input_kit_untouched(self, empty_kit):
        before = empty_kit.model_copy(deep=True)

        apply_field_edit(empty_kit, "verbal_identity.tagline", "Know your users", now=EDIT_TIME)

        assert empty_kit == before

    def test_other_fields_untouched(self, empty_kit):
        kit, _ = apply_field_edit(empty_kit, "verbal_identity.tagline", "Know your users", now=EDIT_TIME)

        assert kit.resolve("meta.brand_name") == empty_kit.resolve("meta.brand_name")

    def test_array_edit(self, empty_kit):
        kit, _ = apply_field_edit(empty_kit, "seo_identity.primary_keywords", ["analytics"], now=EDIT_TIME)

        assert kit.resolve("seo_identity.primary_keywords").items == ["analytics"]


# =============================================================================
# SUB-PATH EDITS
# =============================================================================


@pytest.mark.unit
class TestSubPathEdit:
    def test_edit_inside_array_item(self, colored_kit):
        kit, field_path = apply_field_edit(
            colored_kit,
            "visual_identity.color_system.primary_colors.items[0].hex",
            "#00AAFF",
            now=EDIT_TIME,
        )
        colors = kit.resolve(field_path)

        assert field_path == "visual_identity.color_system.primary_colors"
        assert colors.items == [{"hex": "#00AAFF", "role": "primary"}]
        assert colors.original_items == [{"hex": "#FF5500", "role": "primary"}]
        assert colors.status == FieldStatus.MANUAL

    def test_items_segment_is_optional(self, colored_kit):
        kit, _ = apply_field_edit(
            colored_kit, "visual_identity.color_system.primary_colors[0].role", "brand", now=EDIT_TIME
        )

        assert kit.resolve("visual_identity.color_system.primary_colors").items[0]["role"] == "brand"

    def test_edit_inside_value_creates_intermediate_objects(self, empty_kit):
        kit, _ = apply_field_edit(
            empty_kit, "visual_identity.typography.heading_font.name", "Inter", now=EDIT_TIME
        )

        assert kit.resolve("visual_identity.typography.heading_font").value == {"name": "Inter"}

    def test_edit_nested_preset_value(self, empty_kit):
        kit, _ = apply_field_edit(
            empty_kit,
            "visual_identity.components.card_style.value.borderRadius",
            "4px",
            now=EDIT_TIME,
        )
        card = kit.resolve("visual_identity.components.card_style")

        assert card.value["borderRadius"] == "4px"
        assert card.value["padding"] == "24px"
        assert card.original_value["borderRadius"] == "12px"

    def test_index_out_of_range(self, colored_kit):
        with pytest.raises(UnknownFieldPathError):
            apply_field_edit(colored_kit, "visual_identity.color_system.primary_colors[3].hex", "#000000")

    def test_cannot_descend_into_scalar(self, empty_kit):
        with pytest.raises(UnknownFieldPathError):
            apply_field_edit(empty_kit, "meta.brand_name.value.first", "A")


# =============================================================================
# RESET
# =============================================================================


@pytest.mark.unit
class TestResetField:
    def test_reset_restores_analysis_value(self, colored_kit):
        edited, _ = apply_field_edit(
            colored_kit, "visual_identity.color_system.primary_colors.items[0].hex", "#00AAFF", now=EDIT_TIME
        )

        restored = reset_field(edited, "visual_identity.color_system.primary_colors")

        assert restored.resolve("visual_identity.color_system.primary_colors") == colored_kit.resolve(
            "visual_identity.color_system.primary_colors"
        )

    def test_reset_unedited_field_is_noop(self, empty_kit):
        assert reset_field(empty_kit, "verbal_identity.tagline") == empty_kit

    def test_reset_rejects_sub_paths(self, colored_kit):
        with pytest.raises(UnknownFieldPathError):
            reset_field(colored_kit, "visual_identity.color_system.primary_colors.items[0]")


# =============================================================================
# ERRORS
# =============================================================================


@pytest.mark.unit
class TestPathErrors:
    def test_unknown_section(self, empty_kit):
        with pytest.raises(UnknownSectionError):
            apply_field_edit(empty_kit, "branding.tagline", "x")

    def test_interior_node_is_not_editable(self, empty_kit):
        with pytest.raises(UnknownFieldPathError):
            apply_field_edit(empty_kit, "visual_identity.logos", "x")

    def test_unknown_leaf(self, empty_kit):
        with pytest.raises(UnknownFieldPathError):
            reset_field(empty_kit, "verbal_identity.slogan")

    def test_empty_path(self, empty_kit):
        with pytest.raises(UnknownFieldPathError):
            apply_field_edit(empty_kit, "", "x")

    def test_errors_are_value_errors(self, empty_kit):
        with pytest.raises(ValueError):
            apply_field_edit(empty_kit, "branding.tagline", "x")
        assert issubclass(UnknownFieldPathError, BrandKitError)
