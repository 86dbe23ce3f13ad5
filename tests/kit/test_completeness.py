"""
PR-3 Tests: Completeness scoring + data quality.

Test Categories:
A) Criteria - expected fields exist in the schema, weights are positive
B) Section completeness - status counts and rounding
C) Weighted aggregate - weights shift the mean, empty sections are skipped
D) Whole-kit metrics - counts, confidence, timestamps, edited paths
E) Dashboard summary - every leaf, source breakdown, low-confidence list
"""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from brandkit.kit.editing import apply_field_edit
from brandkit.kit.exceptions import UnknownSectionError
from brandkit.kit.schema import is_field_path, iter_field_specs
from brandkit.kit.scoring import (
    SECTION_FIELD_DEFINITIONS,
    calculate_data_quality_metrics,
    calculate_section_completeness,
    compute_weighted_completeness,
    get_edited_field_paths,
    summarize_data_quality,
)
from brandkit.kit.scoring.completeness import round_half_up
from brandkit.kit.scoring.criteria import SCORING_VERSION, get_section_definition
from brandkit.kit.tree import SECTION_IDS, SectionNode

EDIT_TIME = datetime(2025, 4, 1, 12, 0, tzinfo=timezone.utc)


# =============================================================================
# CRITERIA
# =============================================================================


@pytest.mark.unit
class TestCriteria:
    """Static completeness table."""

    def test_every_section_defined(self):
        assert tuple(SECTION_FIELD_DEFINITIONS) == SECTION_IDS

    @pytest.mark.parametrize("section_id", SECTION_IDS)
    def test_expected_fields_are_schema_leaves(self, section_id):
        definition = SECTION_FIELD_DEFINITIONS[section_id]
        for path in definition.fields:
            assert is_field_path(f"{section_id}.{path}"), path

    def test_default_weights(self):
        assert SECTION_FIELD_DEFINITIONS["visual_identity"].weight == 1.5
        assert SECTION_FIELD_DEFINITIONS["proof_trust"].weight == 1.4
        assert SECTION_FIELD_DEFINITIONS["contact_info"].weight == 0.7

    def test_definitions_are_read_only(self):
        with pytest.raises(TypeError):
            SECTION_FIELD_DEFINITIONS["meta"] = None

    def test_to_dict_includes_version(self):
        data = get_section_definition("meta").to_dict()

        assert data["version"] == SCORING_VERSION
        assert data["label"] == "Meta & Audit"
        assert "brand_name" in data["fields"]

    def test_unknown_section_raises(self):
        with pytest.raises(UnknownSectionError):
            get_section_definition("branding")


# =============================================================================
# SECTION COMPLETENESS
# =============================================================================


@pytest.mark.unit
class TestSectionCompleteness:
    def test_meta_on_empty_kit(self, empty_kit):
        stats = calculate_section_completeness(empty_kit.meta, "meta")

        assert stats.found_count == 2
        assert stats.inferred_count == 1
        assert stats.missing_count == 4
        assert stats.completeness == 43

    def test_visual_identity_on_empty_kit(self, empty_kit):
        stats = calculate_section_completeness(empty_kit.visual_identity, "visual_identity")

        assert stats.inferred_count == 6
        assert stats.completeness == 30

    def test_none_section_counts_everything_missing(self):
        stats = calculate_section_completeness(None, "contact_info")

        assert stats.missing_count == 5
        assert stats.completeness == 0

    def test_absent_fields_count_as_missing(self):
        stats = calculate_section_completeness(SectionNode(), "seo_identity")

        assert stats.missing_count == 4
        assert stats.expected_count == 4

    def test_manual_counts_as_filled(self, empty_kit):
        kit, _ = apply_field_edit(empty_kit, "verbal_identity.tagline", "Know your users", now=EDIT_TIME)

        stats = calculate_section_completeness(kit.verbal_identity, "verbal_identity")

        assert stats.manual_count == 1
        assert stats.completeness == 9

    def test_unknown_section_raises(self):
        with pytest.raises(UnknownSectionError):
            calculate_section_completeness(SectionNode(), "branding")

    @pytest.mark.parametrize("value,expected", [(0.5, 1), (2.5, 3), (42.4, 42), (99.5, 100)])
    def test_round_half_up(self, value, expected):
        assert round_half_up(value) == expected


# =============================================================================
# WEIGHTED AGGREGATE
# =============================================================================


@pytest.mark.unit
class TestWeightedCompleteness:
    def test_weights_shift_the_mean(self):
        assert compute_weighted_completeness([(2, 2, 1.0), (0, 2, 2.0)]) == 33

    def test_equal_weights_match_unweighted_mean(self):
        assert compute_weighted_completeness([(2, 2, 1.0), (0, 2, 1.0)]) == 50

    def test_sections_without_expected_fields_are_skipped(self):
        assert compute_weighted_completeness([(1, 1, 1.0), (0, 0, 5.0)]) == 100

    def test_empty_input_is_zero(self):
        assert compute_weighted_completeness([]) == 0


# =============================================================================
# WHOLE-KIT METRICS
# =============================================================================


@pytest.mark.unit
class TestDataQualityMetrics:
    def test_none_kit_is_all_zero(self):
        metrics = calculate_data_quality_metrics(None)

        assert metrics.total_fields == 0
        assert metrics.completeness_percentage == 0
        assert metrics.average_confidence == 0.0

    def test_empty_kit_metrics(self, empty_kit, fixed_now):
        metrics = calculate_data_quality_metrics(empty_kit)

        assert metrics.found_fields == 4
        assert metrics.inferred_fields == 7
        assert metrics.manual_fields == 0
        assert metrics.total_fields == sum(
            len(definition.fields) for definition in SECTION_FIELD_DEFINITIONS.values()
        )
        assert metrics.completeness_percentage == 14
        assert metrics.average_confidence == 0.81
        assert metrics.last_analyzed_at == fixed_now
        assert metrics.last_edited_at is None

    def test_counts_add_up(self, empty_kit):
        metrics = calculate_data_quality_metrics(empty_kit)

        assert metrics.total_fields == (
            metrics.found_fields + metrics.inferred_fields + metrics.missing_fields + metrics.manual_fields
        )

    def test_weight_override_from_environment(self, empty_kit, monkeypatch):
        monkeypatch.setenv("BRANDKIT_WEIGHT_META", "10")

        assert calculate_data_quality_metrics(empty_kit).completeness_percentage == 26

    def test_edits_are_reported(self, empty_kit):
        kit, _ = apply_field_edit(empty_kit, "verbal_identity.tagline", "Know your users", now=EDIT_TIME)

        metrics = calculate_data_quality_metrics(kit)

        assert metrics.edited_field_paths == ["verbal_identity.tagline"]
        assert metrics.last_edited_at == EDIT_TIME
        assert metrics.manual_fields == 1

    def test_wire_names_are_camel_case(self, empty_kit):
        dumped = calculate_data_quality_metrics(empty_kit).model_dump(by_alias=True)

        assert "completenessPercentage" in dumped
        assert "editedFieldPaths" in dumped
        assert "by_section" in dumped

    def test_get_edited_field_paths_none(self):
        assert get_edited_field_paths(None) == []


# =============================================================================
# DASHBOARD SUMMARY
# =============================================================================


@pytest.mark.unit
class TestSummarizeDataQuality:
    def test_covers_every_leaf(self, empty_kit):
        summary = summarize_data_quality(empty_kit)

        assert summary.total_fields == len(list(iter_field_specs()))
        assert summary.inferred_fields == 13

    def test_source_breakdown(self, empty_kit):
        breakdown = summarize_data_quality(empty_kit).source_breakdown

        assert breakdown["acme.com"] == 4
        assert breakdown["system"] == 2
        assert breakdown["ai_inference"] == 13

    def test_low_confidence_fields_sorted(self, empty_kit):
        kit, _ = apply_field_edit(empty_kit, "verbal_identity.tagline", "x", now=EDIT_TIME)
        tagline = kit.resolve("verbal_identity.tagline").model_copy(update={"confidence": 0.2})
        pitch = kit.resolve("verbal_identity.elevator_pitch").model_copy(
            update={"status": "found", "value": "y", "confidence": 0.4}
        )
        kit.verbal_identity.children["tagline"] = tagline
        kit.verbal_identity.children["elevator_pitch"] = pitch

        low = summarize_data_quality(kit).low_confidence_fields

        assert [(entry.field, entry.confidence) for entry in low] == [
            ("verbal_identity.tagline", 0.2),
            ("verbal_identity.elevator_pitch", 0.4),
        ]

    def test_none_kit(self):
        assert summarize_data_quality(None).total_fields == 0
