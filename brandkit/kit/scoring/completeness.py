"""
Completeness and data-quality calculator.

PR-3: Per-section and weighted whole-kit statistics.

Counting rules:
- found / inferred / manual count as filled
- missing, absent and non-field nodes count as missing
- section completeness = round(filled / expected * 100), 0 for no expected fields
- kit completeness = weight-adjusted mean over sections that expect fields
- average confidence excludes missing fields

Rounding is half-up so 2.5 -> 3 (scores are never negative).
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable
from datetime import datetime

from brandkit.core.enums import FieldStatus
from brandkit.kit.dto import DataQualityMetricsDTO, SectionCompletenessDTO
from brandkit.kit.fields import ArrayField, FieldValue
from brandkit.kit.scoring.criteria import SECTION_FIELD_DEFINITIONS, get_section_definition
from brandkit.kit.tree import ComprehensiveBrandKit, SectionNode

logger = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _status_of(node: object) -> FieldStatus:
    if isinstance(node, (FieldValue, ArrayField)):
        return FieldStatus(node.status)
    return FieldStatus.MISSING


# =============================================================================
# SECTION
# =============================================================================


def calculate_section_completeness(
    section: SectionNode | None,
    section_id: str,
) -> SectionCompletenessDTO:
    """
    Count statuses over a section's expected fields.

    Args:
        section: The section node (None counts every expected field as missing)
        section_id: Key into SECTION_FIELD_DEFINITIONS

    Raises:
        UnknownSectionError: If section_id is not a kit section.
    """
    definition = get_section_definition(section_id)

    found = inferred = manual = missing = 0
    for path in definition.fields:
        node = section.resolve(path) if section is not None else None
        status = _status_of(node)
        if status == FieldStatus.FOUND:
            found += 1
        elif status == FieldStatus.INFERRED:
            inferred += 1
        elif status == FieldStatus.MANUAL:
            manual += 1
        else:
            missing += 1

    total = len(definition.fields)
    filled = found + inferred + manual
    completeness = round_half_up(filled / total * 100) if total else 0

    return SectionCompletenessDTO(
        completeness=completeness,
        missing_count=missing,
        inferred_count=inferred,
        found_count=found,
        manual_count=manual,
    )


# =============================================================================
# WHOLE KIT
# =============================================================================


def compute_weighted_completeness(entries: Iterable[tuple[int, int, float]]) -> int:
    """
    Weighted completeness over (filled, expected, weight) triples.

    Sections expecting no fields are left out of the denominator entirely;
    an empty denominator yields 0.
    """
    numerator = 0.0
    denominator = 0.0
    for filled, expected, weight in entries:
        if expected <= 0:
            continue
        numerator += filled * weight
        denominator += expected * weight
    if denominator <= 0:
        return 0
    return round_half_up(numerator / denominator * 100)


def get_edited_field_paths(kit: ComprehensiveBrandKit | None) -> list[str]:
    """Full paths of every edited leaf, in schema order."""
    if kit is None:
        return []
    return [path for path, field in kit.iter_fields() if field.is_edited]


def _analyzed_at(kit: ComprehensiveBrandKit) -> datetime | None:
    stamp = kit.meta.resolve("audit_timestamp")
    if not isinstance(stamp, FieldValue) or not isinstance(stamp.value, str):
        return None
    try:
        return datetime.fromisoformat(stamp.value.replace("Z", "+00:00"))
    except ValueError:
        return None


def _edited_at(kit: ComprehensiveBrandKit) -> datetime | None:
    stamps = [field.edited_at for _, field in kit.iter_fields() if field.edited_at is not None]
    return max(stamps) if stamps else None


def calculate_data_quality_metrics(kit: ComprehensiveBrandKit | None) -> DataQualityMetricsDTO:
    """
    Compute whole-kit quality metrics.

    A None kit yields all-zero metrics.
    """
    if kit is None:
        return DataQualityMetricsDTO()

    by_section: dict[str, SectionCompletenessDTO] = {}
    weighted: list[tuple[int, int, float]] = []
    confidences: list[float] = []

    for section_id, definition in SECTION_FIELD_DEFINITIONS.items():
        section = kit.section(section_id)
        stats = calculate_section_completeness(section, section_id)
        by_section[section_id] = stats
        weighted.append((stats.filled_count, stats.expected_count, definition.effective_weight))

        for path in definition.fields:
            node = section.resolve(path)
            if _status_of(node) != FieldStatus.MISSING:
                confidences.append(node.confidence)

    found = sum(stats.found_count for stats in by_section.values())
    inferred = sum(stats.inferred_count for stats in by_section.values())
    manual = sum(stats.manual_count for stats in by_section.values())
    missing = sum(stats.missing_count for stats in by_section.values())
    average_confidence = round(sum(confidences) / len(confidences), 2) if confidences else 0.0

    metrics = DataQualityMetricsDTO(
        total_fields=found + inferred + manual + missing,
        found_fields=found,
        inferred_fields=inferred,
        missing_fields=missing,
        manual_fields=manual,
        average_confidence=average_confidence,
        completeness_percentage=compute_weighted_completeness(weighted),
        edited_field_paths=get_edited_field_paths(kit),
        by_section=by_section,
        last_analyzed_at=_analyzed_at(kit),
        last_edited_at=_edited_at(kit),
    )
    logger.debug(
        "Data quality: %d%% complete, %d/%d fields filled",
        metrics.completeness_percentage,
        metrics.total_fields - metrics.missing_fields,
        metrics.total_fields,
    )
    return metrics
