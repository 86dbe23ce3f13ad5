"""
Data quality summary for dashboards.

Unlike calculate_data_quality_metrics, which only looks at the expected
fields of each section, this summary covers every leaf of the kit.
"""

from __future__ import annotations

from brandkit.core.enums import FieldStatus
from brandkit.kit.dto import DataQualitySummaryDTO, LowConfidenceFieldDTO
from brandkit.kit.tree import ComprehensiveBrandKit

# Non-missing fields below this confidence are listed for review
LOW_CONFIDENCE_THRESHOLD = 0.5

MAX_LOW_CONFIDENCE_FIELDS = 10


def summarize_data_quality(kit: ComprehensiveBrandKit | None) -> DataQualitySummaryDTO:
    """Counts, source breakdown and the lowest-confidence filled fields."""
    if kit is None:
        return DataQualitySummaryDTO()

    counts = {status: 0 for status in FieldStatus.values}
    sources: dict[str, int] = {}
    confidences: list[float] = []
    low_confidence: list[LowConfidenceFieldDTO] = []

    for path, field in kit.iter_fields():
        counts[str(field.status)] += 1
        for source in field.source:
            sources[source] = sources.get(source, 0) + 1
        if field.status == FieldStatus.MISSING:
            continue
        confidences.append(field.confidence)
        if field.confidence < LOW_CONFIDENCE_THRESHOLD:
            low_confidence.append(LowConfidenceFieldDTO(field=path, confidence=field.confidence))

    low_confidence.sort(key=lambda entry: entry.confidence)

    return DataQualitySummaryDTO(
        total_fields=sum(counts.values()),
        found_fields=counts[FieldStatus.FOUND.value],
        inferred_fields=counts[FieldStatus.INFERRED.value],
        missing_fields=counts[FieldStatus.MISSING.value],
        manual_fields=counts[FieldStatus.MANUAL.value],
        average_confidence=round(sum(confidences) / len(confidences), 2) if confidences else 0.0,
        source_breakdown=sources,
        low_confidence_fields=low_confidence[:MAX_LOW_CONFIDENCE_FIELDS],
    )
