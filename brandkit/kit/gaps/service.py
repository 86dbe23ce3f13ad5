"""
Gap analyzer and snapshot builder.

PR-4: Curated critical gaps, strengths/risks, section gap detection.

Entry points:
- build_critical_gaps(kit): curated business-critical fields that are missing
- build_strengths_and_risks(scores): top/bottom brand score dimensions
- identify_section_gaps(section_id, section): missing critical leaves and weak inferences
- build_gaps_summary(kit): the GapsSummary stored on every kit

All functions are pure and deterministic for a given input.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from typing import Any

from brandkit.core.enums import FieldStatus, GapSeverity, ScoreDimension
from brandkit.kit.config import low_confidence_threshold, strength_threshold
from brandkit.kit.dto import (
    CriticalGapDTO,
    GapInfoDTO,
    GapsSummaryDTO,
    StrengthRiskDTO,
    StrengthsAndRisksDTO,
)
from brandkit.kit.exceptions import UnknownSectionError
from brandkit.kit.fields import ArrayField, FieldValue
from brandkit.kit.gaps.recommendations import (
    CRITICAL_SECTION_FIELDS,
    CURATED_CRITICAL_GAPS,
    recommendation_for,
)
from brandkit.kit.schema import SECTION_LABELS
from brandkit.kit.scoring.completeness import calculate_data_quality_metrics
from brandkit.kit.tree import SECTION_IDS, ComprehensiveBrandKit, SectionNode

logger = logging.getLogger(__name__)

MAX_STRENGTHS = 3
MAX_RISKS = 3


# =============================================================================
# CURATED CRITICAL GAPS
# =============================================================================


def _is_missing(node: object) -> bool:
    if isinstance(node, (FieldValue, ArrayField)):
        return node.status == FieldStatus.MISSING
    return True


def build_critical_gaps(kit: ComprehensiveBrandKit | None) -> list[CriticalGapDTO]:
    """
    Check the curated business-critical fields.

    A gap is emitted for each curated path whose field is missing or absent,
    in curated order.
    """
    gaps: list[CriticalGapDTO] = []
    for curated in CURATED_CRITICAL_GAPS:
        node = kit.resolve(curated.path) if kit is not None else None
        if not _is_missing(node):
            continue
        gaps.append(
            CriticalGapDTO(
                field=curated.path,
                field_label=curated.label,
                section=curated.section,
                section_label=SECTION_LABELS[curated.section],
                severity=curated.severity,
                recommendation=recommendation_for(curated.path, curated.label),
            )
        )
    return gaps


# =============================================================================
# STRENGTHS / RISKS
# =============================================================================


def _format_score(score: float) -> str:
    if isinstance(score, float) and score.is_integer():
        return str(int(score))
    return f"{score:g}"


def _is_score(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return not math.isnan(value)


def build_strengths_and_risks(scores: Mapping[str, Any] | None) -> StrengthsAndRisksDTO:
    """
    Rank the five brand score dimensions.

    Non-numeric scores and unknown dimensions are ignored. Dimensions are
    sorted descending by score with ties kept in input order; strengths are
    the first three at or above the threshold, risks the last three below it.
    """
    ranked: list[tuple[ScoreDimension, float]] = [
        (ScoreDimension(key), value)
        for key, value in (scores or {}).items()
        if key in ScoreDimension.values and _is_score(value)
    ]
    ranked.sort(key=lambda entry: entry[1], reverse=True)

    threshold = strength_threshold()
    strengths = [
        StrengthRiskDTO(
            dimension=dimension,
            label=dimension.label,
            score=score,
            description=f"Strong {dimension.label.lower()} ({_format_score(score)}/100)",
        )
        for dimension, score in ranked
        if score >= threshold
    ][:MAX_STRENGTHS]

    below = [(dimension, score) for dimension, score in ranked if score < threshold]
    risks = [
        StrengthRiskDTO(
            dimension=dimension,
            label=dimension.label,
            score=score,
            description=f"{dimension.label} needs improvement ({_format_score(score)}/100)",
        )
        for dimension, score in below[-MAX_RISKS:]
    ]

    return StrengthsAndRisksDTO(strengths=strengths, risks=risks)


# =============================================================================
# SECTION GAPS
# =============================================================================


def _sentence(*parts: str | None) -> str:
    return " ".join(part for part in parts if part).strip()


def identify_section_gaps(section_id: str, section: SectionNode | None) -> list[GapInfoDTO]:
    """
    Detect gaps inside one section.

    - missing leaf named in CRITICAL_SECTION_FIELDS[section_id] -> critical
    - inferred leaf below the low-confidence threshold -> important

    Raises:
        UnknownSectionError: If section_id is not a kit section.
    """
    if section_id not in SECTION_IDS:
        raise UnknownSectionError(section_id)
    if section is None:
        return []

    critical_names = CRITICAL_SECTION_FIELDS.get(section_id, frozenset())
    threshold = low_confidence_threshold()
    gaps: list[GapInfoDTO] = []

    for path, field in section.iter_fields(section_id):
        name = path.rsplit(".", 1)[-1]
        if field.status == FieldStatus.MISSING and name in critical_names:
            gaps.append(
                GapInfoDTO(
                    field=path,
                    section=section_id,
                    severity=GapSeverity.CRITICAL,
                    recommendation=_sentence(f"{field.description} is missing.", field.notes),
                )
            )
        elif field.status == FieldStatus.INFERRED and field.confidence < threshold:
            gaps.append(
                GapInfoDTO(
                    field=path,
                    section=section_id,
                    severity=GapSeverity.IMPORTANT,
                    recommendation=_sentence(
                        f"{field.description} has low confidence ({field.confidence:g}).",
                        field.notes,
                    ),
                )
            )
    return gaps


def build_gaps_summary(kit: ComprehensiveBrandKit | None) -> GapsSummaryDTO:
    """Summarize gaps and completeness for storage on the kit."""
    if kit is None:
        return GapsSummaryDTO()

    critical: list[GapInfoDTO] = []
    weak: list[GapInfoDTO] = []
    for section_id, section in kit.iter_sections():
        for gap in identify_section_gaps(section_id, section):
            if gap.severity == GapSeverity.CRITICAL:
                critical.append(gap)
            else:
                weak.append(gap)

    metrics = calculate_data_quality_metrics(kit)
    logger.info(
        "Gaps summary: %d critical, %d weak inferences, %d%% complete",
        len(critical),
        len(weak),
        metrics.completeness_percentage,
    )
    return GapsSummaryDTO(
        critical_gaps=critical,
        inferred_weak=weak,
        total_completeness=metrics.completeness_percentage,
        by_section=metrics.by_section,
    )
