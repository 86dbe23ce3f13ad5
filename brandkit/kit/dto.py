"""
Brand Kit report DTOs.

PR-3: Completeness + gap analysis contracts.

These Pydantic v2 BaseModels are the result shapes produced by the scoring
and gap-analysis layers and stored in a kit's gaps_summary. They serve as
contracts for the dashboard: fields cannot be renamed or removed without
explicit migration and UI coordination.

Data quality metrics keep their camelCase wire names via aliases; construct
with either name (populate_by_name) and dump with by_alias=True for the wire.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# Enums come from brandkit/core/enums.py (Django TextChoices are str + Enum,
# so Pydantic v2 validates and serializes them as plain strings).
from brandkit.core.enums import FieldStatus, GapSeverity, ScoreDimension


# =============================================================================
# COMPLETENESS
# =============================================================================


class SectionCompletenessDTO(BaseModel):
    """Status counts for one section's expected fields."""
    completeness: int = Field(default=0, ge=0, le=100)
    missing_count: int = Field(default=0, ge=0)
    inferred_count: int = Field(default=0, ge=0)
    found_count: int = Field(default=0, ge=0)
    manual_count: int = Field(default=0, ge=0)

    @property
    def filled_count(self) -> int:
        return self.found_count + self.inferred_count + self.manual_count

    @property
    def expected_count(self) -> int:
        return self.filled_count + self.missing_count


class DataQualityMetricsDTO(BaseModel):
    """
    Whole-kit quality metrics.

    completenessPercentage is the weight-adjusted mean over sections;
    averageConfidence excludes missing fields.
    """
    model_config = ConfigDict(populate_by_name=True)

    total_fields: int = Field(default=0, ge=0, alias="totalFields")
    found_fields: int = Field(default=0, ge=0, alias="foundFields")
    inferred_fields: int = Field(default=0, ge=0, alias="inferredFields")
    missing_fields: int = Field(default=0, ge=0, alias="missingFields")
    manual_fields: int = Field(default=0, ge=0, alias="manualFields")
    average_confidence: float = Field(default=0.0, ge=0, le=1, alias="averageConfidence")
    completeness_percentage: int = Field(default=0, ge=0, le=100, alias="completenessPercentage")
    edited_field_paths: list[str] = Field(default_factory=list, alias="editedFieldPaths")
    by_section: dict[str, SectionCompletenessDTO] = Field(default_factory=dict)
    last_analyzed_at: datetime | None = Field(default=None, alias="lastAnalyzedAt")
    last_edited_at: datetime | None = Field(default=None, alias="lastEditedAt")


class LowConfidenceFieldDTO(BaseModel):
    field: str
    confidence: float = Field(ge=0, le=1)


class DataQualitySummaryDTO(BaseModel):
    """Dashboard summary over every leaf of the kit (not only expected fields)."""
    model_config = ConfigDict(populate_by_name=True)

    total_fields: int = Field(default=0, ge=0, alias="totalFields")
    found_fields: int = Field(default=0, ge=0, alias="foundFields")
    inferred_fields: int = Field(default=0, ge=0, alias="inferredFields")
    missing_fields: int = Field(default=0, ge=0, alias="missingFields")
    manual_fields: int = Field(default=0, ge=0, alias="manualFields")
    average_confidence: float = Field(default=0.0, ge=0, le=1, alias="averageConfidence")
    source_breakdown: dict[str, int] = Field(default_factory=dict, alias="sourceBreakdown")
    low_confidence_fields: list[LowConfidenceFieldDTO] = Field(
        default_factory=list, alias="lowConfidenceFields"
    )


# =============================================================================
# GAPS
# =============================================================================


class GapInfoDTO(BaseModel):
    """A field that should be filled, with a recommendation for the operator."""
    field: str
    section: str
    severity: GapSeverity
    recommendation: str


class CriticalGapDTO(GapInfoDTO):
    """Curated business-critical gap with display labels."""
    field_label: str
    section_label: str


class GapsSummaryDTO(BaseModel):
    """Stored on every kit under gaps_summary."""
    critical_gaps: list[GapInfoDTO] = Field(default_factory=list)
    inferred_weak: list[GapInfoDTO] = Field(default_factory=list)
    total_completeness: int = Field(default=0, ge=0, le=100)
    by_section: dict[str, SectionCompletenessDTO] = Field(default_factory=dict)


# =============================================================================
# STRENGTHS / RISKS
# =============================================================================


class StrengthRiskDTO(BaseModel):
    dimension: ScoreDimension
    label: str
    score: float
    description: str


class StrengthsAndRisksDTO(BaseModel):
    strengths: list[StrengthRiskDTO] = Field(default_factory=list)
    risks: list[StrengthRiskDTO] = Field(default_factory=list)


# =============================================================================
# UNWRAPPED VIEW
# =============================================================================


class FieldMetaDTO(BaseModel):
    """Provenance shown next to an unwrapped value."""
    status: FieldStatus
    confidence: float = Field(ge=0, le=1)
    sources: list[str] = Field(default_factory=list)
    description: str = ""


class UnwrappedFieldDTO(BaseModel):
    """A leaf reduced to its current value plus provenance."""
    value: Any = None
    meta: FieldMetaDTO
