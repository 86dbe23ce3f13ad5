"""
Completeness scoring for brand kits.

Exports:
- calculate_section_completeness: Status counts for one section
- calculate_data_quality_metrics: Weighted whole-kit metrics
- compute_weighted_completeness: Weighted mean over (filled, expected, weight)
- get_edited_field_paths: Paths of operator-edited leaves
- summarize_data_quality: Dashboard summary over every leaf
- SECTION_FIELD_DEFINITIONS: Expected fields + weights per section
"""

from brandkit.kit.scoring.completeness import (
    calculate_data_quality_metrics,
    calculate_section_completeness,
    compute_weighted_completeness,
    get_edited_field_paths,
)
from brandkit.kit.scoring.criteria import SECTION_FIELD_DEFINITIONS, SectionDefinition
from brandkit.kit.scoring.quality import summarize_data_quality

__all__ = [
    "calculate_data_quality_metrics",
    "calculate_section_completeness",
    "compute_weighted_completeness",
    "get_edited_field_paths",
    "summarize_data_quality",
    "SECTION_FIELD_DEFINITIONS",
    "SectionDefinition",
]
