"""
Gap analysis for brand kits.

Exports:
- build_critical_gaps: Curated business-critical gaps
- build_strengths_and_risks: Strengths and risks from brand scores
- identify_section_gaps: Gaps inside one section
- build_gaps_summary: GapsSummary for storage on a kit
"""

from brandkit.kit.gaps.service import (
    build_critical_gaps,
    build_gaps_summary,
    build_strengths_and_risks,
    identify_section_gaps,
)

__all__ = [
    "build_critical_gaps",
    "build_gaps_summary",
    "build_strengths_and_risks",
    "identify_section_gaps",
]
