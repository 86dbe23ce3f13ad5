"""
Brand kit normalization.

Exports:
- ensure_comprehensive_structure: Raw/partial kit → complete kit
- load_brand_kit: Reload a persisted kit document
- merge_preserving_edits: Fresh analysis merged over an edited kit
- transform_analysis_to_brand_kit: Analysis payload → complete kit
- audit_raw_payload: Wrapper counts / malformed paths for an arbitrary payload
"""

from brandkit.kit.normalization.adapters import SECTION_ADAPTERS, transform_analysis_to_brand_kit
from brandkit.kit.normalization.audit import RawPayloadAudit, audit_raw_payload
from brandkit.kit.normalization.service import (
    ensure_comprehensive_structure,
    load_brand_kit,
    merge_preserving_edits,
)

__all__ = [
    "SECTION_ADAPTERS",
    "RawPayloadAudit",
    "audit_raw_payload",
    "ensure_comprehensive_structure",
    "load_brand_kit",
    "merge_preserving_edits",
    "transform_analysis_to_brand_kit",
]
