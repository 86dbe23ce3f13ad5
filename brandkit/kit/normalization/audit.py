"""
Raw payload audit.

The only untyped traversal in the engine: walks arbitrary analysis JSON and
reports what looks like a wrapped field before the normalizer classifies it.
Typed fields (as produced by the analysis adapters) are counted as they are.
Used for logging and by the audit_brand_kit command.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from pydantic import ValidationError

from brandkit.kit.fields import BaseField, looks_like_field, parse_field

# Analysis payloads are shallow; anything deeper is not brand data.
MAX_AUDIT_DEPTH = 32


@dataclass
class RawPayloadAudit:
    """
    Result of auditing a raw payload.

    Attributes:
        wrapped_field_count: Nodes carrying status + confidence
        status_counts: Valid wrapped fields by status
        malformed_paths: Paths of wrapped fields that fail validation
        truncated: True if the walk stopped at MAX_AUDIT_DEPTH
    """

    wrapped_field_count: int = 0
    status_counts: dict[str, int] = field(default_factory=dict)
    malformed_paths: list[str] = field(default_factory=list)
    truncated: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "wrapped_field_count": self.wrapped_field_count,
            "status_counts": dict(self.status_counts),
            "malformed_paths": list(self.malformed_paths),
            "truncated": self.truncated,
        }


def audit_raw_payload(payload: Any) -> RawPayloadAudit:
    """Walk `payload` and count wrapped fields by status."""
    audit = RawPayloadAudit()
    _walk(payload, "", 0, audit)
    return audit


def _walk(node: Any, path: str, depth: int, audit: RawPayloadAudit) -> None:
    if depth > MAX_AUDIT_DEPTH:
        audit.truncated = True
        return

    if isinstance(node, BaseField):
        audit.wrapped_field_count += 1
        status = str(node.status)
        audit.status_counts[status] = audit.status_counts.get(status, 0) + 1
        return

    if looks_like_field(node):
        audit.wrapped_field_count += 1
        try:
            parsed = parse_field(node)
        except ValidationError:
            audit.malformed_paths.append(path or "<root>")
            return
        status = str(parsed.status)
        audit.status_counts[status] = audit.status_counts.get(status, 0) + 1
        return

    if isinstance(node, Mapping):
        for key, child in node.items():
            child_path = f"{path}.{key}" if path else str(key)
            _walk(child, child_path, depth + 1, audit)
    elif isinstance(node, list):
        for index, child in enumerate(node):
            _walk(child, f"{path}[{index}]", depth + 1, audit)
