"""
Brand kit tree.

PR-1: Typed tree over the fixed kit sections.

- SectionNode: named children, each a field leaf or a nested SectionNode
- ComprehensiveBrandKit: the eleven fixed sections plus gaps_summary
- split_path / join_path: dotted path helpers ("logos.primary_logo_url",
  "primary_colors.items[0].hex")

All traversal dispatches on the `kind` discriminator.
"""

from __future__ import annotations

import re
from collections.abc import Iterator, Sequence
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field

from brandkit.core.enums import SectionId
from brandkit.kit.dto import GapsSummaryDTO
from brandkit.kit.exceptions import UnknownSectionError
from brandkit.kit.fields import ArrayField, FieldValue

SECTION_IDS: tuple[str, ...] = tuple(SectionId.values)

_PATH_SPLIT_RE = re.compile(r"[.\[\]]")


def split_path(path: str | Sequence[str]) -> list[str]:
    """Split "a.b[0].c" into ["a", "b", "0", "c"]."""
    if isinstance(path, str):
        return [part for part in _PATH_SPLIT_RE.split(path) if part]
    return list(path)


def join_path(*parts: str) -> str:
    return ".".join(part for part in parts if part)


class SectionNode(BaseModel):
    """Interior node of the kit tree."""

    kind: Literal["section"] = "section"
    children: dict[str, KitNode] = Field(default_factory=dict)

    def child(self, name: str) -> KitNode | None:
        return self.children.get(name)

    def resolve(self, path: str | Sequence[str]) -> KitNode | None:
        """Walk a relative path; None if any segment is absent or passes through a leaf."""
        node: KitNode | None = self
        for part in split_path(path):
            if not isinstance(node, SectionNode):
                return None
            node = node.children.get(part)
            if node is None:
                return None
        return node

    def iter_fields(self, prefix: str = "") -> Iterator[tuple[str, FieldValue | ArrayField]]:
        """Yield (path, field) for every leaf, depth-first in insertion order."""
        for name, node in self.children.items():
            path = join_path(prefix, name)
            if isinstance(node, SectionNode):
                yield from node.iter_fields(path)
            else:
                yield path, node

    def to_document(self) -> dict[str, Any]:
        document: dict[str, Any] = {}
        for name, node in self.children.items():
            if isinstance(node, SectionNode):
                document[name] = node.to_document()
            else:
                document[name] = node.model_dump(mode="json", by_alias=True)
        return document


KitNode = Annotated[Union[FieldValue, ArrayField, SectionNode], Field(discriminator="kind")]

SectionNode.model_rebuild()


class ComprehensiveBrandKit(BaseModel):
    """
    Canonical brand kit: eleven fixed sections and the stored gaps summary.

    Build one with ensure_comprehensive_structure(); direct construction is
    for tests and internal copies.
    """

    meta: SectionNode = Field(default_factory=SectionNode)
    visual_identity: SectionNode = Field(default_factory=SectionNode)
    verbal_identity: SectionNode = Field(default_factory=SectionNode)
    audience_positioning: SectionNode = Field(default_factory=SectionNode)
    product_offers: SectionNode = Field(default_factory=SectionNode)
    proof_trust: SectionNode = Field(default_factory=SectionNode)
    seo_identity: SectionNode = Field(default_factory=SectionNode)
    external_presence: SectionNode = Field(default_factory=SectionNode)
    content_assets: SectionNode = Field(default_factory=SectionNode)
    competitor_analysis: SectionNode = Field(default_factory=SectionNode)
    contact_info: SectionNode = Field(default_factory=SectionNode)
    gaps_summary: GapsSummaryDTO = Field(default_factory=GapsSummaryDTO)

    def section(self, section_id: str) -> SectionNode:
        if section_id not in SECTION_IDS:
            raise UnknownSectionError(section_id)
        return getattr(self, section_id)

    def iter_sections(self) -> Iterator[tuple[str, SectionNode]]:
        for section_id in SECTION_IDS:
            yield section_id, getattr(self, section_id)

    def resolve(self, path: str | Sequence[str]) -> KitNode | None:
        """Resolve a full path ("verbal_identity.tagline"); None for unknown sections."""
        parts = split_path(path)
        if not parts or parts[0] not in SECTION_IDS:
            return None
        section: SectionNode = getattr(self, parts[0])
        return section.resolve(parts[1:]) if parts[1:] else section

    def iter_fields(self) -> Iterator[tuple[str, FieldValue | ArrayField]]:
        for section_id, section in self.iter_sections():
            yield from section.iter_fields(section_id)

    def to_document(self) -> dict[str, Any]:
        """Plain JSON-compatible form for persistence."""
        document: dict[str, Any] = {
            section_id: section.to_document() for section_id, section in self.iter_sections()
        }
        document["gaps_summary"] = self.gaps_summary.model_dump(mode="json")
        return document
