"""
Region tree node.

Each node is one hierarchy level; the root is the global scope. Ownership
runs strictly downward: a node owns its children, and the link back to the
parent is only the parent's code (plain bytes), never an object reference.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional

from region_query.segmentation import Code, SegmentationConfig, as_code_bytes


@dataclass
class RegionNode:
    """
    A node in the region tree.

    Only the root carries ``config``; descendants leave it as None and are
    looked up through the root.
    """

    code: bytes = b""
    """Full code prefix that reaches this node. b"" for the root."""

    data: bytes = b""
    """Opaque payload; last load for this exact code wins."""

    config: Optional[SegmentationConfig] = None
    """Segmentation scheme. Set on the root only."""

    parent_code: Optional[bytes] = None
    """Code of the parent node. None for the root."""

    depth: int = 0
    """Number of levels consumed to reach this node. 0 = root."""

    children: Dict[bytes, "RegionNode"] = field(default_factory=dict)
    """Child nodes keyed by their segment at the next level."""

    @property
    def is_root(self) -> bool:
        return self.parent_code is None

    @property
    def is_leaf(self) -> bool:
        return not self.children

    @property
    def segment(self) -> bytes:
        """The piece of ``code`` consumed at this node's own level."""
        if self.parent_code is None:
            return b""
        return self.code[len(self.parent_code):]

    def child(self, segment: Code) -> Optional["RegionNode"]:
        return self.children.get(as_code_bytes(segment))

    def add_child(self, segment: bytes) -> "RegionNode":
        """Create an empty child under ``segment`` and return it."""
        node = RegionNode(
            code=self.code + segment,
            parent_code=self.code,
            depth=self.depth + 1,
        )
        self.children[segment] = node
        return node

    def __repr__(self) -> str:
        return f"RegionNode(code={self.code!r}, data={self.data!r}, children={len(self.children)})"


def new_root(config: SegmentationConfig, data: bytes = b"") -> RegionNode:
    """Create an empty, unpublished root for ``config``."""
    return RegionNode(code=b"", data=data, config=config)
