"""
Hierarchical region code lookup.

Region codes are built from fixed-width segments, one per administrative
level (continent, country, province, city, district). A data file maps
codes to opaque payloads:

    1<TAB>亚洲<TAB>Asia
    101<TAB>中国

and the tree resolves any boundary-valid code back to its payload:

    from region_query import DEFAULT_SEGMENTATION, RegionTree

    tree = RegionTree(DEFAULT_SEGMENTATION)
    tree.reload_file("regions.txt")
    tree.find("101").data      # "中国".encode("utf-8")
    tree.find("101").code      # b"101"

Refreshing with ``reload`` swaps in a fully built tree atomically, so
lookups from other threads never see a half-loaded dataset.
"""

from region_query.builder import LoadStats, load, load_file
from region_query.config import RegionQueryConfig, configure_logging
from region_query.errors import RegionCodeIncorrectError, RegionError, RegionNotFoundError
from region_query.node import RegionNode, new_root
from region_query.segmentation import (
    DEFAULT_SEGMENTATION,
    SegmentationConfig,
    SegmentLevel,
    as_code_bytes,
    decompose,
)
from region_query.tree import RegionTree, find

__all__ = [
    # Segmentation
    "SegmentLevel",
    "SegmentationConfig",
    "DEFAULT_SEGMENTATION",
    "decompose",
    "as_code_bytes",
    # Tree
    "RegionNode",
    "RegionTree",
    "new_root",
    "load",
    "load_file",
    "find",
    "LoadStats",
    # Errors
    "RegionError",
    "RegionCodeIncorrectError",
    "RegionNotFoundError",
    # Config
    "RegionQueryConfig",
    "configure_logging",
]
