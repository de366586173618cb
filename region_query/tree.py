"""
Published region tree with lookup and copy-on-write refresh.

Readers call ``RegionTree.find`` from any number of threads. A refresh
builds a complete replacement root off to the side and then swaps it in
with a single attribute assignment, so a reader sees either the whole old
tree or the whole new one. A tree that has been published is never mutated.

Usage:
    tree = RegionTree(DEFAULT_SEGMENTATION)
    tree.reload_file("regions.txt")

    node = tree.find("101")
    print(node.data.decode("utf-8"))
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Iterable, List, Optional, Union

from region_query.builder import LoadStats, Line, load
from region_query.config import RegionQueryConfig
from region_query.errors import RegionError, RegionNotFoundError
from region_query.node import RegionNode, new_root
from region_query.segmentation import Code, SegmentationConfig, decompose

LOG = logging.getLogger("region_query.tree")


def _descend(code: Code, root: RegionNode) -> List[RegionNode]:
    if root.config is None:
        raise ValueError("lookup must start from a root node with a segmentation config")

    pieces = decompose(code, root.config)

    path: List[RegionNode] = []
    node = root
    for piece in pieces:
        child = node.children.get(piece)
        if child is None:
            raise RegionNotFoundError(code)
        path.append(child)
        node = child
    return path


def find(code: Code, root: RegionNode) -> RegionNode:
    """
    Resolve ``code`` against the tree under ``root``.

    Raises:
        RegionCodeIncorrectError: The code does not decompose.
        RegionNotFoundError: Some level along the path is missing.
    """
    return _descend(code, root)[-1]


class RegionTree:
    """
    Live handle on a region tree.

    Holds the published root. ``find`` and ``lineage`` read it once per
    call and never block. ``reload`` is serialised by a writer lock and
    publishes only after a full, successful build.
    """

    def __init__(
        self,
        config: SegmentationConfig,
        root_data: bytes = b"",
        root: Optional[RegionNode] = None,
    ) -> None:
        """
        Args:
            config: Segmentation scheme shared by every tree this handle publishes.
            root_data: Payload of the root (global scope) node.
            root: A fully built private root to publish immediately. Must
                use ``config``.
        """
        if root is None:
            root = new_root(config, root_data)
        elif root.config != config:
            raise ValueError("root was built with a different segmentation config")
        self._config = config
        self._root = root
        self._write_lock = threading.Lock()

    @classmethod
    def from_stream(
        cls,
        config: SegmentationConfig,
        stream: Iterable[Line],
        root_data: bytes = b"",
    ) -> "RegionTree":
        """Build a tree from ``stream`` and publish it."""
        root = new_root(config, root_data)
        load(stream, root)
        return cls(config, root=root)

    @classmethod
    def from_config(cls, settings: RegionQueryConfig) -> "RegionTree":
        """
        Build a tree from application settings.

        Loads ``settings.data_file`` when one is configured; otherwise the
        tree starts empty.
        """
        tree = cls(settings.segmentation(), root_data=settings.root_data.encode("utf-8"))
        if settings.data_file:
            tree.reload_file(settings.data_file)
        return tree

    @property
    def config(self) -> SegmentationConfig:
        return self._config

    @property
    def root(self) -> RegionNode:
        """The currently published root. Treat it as read-only."""
        return self._root

    def find(self, code: Code) -> RegionNode:
        """
        Resolve ``code`` to its node in the published tree.

        Text codes are encoded as UTF-8 and measured in bytes.

        Raises:
            RegionCodeIncorrectError: The code does not decompose.
            RegionNotFoundError: No region is loaded under that code.
        """
        return find(code, self._root)

    def lineage(self, code: Code) -> List[RegionNode]:
        """
        Nodes from the top level down to ``code``, root excluded.

        For "101010101" under the default scheme this is continent,
        country, province, city and district, in that order.
        """
        return _descend(code, self._root)

    def reload(self, stream: Iterable[Line]) -> LoadStats:
        """
        Replace the published tree with one built from ``stream``.

        The replacement keeps the current root payload and segmentation
        config. If reading the stream fails, the published tree is left as
        it was and the error propagates.
        """
        with self._write_lock:
            current = self._root
            fresh = new_root(self._config, current.data)
            try:
                stats = load(stream, fresh)
            except Exception:
                LOG.warning("Reload failed; keeping the published tree", exc_info=True)
                raise

            self._root = fresh
            LOG.info("Published region tree with %d records", stats.applied)
            return stats

    def reload_file(self, path: Union[str, Path]) -> LoadStats:
        """Open ``path`` in binary mode and ``reload`` from it."""
        with open(path, "rb") as fh:
            return self.reload(fh)

    def __contains__(self, code: object) -> bool:
        if not isinstance(code, (str, bytes)):
            return False
        try:
            self.find(code)
        except RegionError:
            return False
        return True

    def __repr__(self) -> str:
        return f"RegionTree(levels={self._config.to_string()!r}, top_level={len(self._root.children)})"
