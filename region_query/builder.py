"""
Tree builder: populate a private region tree from a line-oriented stream.

Record format, one per line:

    CODE<TAB>DATA

Only the first tab separates; DATA keeps any further tabs verbatim.
Lines without a tab, and lines whose code does not decompose under the
root's segmentation scheme, are skipped without error. Codes are raw
bytes and are never decoded. Errors raised by the stream itself propagate
and abort the load.

``load`` mutates the target tree in place and must only be used on a root
that no reader can see yet. Published trees are refreshed through
``RegionTree.reload``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Union

from region_query.errors import RegionCodeIncorrectError
from region_query.node import RegionNode
from region_query.segmentation import decompose

LOG = logging.getLogger("region_query.builder")

FIELD_DELIMITER = b"\t"

Line = Union[bytes, str]


@dataclass
class LoadStats:
    """Summary of one load pass."""

    lines: int = 0
    applied: int = 0
    skipped_no_delimiter: int = 0
    skipped_bad_code: int = 0
    nodes_created: int = 0

    @property
    def skipped(self) -> int:
        return self.skipped_no_delimiter + self.skipped_bad_code

    def to_dict(self) -> dict:
        return {
            "lines": self.lines,
            "applied": self.applied,
            "skipped_no_delimiter": self.skipped_no_delimiter,
            "skipped_bad_code": self.skipped_bad_code,
            "nodes_created": self.nodes_created,
        }


def _strip_line_break(line: bytes) -> bytes:
    if line.endswith(b"\n"):
        line = line[:-1]
    if line.endswith(b"\r"):
        line = line[:-1]
    return line


def load(stream: Iterable[Line], root: RegionNode) -> LoadStats:
    """
    Load records from ``stream`` into the tree under ``root``.

    Missing nodes along a record's path are created with an empty payload;
    the terminal node's payload is overwritten with the record's data.

    Args:
        stream: Iterable of lines, e.g. a file opened in binary mode.
            ``str`` lines are encoded as UTF-8.
        root: Root node carrying the segmentation config.

    Returns:
        LoadStats for this pass.

    Raises:
        ValueError: If ``root`` has no segmentation config.
        OSError: Propagated from the stream. The tree may be partially
            populated and must not be published.
    """
    config = root.config
    if config is None:
        raise ValueError("load target must be a root node with a segmentation config")

    stats = LoadStats()

    for raw in stream:
        stats.lines += 1
        line = raw.encode("utf-8") if isinstance(raw, str) else raw
        line = _strip_line_break(line)

        code_bytes, sep, data = line.partition(FIELD_DELIMITER)
        if not sep:
            stats.skipped_no_delimiter += 1
            LOG.debug("Skipping line %d: no delimiter", stats.lines)
            continue

        try:
            pieces = decompose(code_bytes, config)
        except RegionCodeIncorrectError:
            stats.skipped_bad_code += 1
            LOG.debug("Skipping line %d: incorrect code %r", stats.lines, code_bytes)
            continue

        node = root
        for piece in pieces:
            child = node.children.get(piece)
            if child is None:
                child = node.add_child(piece)
                stats.nodes_created += 1
            node = child

        node.data = data
        stats.applied += 1

    LOG.info(
        "Loaded %d records from %d lines (%d without delimiter, %d incorrect codes, %d new nodes)",
        stats.applied,
        stats.lines,
        stats.skipped_no_delimiter,
        stats.skipped_bad_code,
        stats.nodes_created,
    )
    return stats


def load_file(path: Union[str, Path], root: RegionNode) -> LoadStats:
    """Open ``path`` in binary mode and ``load`` it into ``root``."""
    with open(path, "rb") as fh:
        return load(fh, root)
