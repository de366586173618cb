"""
Fixed-width segmentation scheme for region codes.

A scheme is an ordered list of levels, each consuming a fixed number of
bytes from the front of a code:

    continent:1,country:2,province:2,city:2,district:2

    "1"          -> [b"1"]
    "101"        -> [b"1", b"01"]
    "101010116"  -> [b"1", b"01", b"01", b"01", b"16"]

A code may stop at any level boundary, so "10101" (province) is as valid
as the full district code. Anything landing mid-level is rejected.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Tuple, Union

from pydantic import BaseModel, ConfigDict, PositiveInt

from region_query.errors import RegionCodeIncorrectError


class SegmentLevel(BaseModel):
    """One hierarchy level: a diagnostic label and its width in bytes."""

    model_config = ConfigDict(frozen=True)

    label: str
    width: PositiveInt


class SegmentationConfig(BaseModel):
    """
    Ordered, immutable segmentation scheme.

    Shared by reference from a tree's root; never copied per node.
    Labels are for humans only and play no part in lookup.
    """

    model_config = ConfigDict(frozen=True)

    levels: Tuple[SegmentLevel, ...] = ()

    def __len__(self) -> int:
        return len(self.levels)

    @property
    def widths(self) -> Tuple[int, ...]:
        return tuple(level.width for level in self.levels)

    @property
    def boundaries(self) -> Tuple[int, ...]:
        """Code lengths that resolve to a level, shallowest first."""
        total = 0
        bounds = []
        for width in self.widths:
            total += width
            bounds.append(total)
        return tuple(bounds)

    @classmethod
    def of(cls, *levels: Tuple[str, int]) -> "SegmentationConfig":
        """Build from ``(label, width)`` pairs."""
        return cls(levels=tuple(SegmentLevel(label=label, width=width) for label, width in levels))

    @classmethod
    def parse(cls, text: str) -> "SegmentationConfig":
        """
        Parse the ``label:width,label:width`` form used in environment config.

        Raises:
            ValueError: If an entry is missing its width or the width is not
                a positive integer, or if no entries are given.
        """
        pairs = []
        for entry in text.split(","):
            entry = entry.strip()
            if not entry:
                continue
            label, sep, width_s = entry.rpartition(":")
            if not sep or not label:
                raise ValueError(f"Segment entry must be label:width, got {entry!r}")
            try:
                width = int(width_s)
            except ValueError:
                raise ValueError(f"Segment width must be an integer, got {entry!r}") from None
            if width <= 0:
                raise ValueError(f"Segment width must be positive, got {entry!r}")
            pairs.append((label.strip(), width))
        if not pairs:
            raise ValueError("segmentation scheme has no levels")
        return cls.of(*pairs)

    @classmethod
    def from_json_file(cls, path: Union[str, Path]) -> "SegmentationConfig":
        """Load a ``{"levels": [{"label": ..., "width": ...}]}`` document."""
        return cls.model_validate_json(Path(path).read_text(encoding="utf-8"))

    def to_string(self) -> str:
        return ",".join(f"{level.label}:{level.width}" for level in self.levels)


Code = Union[str, bytes]

DEFAULT_SEGMENTATION = SegmentationConfig.of(
    ("continent", 1),
    ("country", 2),
    ("province", 2),
    ("city", 2),
    ("district", 2),
)


def as_code_bytes(code: Code) -> bytes:
    """Codes are measured and keyed in bytes; text is encoded as UTF-8."""
    return code.encode("utf-8") if isinstance(code, str) else code


def decompose(code: Code, config: SegmentationConfig) -> List[bytes]:
    """
    Split a code into one piece per consumed level.

    Widths count bytes. They are accumulated left to right until the next
    level would run past the end of the code. The code is valid only if
    that lands exactly on its length and the length is non-zero.

    Raises:
        RegionCodeIncorrectError: Empty code, code ending mid-level, or code
            longer than the whole scheme.
    """
    raw = as_code_bytes(code)
    length = len(raw)
    consumed = 0
    pieces: List[bytes] = []

    for level in config.levels:
        end = consumed + level.width
        if end > length:
            break
        pieces.append(raw[consumed:end])
        consumed = end

    if length == 0 or consumed != length:
        raise RegionCodeIncorrectError(code)
    return pieces
