"""
Region lookup errors.

Two domain conditions exist:
- RegionCodeIncorrectError: the code length does not land on a level boundary
- RegionNotFoundError: the code is well formed but no such region is loaded

Stream failures (OSError and friends) are never wrapped; they propagate as-is.
"""

from __future__ import annotations

from typing import Union


class RegionError(Exception):
    """Base class for region lookup failures."""

    message = "region error"

    def __init__(self, code: Union[str, bytes]) -> None:
        super().__init__(f"{self.message}: {code!r}")
        self.code = code


class RegionCodeIncorrectError(RegionError):
    """Raised when a code does not decompose under the segmentation scheme."""

    message = "region code incorrect"


class RegionNotFoundError(RegionError):
    """Raised when a valid code has no node in the tree."""

    message = "region not found"
