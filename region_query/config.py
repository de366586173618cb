"""Configuration management for region lookup.

Loads settings from environment variables with sensible defaults.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from region_query.segmentation import DEFAULT_SEGMENTATION, SegmentationConfig

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


@dataclass
class RegionQueryConfig:
    """Region lookup configuration."""
    segments: str = DEFAULT_SEGMENTATION.to_string()  # "label:width,..."
    data_file: str = ""  # empty = start with an empty tree
    root_data: str = ""
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "RegionQueryConfig":
        return cls(
            segments=os.getenv("REGION_QUERY_SEGMENTS", DEFAULT_SEGMENTATION.to_string()),
            data_file=os.getenv("REGION_QUERY_DATA_FILE", ""),
            root_data=os.getenv("REGION_QUERY_ROOT_DATA", ""),
            log_level=os.getenv("REGION_QUERY_LOG_LEVEL", "INFO").upper(),
        )

    def segmentation(self) -> SegmentationConfig:
        return SegmentationConfig.parse(self.segments)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
