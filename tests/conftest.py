"""
Shared test fixtures and pytest configuration.

Markers:
    @pytest.mark.concurrency  - Spins up thread pools against a live tree

Run only the fast tests:
    pytest -m "not concurrency"
"""

from __future__ import annotations

from pathlib import Path

import pytest

from region_query import DEFAULT_SEGMENTATION, RegionTree

TESTDATA_DIR = Path(__file__).parent / "testdata"

ROOT_DATA = "世界\tWorld".encode("utf-8")


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "concurrency: runs readers and writers on multiple threads")


@pytest.fixture
def regions_file() -> Path:
    """Sample dataset with the Beijing and Tianjin branches loaded."""
    return TESTDATA_DIR / "regions.txt"


@pytest.fixture
def update_file() -> Path:
    """Smaller dataset used as a replacement in reload tests."""
    return TESTDATA_DIR / "regions_update.txt"


@pytest.fixture
def tree(regions_file) -> RegionTree:
    """Published tree built from the sample dataset."""
    t = RegionTree(DEFAULT_SEGMENTATION, root_data=ROOT_DATA)
    t.reload_file(regions_file)
    return t
