"""
Tests for the segmentation scheme and code decomposition.

Tests cover:
- Decomposition at every level boundary
- Rejection of empty, mid-level and over-long codes
- Parsing the label:width form and JSON documents
- Immutability and validation of the scheme
"""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from region_query.errors import RegionCodeIncorrectError, RegionError
from region_query.segmentation import (
    DEFAULT_SEGMENTATION,
    SegmentationConfig,
    SegmentLevel,
    decompose,
)


class TestDecompose:
    """Tests for decompose()."""

    @pytest.mark.parametrize(
        "code, pieces",
        [
            (b"1", [b"1"]),
            (b"101", [b"1", b"01"]),
            (b"10101", [b"1", b"01", b"01"]),
            (b"1010101", [b"1", b"01", b"01", b"01"]),
            (b"101010101", [b"1", b"01", b"01", b"01", b"01"]),
            (b"101010116", [b"1", b"01", b"01", b"01", b"16"]),
            (b"101020116", [b"1", b"01", b"02", b"01", b"16"]),
        ],
    )
    def test_valid_codes(self, code, pieces):
        """Codes on a level boundary split into one piece per level."""
        assert decompose(code, DEFAULT_SEGMENTATION) == pieces

    @pytest.mark.parametrize("code", ["", "10", "1010", "10102011", "1010201161", "10101010101"])
    def test_invalid_codes(self, code):
        """Empty, mid-level and over-long codes are rejected."""
        with pytest.raises(RegionCodeIncorrectError) as excinfo:
            decompose(code, DEFAULT_SEGMENTATION)
        assert excinfo.value.code == code

    def test_every_boundary_of_uneven_scheme(self):
        """Each prefix sum of the widths yields pieces of exactly those widths."""
        config = SegmentationConfig.of(("a", 3), ("b", 1), ("c", 4))
        code = "abcdefgh"

        for depth, boundary in enumerate(config.boundaries, start=1):
            pieces = decompose(code[:boundary], config)
            assert len(pieces) == depth
            assert [len(p) for p in pieces] == list(config.widths[:depth])
            assert b"".join(pieces) == code[:boundary].encode("utf-8")

    def test_non_boundary_lengths_fail(self):
        """Every length that is not a prefix sum fails."""
        config = SegmentationConfig.of(("a", 3), ("b", 1), ("c", 4))
        valid = set(config.boundaries)

        for length in range(0, 12):
            if length in valid:
                continue
            with pytest.raises(RegionCodeIncorrectError):
                decompose("x" * length, config)

    def test_empty_scheme_rejects_everything(self):
        """A scheme with no levels accepts no code."""
        with pytest.raises(RegionCodeIncorrectError):
            decompose("1", SegmentationConfig())

    def test_error_is_region_error(self):
        """Incorrect code errors share the RegionError base."""
        with pytest.raises(RegionError, match="region code incorrect"):
            decompose("10", DEFAULT_SEGMENTATION)

    def test_text_codes_match_byte_codes(self):
        """Text codes decompose like their UTF-8 bytes."""
        assert decompose("101", DEFAULT_SEGMENTATION) == decompose(b"101", DEFAULT_SEGMENTATION)

    def test_non_ascii_code_measured_in_bytes(self):
        """A three-byte character fills a width-3 level, not a width-1 level."""
        assert decompose("中", SegmentationConfig.of(("a", 3))) == ["中".encode("utf-8")]
        with pytest.raises(RegionCodeIncorrectError):
            decompose("中", SegmentationConfig.of(("a", 1)))

    def test_arbitrary_bytes_decompose(self):
        """Codes need not be valid UTF-8."""
        assert decompose(b"\xff\xfe", SegmentationConfig.of(("a", 1), ("b", 1))) == [b"\xff", b"\xfe"]


class TestSegmentationConfig:
    """Tests for SegmentationConfig construction and parsing."""

    def test_default_scheme(self):
        """Default scheme is the five-level administrative layout."""
        assert [level.label for level in DEFAULT_SEGMENTATION.levels] == [
            "continent",
            "country",
            "province",
            "city",
            "district",
        ]
        assert DEFAULT_SEGMENTATION.widths == (1, 2, 2, 2, 2)
        assert DEFAULT_SEGMENTATION.boundaries == (1, 3, 5, 7, 9)
        assert len(DEFAULT_SEGMENTATION) == 5

    def test_parse_roundtrip(self):
        """to_string output parses back to an equal scheme."""
        text = DEFAULT_SEGMENTATION.to_string()
        assert text == "continent:1,country:2,province:2,city:2,district:2"
        assert SegmentationConfig.parse(text) == DEFAULT_SEGMENTATION

    def test_parse_tolerates_whitespace(self):
        """Whitespace around entries is ignored."""
        config = SegmentationConfig.parse(" state:2 , county:3 ,")
        assert config.widths == (2, 3)
        assert config.levels[1].label == "county"

    @pytest.mark.parametrize("text", ["state", "state:x", "state:0", "state:-1", ":2", "", " , "])
    def test_parse_rejects_bad_entries(self, text):
        """Malformed entries raise ValueError."""
        with pytest.raises(ValueError):
            SegmentationConfig.parse(text)

    def test_parse_requires_a_level(self):
        """A scheme string without entries is a configuration error."""
        with pytest.raises(ValueError, match="segmentation scheme has no levels"):
            SegmentationConfig.parse(" , ")

    def test_from_json_file(self, tmp_path):
        """JSON documents load through pydantic validation."""
        path = tmp_path / "scheme.json"
        path.write_text(
            json.dumps({"levels": [{"label": "country", "width": 2}, {"label": "zip", "width": 5}]}),
            encoding="utf-8",
        )

        config = SegmentationConfig.from_json_file(path)

        assert config.widths == (2, 5)
        assert decompose("US94107", config) == [b"US", b"94107"]

    def test_from_json_file_rejects_zero_width(self, tmp_path):
        """Widths must be positive."""
        path = tmp_path / "scheme.json"
        path.write_text(json.dumps({"levels": [{"label": "country", "width": 0}]}), encoding="utf-8")

        with pytest.raises(ValidationError):
            SegmentationConfig.from_json_file(path)

    def test_level_rejects_non_positive_width(self):
        """SegmentLevel validates its width."""
        with pytest.raises(ValidationError):
            SegmentLevel(label="city", width=0)

    def test_scheme_is_frozen(self):
        """Schemes cannot be modified after creation."""
        with pytest.raises(ValidationError):
            DEFAULT_SEGMENTATION.levels = ()
        with pytest.raises(ValidationError):
            DEFAULT_SEGMENTATION.levels[0].width = 3

    def test_scheme_is_hashable(self):
        """Frozen schemes hash by value."""
        assert hash(SegmentationConfig.parse(DEFAULT_SEGMENTATION.to_string())) == hash(DEFAULT_SEGMENTATION)
