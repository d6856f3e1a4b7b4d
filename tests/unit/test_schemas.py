"""
Coordinate record model, truncation and sample -> record mapping.
"""

import math

import pytest

from coordinates.schemas import (
    I16_MAX,
    I16_MIN,
    CoordinateRecord,
    to_records,
    truncate_i16,
)
from coordinates.waveform import generate
from core.errors import MappingError


class TestTruncate:
    @pytest.mark.parametrize(
        "value,expected",
        [(0.0, 0), (0.9997, 0), (1.999, 1), (-0.5, 0), (-1.5, -1), (-2.9999, -2), (123.9, 123)],
    )
    def test_truncates_toward_zero(self, value, expected):
        assert truncate_i16(value) == expected

    def test_saturates_above_range(self):
        assert truncate_i16(40000.7) == I16_MAX
        assert truncate_i16(math.inf) == I16_MAX

    def test_saturates_below_range(self):
        assert truncate_i16(-40000.2) == I16_MIN
        assert truncate_i16(-math.inf) == I16_MIN

    def test_nan_is_zero(self):
        assert truncate_i16(math.nan) == 0


class TestToRecords:
    def test_one_record_per_axis(self):
        record_x, record_y = to_records((3.0, -1.7))
        assert record_x == CoordinateRecord(value=3, axis="x")
        assert record_y == CoordinateRecord(value=-1, axis="y")

    def test_reference_waveform_loses_fraction(self):
        records = [r for pair in generate(2.0, 0.1, 0.0, 3) for r in to_records(pair)]
        assert [(r.value, r.axis) for r in records] == [
            (0, "x"),
            (0, "y"),
            (1, "x"),
            (0, "y"),
            (2, "x"),
            (0, "y"),
        ]

    def test_large_amplitude_clips(self):
        _, record_y = to_records((1.0, 1e6))
        assert record_y.value == I16_MAX


class TestCoordinateRecord:
    def test_table_fields_follow_declaration_order(self):
        assert CoordinateRecord.table_fields() == "coordinates.value, coordinates.axis"

    def test_rejects_unknown_axis(self):
        with pytest.raises(ValueError):
            CoordinateRecord(value=1, axis="z")

    def test_from_row(self):
        assert CoordinateRecord.from_row({"value": 7, "axis": "y"}) == CoordinateRecord(value=7, axis="y")

    @pytest.mark.parametrize(
        "row",
        [
            {"value": "7", "axis": "y"},
            {"value": 7},
            {"value": 70000, "axis": "x"},
            {"value": 1, "axis": "q"},
        ],
    )
    def test_from_row_bad_rows(self, row):
        with pytest.raises(MappingError):
            CoordinateRecord.from_row(row)

    def test_from_row_not_a_mapping(self):
        with pytest.raises(MappingError):
            CoordinateRecord.from_row(42)
