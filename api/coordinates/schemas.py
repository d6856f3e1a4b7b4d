"""
Coordinate record model and the sample -> record mapping.
"""

from __future__ import annotations

import math
from typing import Any, Literal, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from core.errors import MappingError

TABLE = "coordinates"

I16_MIN = -32768
I16_MAX = 32767

Axis = Literal["x", "y"]


class CoordinateRecord(BaseModel):
    """
    One stored value on one axis. Field order is the column order used by the
    insert template.
    """

    model_config = ConfigDict(frozen=True, strict=True)

    value: int = Field(..., ge=I16_MIN, le=I16_MAX)
    axis: Axis

    @classmethod
    def table_fields(cls) -> str:
        return ", ".join(f"{TABLE}.{name}" for name in cls.model_fields)

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> CoordinateRecord:
        try:
            return cls.model_validate(dict(row))
        except (ValidationError, TypeError, ValueError) as exc:
            raise MappingError(f"Row does not decode into {cls.__name__}.") from exc


def truncate_i16(value: float) -> int:
    """
    Truncate toward zero into the int16 range.

    No rounding: 0.9997 -> 0 and -1.5 -> -1. Out-of-range magnitudes saturate
    at the int16 bounds and NaN maps to 0, so large amplitudes silently clip.
    """
    if math.isnan(value):
        return 0
    if value >= I16_MAX:
        return I16_MAX
    if value <= I16_MIN:
        return I16_MIN
    return int(value)


def to_records(pair: tuple[float, float]) -> tuple[CoordinateRecord, CoordinateRecord]:
    """
    Split one (x, y) sample into two independent records; nothing links them in storage.
    """
    x, y = pair
    return (
        CoordinateRecord(value=truncate_i16(x), axis="x"),
        CoordinateRecord(value=truncate_i16(y), axis="y"),
    )
