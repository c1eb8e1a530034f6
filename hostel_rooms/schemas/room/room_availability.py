# --- File: hostel_rooms/schemas/room/room_availability.py ---
"""
Availability and recommendation schemas.

Filter and preference schemas validate caller input; the service turns
pydantic validation failures into application ValidationErrors.
"""

from __future__ import annotations

from typing import Any, List, Optional

from pydantic import Field, field_validator, model_validator

from hostel_rooms.models.enums import BedLetter, Wing
from hostel_rooms.schemas.common.base import BaseSchema
from hostel_rooms.schemas.room.room_response import RoomResponse

__all__ = [
    "PriceRange",
    "AvailabilityFilters",
    "RoomPreferences",
    "RecommendedRoom",
    "AvailableBed",
    "AvailableBedList",
]


def _normalize_wing(value: Any) -> Any:
    if isinstance(value, str):
        value = value.strip().upper()
        return value or None
    return value


class PriceRange(BaseSchema):
    """Inclusive rent bounds."""

    min: Optional[float] = Field(default=None, ge=0, description="Lowest acceptable rent (default 0)")
    max: Optional[float] = Field(default=None, ge=0, description="Highest acceptable rent")

    @model_validator(mode="after")
    def validate_bounds(self) -> "PriceRange":
        if self.min is not None and self.max is not None and self.min > self.max:
            raise ValueError("min price cannot exceed max price")
        return self


class AvailabilityFilters(BaseSchema):
    """Optional filters for the availability query."""

    wing: Optional[Wing] = None
    floor: Optional[int] = Field(default=None, ge=1)
    has_ac: Optional[bool] = None
    price_range: Optional[PriceRange] = None

    @field_validator("wing", mode="before")
    @classmethod
    def normalize_wing(cls, v: Any) -> Any:
        return _normalize_wing(v)


class RoomPreferences(BaseSchema):
    """
    Student preferences for the room recommendation.

    Every preference that is given also acts as a hard filter.
    """

    wing: Optional[Wing] = None
    floor: Optional[int] = Field(default=None, ge=1)
    has_ac: Optional[bool] = None
    budget: Optional[float] = Field(default=None, gt=0, description="Maximum monthly rent")

    @field_validator("wing", mode="before")
    @classmethod
    def normalize_wing(cls, v: Any) -> Any:
        return _normalize_wing(v)


class RecommendedRoom(BaseSchema):
    """A candidate room with its suitability score."""

    room: RoomResponse
    available_beds: List[BedLetter]
    occupancy: int = Field(..., ge=0)
    score: int


class AvailableBed(BaseSchema):
    """One free bed, labelled for selection lists."""

    room_number: str
    bed_letter: BedLetter
    label: str = Field(..., examples=["Room 5 - Bed B"])
    floor: int
    wing: Wing
    rent: float


class AvailableBedList(BaseSchema):
    available_beds: List[AvailableBed]
    total: int
