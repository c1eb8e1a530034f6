# hostel_rooms/models/room.py
"""
Room and bed models.

A room is a physical four-bed unit with fixed facilities and rent.
Beds are child rows keyed by letter; the set of four slots is created
with the room and never changes afterwards.
"""

from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Optional

from sqlalchemy import (
    Boolean,
    DateTime,
    Enum as SAEnum,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hostel_rooms.models.base import BaseModel, TimestampMixin
from hostel_rooms.models.enums import (
    BedLetter,
    RoomHold,
    RoomStatus,
    Wing,
    enum_values,
)

__all__ = ["Room", "Bed"]


class Room(BaseModel, TimestampMixin):
    """
    Core room entity.

    ``status`` is persisted so it can be filtered and aggregated in SQL,
    but it is always recomputed by :meth:`refresh_status` after a bed or
    hold change.
    """

    __tablename__ = "rooms"

    room_number: Mapped[str] = mapped_column(
        String(10),
        nullable=False,
        unique=True,
        index=True,
    )
    floor: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    wing: Mapped[Wing] = mapped_column(
        SAEnum(Wing, name="room_wing", native_enum=False, length=1, values_callable=enum_values),
        nullable=False,
        index=True,
    )

    # Facilities
    has_ac: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, index=True)
    has_attached_bathroom: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    has_balcony: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    has_furniture: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    status: Mapped[RoomStatus] = mapped_column(
        SAEnum(RoomStatus, name="room_status", native_enum=False, length=20, values_callable=enum_values),
        nullable=False,
        default=RoomStatus.AVAILABLE,
        index=True,
    )
    hold: Mapped[Optional[RoomHold]] = mapped_column(
        SAEnum(RoomHold, name="room_hold", native_enum=False, length=20, values_callable=enum_values),
        nullable=True,
    )
    rent: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)

    # Maintenance tracking
    maintenance_scheduled: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    hold_reason: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    last_maintenance: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    beds: Mapped[List["Bed"]] = relationship(
        "Bed",
        back_populates="room",
        cascade="all, delete-orphan",
        order_by="Bed.bed_letter",
        lazy="selectin",
    )

    __table_args__ = (
        Index("ix_rooms_wing_floor", "wing", "floor"),
    )

    # ------------------------------------------------------------------
    # Occupancy helpers
    # ------------------------------------------------------------------

    @property
    def bed_map(self) -> Dict[str, "Bed"]:
        return {bed.bed_letter.value: bed for bed in self.beds}

    @property
    def available_beds(self) -> List[str]:
        """Letters of the free beds, in slot order."""
        beds = self.bed_map
        return [letter for letter in BedLetter.letters() if letter in beds and not beds[letter].is_occupied]

    @property
    def occupancy_count(self) -> int:
        return sum(1 for bed in self.beds if bed.is_occupied)

    @property
    def facilities(self) -> Dict[str, bool]:
        return {
            "has_ac": self.has_ac,
            "has_attached_bathroom": self.has_attached_bathroom,
            "has_balcony": self.has_balcony,
            "has_furniture": self.has_furniture,
        }

    def derive_status(self, occupied: Optional[int] = None) -> RoomStatus:
        """
        Status implied by the current hold and occupancy.

        A hold always wins. Otherwise an empty room is AVAILABLE and a
        room with at least one occupant is OCCUPIED.
        """
        if self.hold is not None:
            return RoomStatus(self.hold.value)
        if occupied is None:
            occupied = self.occupancy_count
        return RoomStatus.AVAILABLE if occupied == 0 else RoomStatus.OCCUPIED

    def refresh_status(self, occupied: Optional[int] = None) -> RoomStatus:
        self.status = self.derive_status(occupied)
        return self.status

    def __repr__(self) -> str:
        return f"<Room(room_number={self.room_number}, wing={self.wing}, status={self.status})>"


class Bed(BaseModel):
    """
    One of the four bed slots of a room.

    ``student_id`` is unique across the table, so a student can hold
    at most one bed in the whole inventory. NULLs do not collide.
    """

    __tablename__ = "beds"

    room_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("rooms.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    bed_letter: Mapped[BedLetter] = mapped_column(
        SAEnum(BedLetter, name="bed_letter", native_enum=False, length=1, values_callable=enum_values),
        nullable=False,
    )
    is_occupied: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    student_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    occupied_since: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    room: Mapped["Room"] = relationship("Room", back_populates="beds")

    __table_args__ = (
        UniqueConstraint("room_id", "bed_letter", name="uq_beds_room_letter"),
        UniqueConstraint("student_id", name="uq_beds_student"),
    )

    def __repr__(self) -> str:
        return f"<Bed(room_id={self.room_id}, bed_letter={self.bed_letter}, is_occupied={self.is_occupied})>"
