# hostel_rooms/repositories/room/room_repository.py
"""
Room repository: room lookups, filtered listings, bed compare-and-set
updates and occupancy aggregates.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from sqlalchemy import Integer, and_, case, cast, func, select, update
from sqlalchemy.orm import Session, joinedload

from hostel_rooms.models.enums import BedLetter, RoomStatus, Wing
from hostel_rooms.models.room import Bed, Room
from hostel_rooms.repositories.base_repository import BaseRepository


class RoomRepository(BaseRepository[Room]):
    """
    Repository for Room and Bed entities.

    Handles:
    - Room lookup by number (optionally row-locked)
    - Filtered and paginated room listings
    - Conditional bed updates used by allocation
    - Aggregates for occupancy statistics
    """

    def __init__(self, session: Session):
        super().__init__(Room, session)

    @staticmethod
    def _numeric_order():
        # Room numbers are digit strings; sort them as integers
        return cast(Room.room_number, Integer)

    # ============================================================================
    # ROOM LOOKUPS
    # ============================================================================

    def find_by_room_number(self, room_number: str, lock: bool = False) -> Optional[Room]:
        """
        Find room by its number.

        Args:
            room_number: Room number
            lock: Take a row lock (SELECT ... FOR UPDATE) for the rest of
                the transaction

        Returns:
            Room or None if not found
        """
        query = select(Room).where(Room.room_number == str(room_number))
        if lock:
            query = query.with_for_update()
        return self.session.execute(query).scalar_one_or_none()

    def find_rooms(
        self,
        statuses: Optional[Iterable[RoomStatus]] = None,
        wing: Optional[Wing] = None,
        floor: Optional[int] = None,
        has_ac: Optional[bool] = None,
        min_rent: Optional[Decimal] = None,
        max_rent: Optional[Decimal] = None,
    ) -> List[Room]:
        """
        Find rooms matching every supplied filter, ordered by room number.

        Args:
            statuses: Allowed room statuses
            wing: Wing filter
            floor: Floor filter
            has_ac: AC filter
            min_rent: Inclusive lower rent bound
            max_rent: Inclusive upper rent bound

        Returns:
            List of rooms with beds loaded
        """
        conditions = []
        if statuses is not None:
            conditions.append(Room.status.in_(list(statuses)))
        if wing is not None:
            conditions.append(Room.wing == wing)
        if floor is not None:
            conditions.append(Room.floor == floor)
        if has_ac is not None:
            conditions.append(Room.has_ac == has_ac)
        if min_rent is not None:
            conditions.append(Room.rent >= min_rent)
        if max_rent is not None:
            conditions.append(Room.rent <= max_rent)

        query = select(Room)
        if conditions:
            query = query.where(and_(*conditions))
        query = query.order_by(self._numeric_order())

        return list(self.session.execute(query).scalars().all())

    def search_rooms(self, search: Optional[str], offset: int, limit: int) -> Tuple[List[Room], int]:
        """
        Paginated listing, optionally narrowed by a room number substring.

        Returns:
            Tuple of (rooms on the page, total matching rooms)
        """
        condition = None
        if search:
            condition = func.lower(Room.room_number).contains(search.lower(), autoescape=True)

        count_query = select(func.count(Room.id))
        query = select(Room)
        if condition is not None:
            count_query = count_query.where(condition)
            query = query.where(condition)

        total = self.session.execute(count_query).scalar_one()
        query = query.order_by(self._numeric_order()).offset(offset).limit(limit)
        return list(self.session.execute(query).scalars().all()), total

    def find_bed_by_student(self, student_id: str) -> Optional[Bed]:
        """Bed currently held by the student, with its room loaded."""
        query = (
            select(Bed)
            .options(joinedload(Bed.room))
            .where(Bed.student_id == str(student_id))
        )
        return self.session.execute(query).scalar_one_or_none()

    # ============================================================================
    # BED UPDATES
    # ============================================================================

    def _apply_bed_update(self, stmt) -> bool:
        changed = self.session.execute(stmt).rowcount == 1
        if changed:
            # Loaded Bed rows are stale after a bulk UPDATE
            self.session.expire_all()
        return changed

    def occupy_bed(self, room_id: str, bed_letter: BedLetter, student_id: str, at: datetime) -> bool:
        """
        Mark a bed occupied only if it is currently free.

        Returns:
            True when exactly one row changed, False if the bed was taken
        """
        stmt = (
            update(Bed)
            .where(
                Bed.room_id == room_id,
                Bed.bed_letter == bed_letter,
                Bed.is_occupied.is_(False),
            )
            .values(is_occupied=True, student_id=str(student_id), occupied_since=at)
            .execution_options(synchronize_session=False)
        )
        return self._apply_bed_update(stmt)

    def vacate_bed(self, room_id: str, bed_letter: BedLetter, student_id: str) -> bool:
        """
        Clear a bed only if it is occupied by the given student.

        Returns:
            True when exactly one row changed, False on mismatch
        """
        stmt = (
            update(Bed)
            .where(
                Bed.room_id == room_id,
                Bed.bed_letter == bed_letter,
                Bed.is_occupied.is_(True),
                Bed.student_id == str(student_id),
            )
            .values(is_occupied=False, student_id=None, occupied_since=None)
            .execution_options(synchronize_session=False)
        )
        return self._apply_bed_update(stmt)

    def count_occupied_beds(self, room_id: str) -> int:
        query = select(func.count(Bed.id)).where(Bed.room_id == room_id, Bed.is_occupied.is_(True))
        return self.session.execute(query).scalar_one()

    # ============================================================================
    # AGGREGATES
    # ============================================================================

    def count_by_status(self) -> Dict[RoomStatus, int]:
        """Number of rooms per status; statuses with no rooms are 0."""
        query = select(Room.status, func.count(Room.id)).group_by(Room.status)
        counts = {status: 0 for status in RoomStatus}
        for status, total in self.session.execute(query).all():
            counts[RoomStatus(status)] = total
        return counts

    def bed_totals(self) -> Tuple[int, int]:
        """
        Returns:
            Tuple of (total beds, occupied beds)
        """
        query = select(
            func.count(Bed.id),
            func.coalesce(func.sum(case((Bed.is_occupied.is_(True), 1), else_=0)), 0),
        )
        total, occupied = self.session.execute(query).one()
        return int(total), int(occupied)

    def _status_breakdown(self, group_column, include_rent: bool) -> Sequence[Any]:
        columns = [
            group_column,
            func.count(Room.id),
            func.sum(case((Room.status == RoomStatus.AVAILABLE, 1), else_=0)),
            func.sum(case((Room.status == RoomStatus.OCCUPIED, 1), else_=0)),
        ]
        if include_rent:
            columns.append(func.avg(Room.rent))
        query = select(*columns).group_by(group_column).order_by(group_column)
        return self.session.execute(query).all()

    def wing_breakdown(self) -> List[Dict[str, Any]]:
        """Per-wing room counts and average rent, ordered by wing."""
        rows = self._status_breakdown(Room.wing, include_rent=True)
        return [
            {
                "wing": Wing(wing),
                "total_rooms": int(total),
                "available_rooms": int(available or 0),
                "occupied_rooms": int(occupied or 0),
                "average_rent": round(float(average_rent), 2) if average_rent is not None else 0.0,
            }
            for wing, total, available, occupied, average_rent in rows
        ]

    def floor_breakdown(self) -> List[Dict[str, Any]]:
        """Per-floor room counts, ordered by floor."""
        rows = self._status_breakdown(Room.floor, include_rent=False)
        return [
            {
                "floor": int(floor),
                "total_rooms": int(total),
                "available_rooms": int(available or 0),
                "occupied_rooms": int(occupied or 0),
            }
            for floor, total, available, occupied in rows
        ]
