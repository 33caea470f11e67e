from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import DayType, Seat, SlotOccupancy


@dataclass(frozen=True)
class TimeWindow:
    start: str
    end: str


@dataclass(frozen=True)
class Slot:
    """One bookable time window on the training calendar.

    Dates are 'YYYY-MM-DD' and times 'HH:MM' strings, as stored.
    """

    id: str
    date: str
    time_start: str
    time_end: str
    day_type: DayType
    lead_instructor_id: Optional[str] = None
    second_instructor_id: Optional[str] = None
    trainee_id: Optional[str] = None
    lesson_number: Optional[int] = None
    notes: Optional[str] = None
    completed: bool = False
    attendance_marked: bool = False
    created_at: Optional[str] = None

    def occupant(self, seat: Seat) -> Optional[str]:
        if seat == Seat.LEAD:
            return self.lead_instructor_id
        if seat == Seat.SECOND:
            return self.second_instructor_id
        return self.trainee_id

    @property
    def occupancy(self) -> SlotOccupancy:
        if self.day_type == DayType.INDEPENDENT:
            return SlotOccupancy.INDEPENDENT
        if not self.lead_instructor_id:
            return SlotOccupancy.EMPTY
        if not self.trainee_id:
            return SlotOccupancy.PARTIAL
        return SlotOccupancy.FULL

    def involves(self, user_id: str) -> bool:
        return user_id in (self.lead_instructor_id, self.second_instructor_id, self.trainee_id)


# Column holding each seat's occupant.
SEAT_FIELDS = {
    Seat.LEAD: "lead_instructor_id",
    Seat.SECOND: "second_instructor_id",
    Seat.TRAINEE: "trainee_id",
}
