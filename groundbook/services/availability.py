"""
Hourly slot grid for a ground on a given date.

``compute_availability`` is pure: the caller hands it the ground and the
non-cancelled bookings already filtered to that ground and date (see
``active_bookings_for``).
"""

import re
from dataclasses import dataclass
from datetime import date
from typing import Iterable, List

from sqlalchemy.orm import Session

from groundbook.core.exceptions import ValidationError
from groundbook.models.booking import Booking
from groundbook.models.enums import BookingStatus

TIME_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})$")


@dataclass(frozen=True)
class Slot:
    start_time: str
    end_time: str
    available: bool
    price: float


def parse_hour(value: str) -> int:
    """Hour-of-day (0-23) of an "HH:MM" string."""
    match = TIME_PATTERN.match(value or "")
    if not match:
        raise ValidationError(f"Invalid time '{value}', expected HH:MM")

    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        raise ValidationError(f"Invalid time '{value}', expected HH:MM")
    return hour


def format_hour(hour: int) -> str:
    return f"{hour:02d}:00"


def compute_availability(ground, day: date, bookings: Iterable) -> List[Slot]:
    open_hour = parse_hour(ground.open_time)
    close_hour = parse_hour(ground.close_time)

    booked = {b.start_time for b in bookings}

    return [
        Slot(
            start_time=format_hour(hour),
            end_time=format_hour(hour + 1),
            available=format_hour(hour) not in booked,
            price=ground.price_per_hour,
        )
        for hour in range(open_hour, close_hour)
    ]


def active_bookings_for(db: Session, ground_id: int, day: date) -> List[Booking]:
    return (
        db.query(Booking)
        .filter(
            Booking.ground_id == ground_id,
            Booking.date == day,
            Booking.booking_status != BookingStatus.CANCELLED.value,
        )
        .all()
    )
