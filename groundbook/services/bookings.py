"""
Booking workflow and admin review.

The conflict pre-check gives a clean error in the common case; the partial
unique index on ``bookings`` is what actually holds the slot lock when two
requests race past the pre-check.
"""

from dataclasses import dataclass
from datetime import date
from typing import List

from sqlalchemy.orm import Session, joinedload

from groundbook.core.auth_utils import Principal
from groundbook.core.exceptions import NotFoundError, SlotUnavailableError, ValidationError
from groundbook.core.logging_config import get_logger
from groundbook.db.transaction import commit_or_raise
from groundbook.models.booking import Booking
from groundbook.models.enums import BookingStatus, PaymentStatus
from groundbook.models.ground import Ground
from groundbook.services.availability import format_hour, parse_hour
from groundbook.utils.payment import build_qr_code_url, build_upi_link

booking_log = get_logger("booking")
payment_log = get_logger("payment")
admin_log = get_logger("admin")


@dataclass
class BookingReceipt:
    booking: Booking
    upi_link: str
    qr_code: str


# ---------------------------------------------------------------------
# DOUBLE BOOKING CHECK
# ---------------------------------------------------------------------
def has_conflict(db: Session, ground_id: int, day: date, start_time: str) -> bool:
    conflict = db.query(Booking.id).filter(
        Booking.ground_id == ground_id,
        Booking.date == day,
        Booking.start_time == start_time,
        Booking.booking_status != BookingStatus.CANCELLED.value,
    ).first()

    return conflict is not None


def validate_slot(ground: Ground, start_time: str, end_time: str):
    """The requested window must be exactly one slot of the ground's grid."""
    start_hour = parse_hour(start_time)
    end_hour = parse_hour(end_time)

    if start_time != format_hour(start_hour):
        raise ValidationError("Start time must be on the hour")

    if not parse_hour(ground.open_time) <= start_hour < parse_hour(ground.close_time):
        raise ValidationError("Start time is outside the ground's operating hours")

    if end_time != format_hour(end_hour) or end_hour != start_hour + 1:
        raise ValidationError("Bookings are for exactly one hour")


# ---------------------------------------------------------------------
# CREATE BOOKING
# ---------------------------------------------------------------------
def create_booking(
    db: Session,
    principal: Principal,
    ground_id: int,
    day: date,
    start_time: str,
    end_time: str,
) -> BookingReceipt:
    ground = db.get(Ground, ground_id)
    if ground is None or not ground.is_active:
        raise NotFoundError("Ground not found")

    # "Today" is the server's local date; deploy with TZ set to the venue timezone
    if day < date.today():
        raise ValidationError("Cannot book past dates")

    validate_slot(ground, start_time, end_time)

    if has_conflict(db, ground_id, day, start_time):
        raise SlotUnavailableError("Slot not available")

    # Single fixed-duration slot
    total_amount = ground.price_per_hour

    booking = Booking(
        user_id=principal.user_id,
        ground_id=ground_id,
        date=day,
        start_time=start_time,
        end_time=end_time,
        total_amount=total_amount,
        payment_status=PaymentStatus.PENDING.value,
        booking_status=BookingStatus.PENDING.value,
    )
    db.add(booking)
    commit_or_raise(db, on_integrity_error=SlotUnavailableError("Slot not available"))
    db.refresh(booking)

    booking_log.info(
        f"Booking Created | Booking={booking.id} | User={principal.user_id} "
        f"| Ground={ground_id} | {day} {start_time}-{end_time} | Amount={total_amount}"
    )

    upi_link = build_upi_link(ground.upi_id, ground.name, total_amount)
    return BookingReceipt(
        booking=booking,
        upi_link=upi_link,
        qr_code=build_qr_code_url(upi_link),
    )


# ---------------------------------------------------------------------
# LISTINGS
# ---------------------------------------------------------------------
def list_user_bookings(db: Session, user_id: int) -> List[Booking]:
    return (
        db.query(Booking)
        .options(joinedload(Booking.ground))
        .filter(Booking.user_id == user_id)
        .order_by(Booking.created_at.desc(), Booking.id.desc())
        .all()
    )


def list_all_bookings(db: Session) -> List[Booking]:
    return (
        db.query(Booking)
        .options(joinedload(Booking.ground), joinedload(Booking.user))
        .order_by(Booking.created_at.desc(), Booking.id.desc())
        .all()
    )


def get_booking(db: Session, booking_id: int) -> Booking:
    booking = db.get(Booking, booking_id)
    if booking is None:
        raise NotFoundError("Booking not found")
    return booking


def get_owned_booking(db: Session, principal: Principal, booking_id: int) -> Booking:
    booking = db.get(Booking, booking_id)
    # Other users' bookings are reported as missing
    if booking is None or booking.user_id != principal.user_id:
        raise NotFoundError("Booking not found")

    if booking.booking_status == BookingStatus.CANCELLED.value:
        raise ValidationError("Booking is cancelled")
    return booking


# ---------------------------------------------------------------------
# PAYMENT CONFIRMATION (customer)
# ---------------------------------------------------------------------
def submit_payment(
    db: Session,
    principal: Principal,
    booking_id: int,
    screenshot: str,
    transaction_id: str | None = None,
) -> Booking:
    booking = get_owned_booking(db, principal, booking_id)

    booking.payment_screenshot = screenshot
    if transaction_id:
        booking.transaction_id = transaction_id
    if booking.payment_status != PaymentStatus.VERIFIED.value:
        booking.payment_status = PaymentStatus.PAID.value

    commit_or_raise(db)
    db.refresh(booking)

    payment_log.info(
        f"Payment Submitted | Booking={booking.id} | User={principal.user_id} "
        f"| Txn={booking.transaction_id}"
    )
    return booking


# ---------------------------------------------------------------------
# ADMIN REVIEW
# ---------------------------------------------------------------------
def verify_booking(db: Session, booking_id: int) -> Booking:
    booking = get_booking(db, booking_id)

    if booking.booking_status == BookingStatus.CANCELLED.value:
        raise ValidationError("Cannot verify a cancelled booking")

    booking.payment_status = PaymentStatus.VERIFIED.value
    booking.booking_status = BookingStatus.CONFIRMED.value
    commit_or_raise(db)
    db.refresh(booking)

    payment_log.info(f"Payment Verified | Booking={booking.id}")
    admin_log.info(f"Admin confirmed booking {booking.id}")
    return booking


def cancel_booking(db: Session, booking_id: int) -> Booking:
    booking = get_booking(db, booking_id)

    booking.booking_status = BookingStatus.CANCELLED.value
    commit_or_raise(db)
    db.refresh(booking)

    admin_log.info(
        f"Admin cancelled booking {booking.id} | Ground={booking.ground_id} "
        f"| {booking.date} {booking.start_time}"
    )
    return booking
