import math
from datetime import date
from typing import List, Optional

from sqlalchemy.orm import Session

from groundbook.core.exceptions import NotFoundError, ValidationError
from groundbook.core.logging_config import get_logger
from groundbook.core.redis import ACTIVE_GROUNDS_KEY, delete_cache, get_cache, set_cache
from groundbook.db.transaction import commit_or_raise
from groundbook.models.booking import Booking
from groundbook.models.enums import BookingStatus
from groundbook.models.ground import Ground
from groundbook.schemas.ground import GroundOut
from groundbook.services.availability import parse_hour

admin_log = get_logger("admin")


def split_amenities(raw: Optional[str]) -> List[str]:
    if not raw:
        return []
    return [a.strip() for a in raw.split(",") if a.strip()]


def validate_ground_input(
    name: str,
    address: str,
    open_time: str,
    close_time: str,
    price_per_hour: float,
    lat: Optional[float] = None,
    lng: Optional[float] = None,
):
    if not name.strip() or not address.strip():
        raise ValidationError("Name and address are required")

    if not math.isfinite(price_per_hour) or price_per_hour < 0:
        raise ValidationError("Price per hour must be a non-negative number")

    for coordinate in (lat, lng):
        if coordinate is not None and not math.isfinite(coordinate):
            raise ValidationError("Coordinates must be finite numbers")

    if parse_hour(open_time) >= parse_hour(close_time):
        raise ValidationError("Open time must be before close time")


def register_ground(
    db: Session,
    *,
    name: str,
    address: str,
    open_time: str,
    close_time: str,
    price_per_hour: float,
    lat: Optional[float] = None,
    lng: Optional[float] = None,
    amenities: Optional[str] = None,
    upi_id: Optional[str] = None,
    qr_code_image: Optional[str] = None,
    images: Optional[List[str]] = None,
) -> Ground:
    validate_ground_input(name, address, open_time, close_time, price_per_hour, lat, lng)

    ground = Ground(
        name=name.strip(),
        address=address.strip(),
        lat=lat,
        lng=lng,
        images=images or [],
        open_time=open_time,
        close_time=close_time,
        price_per_hour=price_per_hour,
        amenities=split_amenities(amenities),
        upi_id=upi_id or None,
        qr_code_image=qr_code_image,
        is_active=True,
    )
    db.add(ground)
    commit_or_raise(db)
    db.refresh(ground)

    delete_cache(ACTIVE_GROUNDS_KEY)
    admin_log.info(f"Ground Created | Ground={ground.id} | Name={ground.name}")
    return ground


def get_ground(db: Session, ground_id: int) -> Ground:
    ground = db.get(Ground, ground_id)
    if ground is None:
        raise NotFoundError("Ground not found")
    return ground


def list_active_grounds(db: Session) -> List[dict]:
    """Active grounds as JSON-ready dicts, served from Redis when warm."""
    cached = get_cache(ACTIVE_GROUNDS_KEY)
    if cached is not None:
        return cached

    grounds = (
        db.query(Ground)
        .filter(Ground.is_active == True)  # noqa: E712
        .order_by(Ground.id)
        .all()
    )
    data = [GroundOut.model_validate(g).model_dump(mode="json") for g in grounds]
    set_cache(ACTIVE_GROUNDS_KEY, data)
    return data


def has_upcoming_bookings(db: Session, ground_id: int) -> bool:
    return db.query(Booking.id).filter(
        Booking.ground_id == ground_id,
        Booking.date >= date.today(),
        Booking.booking_status != BookingStatus.CANCELLED.value,
    ).first() is not None


def set_ground_status(db: Session, ground_id: int, is_active: bool) -> Ground:
    ground = get_ground(db, ground_id)

    if not is_active and ground.is_active and has_upcoming_bookings(db, ground_id):
        raise ValidationError("Ground has upcoming bookings and cannot be deactivated")

    ground.is_active = is_active
    commit_or_raise(db)
    db.refresh(ground)

    delete_cache(ACTIVE_GROUNDS_KEY)
    admin_log.info(f"Ground {'Activated' if is_active else 'Deactivated'} | Ground={ground.id}")
    return ground
