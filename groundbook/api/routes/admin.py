from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from sqlalchemy.orm import Session

from groundbook.core.config import settings
from groundbook.core.dependencies import get_db, require_admin
from groundbook.core.exceptions import DomainException, ValidationError
from groundbook.schemas.booking import AdminBookingOut, BookingActionOut, BookingOut
from groundbook.schemas.ground import GroundActionOut, GroundOut, GroundStatusUpdate
from groundbook.services import bookings as booking_service
from groundbook.services import grounds as ground_service
from groundbook.utils.storage import discard_upload, save_upload

router = APIRouter(
    prefix="/api/admin",
    tags=["Admin"],
    dependencies=[Depends(require_admin)],
)


def _present(files: Optional[List[UploadFile]]) -> List[UploadFile]:
    return [f for f in files or [] if f.filename]


# ==================================================
# CREATE GROUND (multipart, up to MAX_GROUND_IMAGES)
# ==================================================
@router.post("/grounds", response_model=GroundActionOut, status_code=status.HTTP_201_CREATED)
def create_ground(
    name: str = Form(...),
    address: str = Form(...),
    open_time: str = Form(...),
    close_time: str = Form(...),
    price_per_hour: float = Form(...),
    lat: Optional[float] = Form(None),
    lng: Optional[float] = Form(None),
    amenities: Optional[str] = Form(None),
    upi_id: Optional[str] = Form(None),
    images: Optional[List[UploadFile]] = File(None),
    qr_code: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
):
    image_files = _present(images)
    if len(image_files) > settings.MAX_GROUND_IMAGES:
        raise ValidationError(f"At most {settings.MAX_GROUND_IMAGES} images are allowed")

    # Reject bad input before anything is written to storage
    ground_service.validate_ground_input(
        name, address, open_time, close_time, price_per_hour, lat, lng
    )

    stored_images = []
    qr_reference = None
    try:
        for f in image_files:
            stored_images.append(save_upload(f, folder="grounds"))
        if qr_code and qr_code.filename:
            qr_reference = save_upload(qr_code, folder="grounds")

        ground = ground_service.register_ground(
            db,
            name=name,
            address=address,
            open_time=open_time,
            close_time=close_time,
            price_per_hour=price_per_hour,
            lat=lat,
            lng=lng,
            amenities=amenities,
            upi_id=upi_id,
            qr_code_image=qr_reference,
            images=stored_images,
        )
    except DomainException:
        for reference in stored_images + [qr_reference]:
            if reference:
                discard_upload(reference)
        raise

    return GroundActionOut(
        message="Ground added successfully",
        ground=GroundOut.model_validate(ground),
    )


# ==================================================
# ACTIVATE / DEACTIVATE GROUND
# ==================================================
@router.patch("/grounds/{ground_id}/status", response_model=GroundActionOut)
def update_ground_status(
    ground_id: int,
    data: GroundStatusUpdate,
    db: Session = Depends(get_db),
):
    ground = ground_service.set_ground_status(db, ground_id, data.is_active)

    return GroundActionOut(
        message="Ground activated" if ground.is_active else "Ground deactivated",
        ground=GroundOut.model_validate(ground),
    )


# ==================================================
# ALL BOOKINGS
# ==================================================
@router.get("/bookings", response_model=list[AdminBookingOut])
def all_bookings(db: Session = Depends(get_db)):
    return booking_service.list_all_bookings(db)


# ==================================================
# VERIFY PAYMENT + CONFIRM BOOKING
# ==================================================
@router.patch("/bookings/{booking_id}/verify", response_model=BookingActionOut)
def verify_booking(booking_id: int, db: Session = Depends(get_db)):
    booking = booking_service.verify_booking(db, booking_id)

    return BookingActionOut(
        message="Booking verified and confirmed",
        booking=BookingOut.model_validate(booking),
    )


# ==================================================
# CANCEL BOOKING (frees the slot)
# ==================================================
@router.patch("/bookings/{booking_id}/cancel", response_model=BookingActionOut)
def cancel_booking(booking_id: int, db: Session = Depends(get_db)):
    booking = booking_service.cancel_booking(db, booking_id)

    return BookingActionOut(
        message="Booking cancelled",
        booking=BookingOut.model_validate(booking),
    )
