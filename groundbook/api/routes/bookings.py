from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from sqlalchemy.orm import Session

from groundbook.core.auth_utils import Principal
from groundbook.core.dependencies import get_current_principal, get_db
from groundbook.schemas.booking import (
    BookingActionOut,
    BookingCreate,
    BookingCreatedOut,
    BookingOut,
    UserBookingOut,
)
from groundbook.services import bookings as booking_service
from groundbook.utils.storage import save_upload

router = APIRouter(prefix="/api/bookings", tags=["Bookings"])


# ---------------------------------------------------------------------
# CREATE BOOKING
# ---------------------------------------------------------------------
@router.post("", response_model=BookingCreatedOut, status_code=status.HTTP_201_CREATED)
def create_booking(
    data: BookingCreate,
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
):
    receipt = booking_service.create_booking(
        db,
        principal,
        data.ground_id,
        data.date,
        data.start_time,
        data.end_time,
    )

    return BookingCreatedOut(
        message="Booking created successfully",
        booking=BookingOut.model_validate(receipt.booking),
        upi_link=receipt.upi_link,
        qr_code=receipt.qr_code,
    )


# ---------------------------------------------------------------------
# USER: MY BOOKINGS
# ---------------------------------------------------------------------
@router.get("", response_model=list[UserBookingOut])
def my_bookings(
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
):
    return booking_service.list_user_bookings(db, principal.user_id)


# ---------------------------------------------------------------------
# UPLOAD PAYMENT CONFIRMATION
# ---------------------------------------------------------------------
@router.post("/{booking_id}/payment", response_model=BookingActionOut)
def upload_payment(
    booking_id: int,
    screenshot: UploadFile = File(...),
    transaction_id: Optional[str] = Form(None),
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
):
    # Ownership is checked before anything is written to storage
    booking_service.get_owned_booking(db, principal, booking_id)

    reference = save_upload(screenshot, folder="payments")
    booking = booking_service.submit_payment(
        db, principal, booking_id, reference, transaction_id
    )

    return BookingActionOut(
        message="Payment confirmation uploaded",
        booking=BookingOut.model_validate(booking),
    )
