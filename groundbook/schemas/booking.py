import datetime as dt
from typing import Optional

from pydantic import BaseModel


class BookingCreate(BaseModel):
    ground_id: int
    date: dt.date
    start_time: str
    end_time: str


class GroundSummary(BaseModel):
    id: int
    name: str
    address: str

    model_config = {"from_attributes": True}


class UserSummary(BaseModel):
    id: int
    name: str
    email: str
    phone: str

    model_config = {"from_attributes": True}


class BookingOut(BaseModel):
    id: int
    user_id: int
    ground_id: int
    date: dt.date
    start_time: str
    end_time: str
    total_amount: float
    payment_status: str
    booking_status: str
    payment_screenshot: Optional[str] = None
    transaction_id: Optional[str] = None
    created_at: dt.datetime
    updated_at: dt.datetime

    model_config = {"from_attributes": True}


class UserBookingOut(BookingOut):
    ground: Optional[GroundSummary] = None


class AdminBookingOut(UserBookingOut):
    user: Optional[UserSummary] = None


class BookingCreatedOut(BaseModel):
    message: str
    booking: BookingOut
    upi_link: str
    qr_code: str


class BookingActionOut(BaseModel):
    message: str
    booking: BookingOut
