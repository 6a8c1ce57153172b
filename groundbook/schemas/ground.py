from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel


class GroundOut(BaseModel):
    id: int
    name: str
    address: str
    lat: Optional[float] = None
    lng: Optional[float] = None
    images: List[str] = []
    open_time: str
    close_time: str
    price_per_hour: float
    amenities: List[str] = []
    qr_code_image: Optional[str] = None
    upi_id: Optional[str] = None
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = {
        "from_attributes": True
    }


class GroundActionOut(BaseModel):
    message: str
    ground: GroundOut


class GroundStatusUpdate(BaseModel):
    is_active: bool


class SlotOut(BaseModel):
    start_time: str
    end_time: str
    available: bool
    price: float

    model_config = {"from_attributes": True}


class AvailabilityOut(BaseModel):
    slots: List[SlotOut]
