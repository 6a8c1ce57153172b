from dataclasses import asdict
from datetime import date

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from groundbook.core.dependencies import get_db
from groundbook.core.exceptions import ValidationError
from groundbook.schemas.ground import AvailabilityOut, GroundOut
from groundbook.services.availability import active_bookings_for, compute_availability
from groundbook.services.grounds import get_ground, list_active_grounds

router = APIRouter(prefix="/api/grounds", tags=["Grounds"])


# =====================================================================
# LIST ACTIVE GROUNDS
# =====================================================================
@router.get("", response_model=list[GroundOut])
def list_grounds(db: Session = Depends(get_db)):
    return list_active_grounds(db)


# =====================================================================
# GROUND DETAILS
# =====================================================================
@router.get("/{ground_id}", response_model=GroundOut)
def ground_details(ground_id: int, db: Session = Depends(get_db)):
    return get_ground(db, ground_id)


# =====================================================================
# SLOT AVAILABILITY FOR A DATE
# =====================================================================
@router.get("/{ground_id}/availability/{date_str}", response_model=AvailabilityOut)
def availability(ground_id: int, date_str: str, db: Session = Depends(get_db)):
    try:
        day = date.fromisoformat(date_str)
    except ValueError:
        raise ValidationError("Invalid date format (YYYY-MM-DD)")

    ground = get_ground(db, ground_id)
    slots = compute_availability(ground, day, active_bookings_for(db, ground_id, day))

    return {"slots": [asdict(slot) for slot in slots]}
