from sqlalchemy import JSON, Boolean, Column, DateTime, Float, Integer, String, func
from sqlalchemy.orm import relationship

from groundbook.db.session import Base


class Ground(Base):
    __tablename__ = "grounds"

    id = Column(Integer, primary_key=True, index=True)

    name = Column(String, nullable=False)
    address = Column(String, nullable=False)
    lat = Column(Float, nullable=True)
    lng = Column(Float, nullable=True)

    # Stored upload references (local filenames or Cloudinary URLs)
    images = Column(JSON, nullable=False, default=list)

    # Operating hours, "HH:MM"
    open_time = Column(String, nullable=False)
    close_time = Column(String, nullable=False)

    price_per_hour = Column(Float, nullable=False)
    amenities = Column(JSON, nullable=False, default=list)

    qr_code_image = Column(String, nullable=True)
    upi_id = Column(String, nullable=True)

    is_active = Column(Boolean, default=True, nullable=False)

    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)

    bookings = relationship("Booking", back_populates="ground")
