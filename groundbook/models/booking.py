from sqlalchemy import Column, Date, DateTime, Float, ForeignKey, Index, Integer, String, func, text
from sqlalchemy.orm import relationship

from groundbook.db.session import Base
from groundbook.models.enums import BookingStatus, PaymentStatus

ACTIVE_BOOKING_CLAUSE = text("booking_status != 'cancelled'")


class Booking(Base):
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    ground_id = Column(Integer, ForeignKey("grounds.id"), nullable=False)

    date = Column(Date, nullable=False)
    start_time = Column(String, nullable=False)
    end_time = Column(String, nullable=False)

    total_amount = Column(Float, nullable=False)

    payment_status = Column(String, default=PaymentStatus.PENDING.value, nullable=False)
    booking_status = Column(String, default=BookingStatus.PENDING.value, nullable=False)

    payment_screenshot = Column(String, nullable=True)
    transaction_id = Column(String, nullable=True)

    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)

    user = relationship("User", back_populates="bookings")
    ground = relationship("Ground", back_populates="bookings")

    # Slot lock: one non-cancelled booking per (ground, date, start_time)
    __table_args__ = (
        Index(
            "uq_bookings_active_slot",
            "ground_id",
            "date",
            "start_time",
            unique=True,
            sqlite_where=ACTIVE_BOOKING_CLAUSE,
            postgresql_where=ACTIVE_BOOKING_CLAUSE,
        ),
    )
