from datetime import datetime

from sqlalchemy import Column, Integer, String, Boolean, Date, Time, Float, DateTime, ForeignKey, Index, text
from sqlalchemy.orm import relationship
from app.db.session import Base
from app.models.enums import BookingStatus, PaymentStatus, PaymentMethod


class Booking(Base):
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    venue_id = Column(Integer, ForeignKey("venues.id", ondelete="CASCADE"), nullable=False, index=True)

    booking_date = Column(Date, nullable=False)
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)

    total_amount = Column(Float, nullable=False)

    booking_status = Column(String, nullable=False, default=BookingStatus.CONFIRMED.value)  # confirmed | cancelled

    # PAYMENT FIELDS
    payment_method = Column(String, nullable=False, default=PaymentMethod.QR_CODE.value)
    payment_status = Column(String, nullable=False, default=PaymentStatus.PENDING.value)  # pending | paid | failed | cancelled

    # "paid" is self-reported by the player; nothing ever verifies it
    payment_verified = Column(Boolean, nullable=False, default=False)
    paid_at = Column(DateTime, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    user = relationship("User", back_populates="bookings")
    venue = relationship("Venue", back_populates="bookings")

    __table_args__ = (
        # One confirmed booking per (venue, date, start_time)
        Index(
            "uq_confirmed_booking_slot",
            "venue_id",
            "booking_date",
            "start_time",
            unique=True,
            sqlite_where=text("booking_status = 'confirmed'"),
            postgresql_where=text("booking_status = 'confirmed'"),
        ),
        Index("ix_bookings_venue_date", "venue_id", "booking_date"),
    )
