from datetime import datetime

from sqlalchemy import Column, Integer, String, Boolean, Float, DateTime, ForeignKey, JSON
from sqlalchemy.orm import relationship
from app.db.session import Base


class Venue(Base):
    __tablename__ = "venues"

    id = Column(Integer, primary_key=True, index=True)

    # Ownership
    vendor_id = Column(Integer, ForeignKey("vendors.id", ondelete="CASCADE"), nullable=False)

    name = Column(String, nullable=False)
    description = Column(String, nullable=True)
    address = Column(String, nullable=False)
    city = Column(String, nullable=False, index=True)
    game_type = Column(String, nullable=False, index=True)

    price_per_hour = Column(Float, nullable=False)

    facilities = Column(JSON, nullable=False, default=list)
    images = Column(JSON, nullable=False, default=list)   # image URL references

    rating = Column(Float, nullable=False, default=0.0)
    total_reviews = Column(Integer, nullable=False, default=0)

    # Soft moderation flag
    active = Column(Boolean, default=True, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    # RELATIONSHIPS -------------------------------------

    vendor = relationship("Vendor", back_populates="venues")

    slot_templates = relationship(
        "SlotTemplate",
        back_populates="venue",
        cascade="all, delete-orphan",
        order_by="SlotTemplate.start_time"
    )

    bookings = relationship("Booking", back_populates="venue", cascade="all, delete-orphan")
