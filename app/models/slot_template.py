from sqlalchemy import Column, Integer, Boolean, Time, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from app.db.session import Base


class SlotTemplate(Base):
    __tablename__ = "slot_templates"

    id = Column(Integer, primary_key=True, index=True)
    venue_id = Column(Integer, ForeignKey("venues.id", ondelete="CASCADE"), nullable=False, index=True)

    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)

    # Static default only; per-date availability comes from bookings
    is_available = Column(Boolean, default=True, nullable=False)

    venue = relationship("Venue", back_populates="slot_templates")

    __table_args__ = (UniqueConstraint("venue_id", "start_time", name="uq_venue_slot_start"),)
