from datetime import datetime

from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from app.db.session import Base


class Vendor(Base):
    __tablename__ = "vendors"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)

    business_name = Column(String, nullable=False)
    business_address = Column(String, nullable=True)

    # Set by an admin; does not gate player bookings
    approved = Column(Boolean, default=False, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    user = relationship("User", back_populates="vendor")

    # Removing a vendor removes its venues
    venues = relationship(
        "Venue",
        back_populates="vendor",
        cascade="all, delete-orphan"
    )
