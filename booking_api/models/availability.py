"""Availability model definitions."""

from sqlalchemy import Boolean, Column, Date, Integer, Time, UniqueConstraint
from booking_api.database import Base


class Availability(Base):
    """Represents a bookable slot."""
    __tablename__ = "availability"
    __table_args__ = (
        UniqueConstraint("available_date", "available_time", name="uq_availability_slot"),
    )

    id = Column(Integer, primary_key=True)
    available_date = Column(Date, nullable=False)
    available_time = Column(Time, nullable=False)
    is_booked = Column(Boolean, nullable=False, default=False)
