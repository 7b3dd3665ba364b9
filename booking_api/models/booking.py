"""Booking model definitions."""

from sqlalchemy import Column, Date, Index, Integer, String, Time
from booking_api.database import Base


class Booking(Base):
    """A client's claim on an availability slot."""
    __tablename__ = "bookings"
    __table_args__ = (
        Index("idx_bookings_slot", "booking_date", "booking_time"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    phone = Column(String(50))
    business_type = Column(String(255))
    # Refers to availability by (date, time); no foreign key is declared.
    booking_date = Column(Date, nullable=False)
    booking_time = Column(Time, nullable=False)
