from datetime import date, time

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, field_validator
from sqlalchemy.orm import Session

from booking_api.database import get_db
from booking_api.services import booking_service

router = APIRouter(tags=['bookings'])

BOOKING_CREATED_MESSAGE = 'Booking created successfully.'
SLOT_AVAILABLE_MESSAGE = 'Slot is available'
SLOT_BOOKED_MESSAGE = 'Slot is already booked'


class CreateBookingRequest(BaseModel):
    name: str | None = None
    email: str | None = None
    phone: str | None = None
    business_type: str | None = None
    booking_date: date | None = None
    booking_time: time | None = None

    @field_validator('booking_date', 'booking_time', mode='before')
    @classmethod
    def blank_as_missing(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


class BookingCreatedResponse(BaseModel):
    message: str
    id: int


class BookingResponse(BaseModel):
    id: int
    name: str
    email: str
    phone: str | None = None
    business_type: str | None = None
    booking_date: date
    booking_time: time

    class Config:
        from_attributes = True


class AvailabilityResponse(BaseModel):
    available: bool
    message: str


@router.post('/book', response_model=BookingCreatedResponse)
def create_booking(data: CreateBookingRequest, db: Session = Depends(get_db)):
    booking = booking_service.create_booking(
        db,
        name=data.name,
        email=data.email,
        phone=data.phone,
        business_type=data.business_type,
        booking_date=data.booking_date,
        booking_time=data.booking_time,
    )

    return BookingCreatedResponse(message=BOOKING_CREATED_MESSAGE, id=booking.id)


@router.get('/bookings', response_model=list[BookingResponse])
def list_bookings(db: Session = Depends(get_db)):
    return booking_service.list_bookings(db)


@router.get('/availability', response_model=AvailabilityResponse)
def check_availability(
    booking_date: date = Query(...),
    booking_time: time = Query(...),
    db: Session = Depends(get_db),
):
    if booking_service.check_availability(db, booking_date, booking_time):
        return AvailabilityResponse(available=True, message=SLOT_AVAILABLE_MESSAGE)

    return AvailabilityResponse(available=False, message=SLOT_BOOKED_MESSAGE)
