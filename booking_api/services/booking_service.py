"""Booking creation and slot availability queries.

Every function takes the request's ``Session`` explicitly; the service keeps no
state of its own between calls.
"""

import logging
from datetime import date, time

from sqlalchemy import or_, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from booking_api.core.exceptions import PersistenceError, SlotUnavailable, SlotUpdateFailed, ValidationError
from booking_api.models.availability import Availability
from booking_api.models.booking import Booking

logger = logging.getLogger(__name__)

MISSING_FIELDS_MESSAGE = 'Missing required booking information.'
CREATE_FAILED_MESSAGE = 'Failed to create booking.'
SLOT_UPDATE_FAILED_MESSAGE = 'Booking created but failed to update slot availability.'
SLOT_TAKEN_MESSAGE = 'This slot is already booked.'
LIST_FAILED_MESSAGE = 'Failed to fetch bookings'
AVAILABILITY_FAILED_MESSAGE = 'Failed to check availability'


def _normalize(value):
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


def _slot_exists(db: Session, booking_date: date, booking_time: time) -> bool:
    return db.query(Availability.id).filter(
        Availability.available_date == booking_date,
        Availability.available_time == booking_time,
    ).first() is not None


def create_booking(
    db: Session,
    *,
    name: str | None,
    email: str | None,
    booking_date: date | None,
    booking_time: time | None,
    phone: str | None = None,
    business_type: str | None = None,
) -> Booking:
    """Record a booking and claim its slot in a single transaction.

    The slot is claimed with a conditional update (``is_booked`` must still be
    false, or NULL on tables created by hand). When no row is affected:

    * if the slot exists it was booked first by someone else; the transaction is
      rolled back and :class:`SlotUnavailable` is raised.
    * if there is no slot row at all, the booking is kept and
      :class:`SlotUpdateFailed` reports the partial success.
    """
    name = _normalize(name)
    email = _normalize(email)
    phone = _normalize(phone)
    business_type = _normalize(business_type)

    if name is None or email is None or booking_date is None or booking_time is None:
        raise ValidationError(MISSING_FIELDS_MESSAGE)

    booking = Booking(
        name=name,
        email=email,
        phone=phone,
        business_type=business_type,
        booking_date=booking_date,
        booking_time=booking_time,
    )

    try:
        db.add(booking)
        db.flush()

        claimed = db.execute(
            update(Availability)
            .where(
                Availability.available_date == booking_date,
                Availability.available_time == booking_time,
                or_(Availability.is_booked.is_(False), Availability.is_booked.is_(None)),
            )
            .values(is_booked=True)
            .execution_options(synchronize_session=False)
        ).rowcount

        if claimed == 0 and _slot_exists(db, booking_date, booking_time):
            db.rollback()
            logger.warning('Rejected booking for %s %s: slot already booked', booking_date, booking_time)
            raise SlotUnavailable(SLOT_TAKEN_MESSAGE)

        db.commit()
        db.refresh(booking)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception('Error inserting booking for %s %s', booking_date, booking_time)
        raise PersistenceError(CREATE_FAILED_MESSAGE) from exc

    if claimed == 0:
        logger.error(
            'Booking %s created but no availability slot exists for %s %s',
            booking.id,
            booking_date,
            booking_time,
        )
        raise SlotUpdateFailed(SLOT_UPDATE_FAILED_MESSAGE)

    logger.info('Booking %s created for %s %s', booking.id, booking_date, booking_time)
    return booking


def list_bookings(db: Session) -> list[Booking]:
    try:
        return db.query(Booking).all()
    except SQLAlchemyError as exc:
        logger.exception('Error fetching bookings')
        raise PersistenceError(LIST_FAILED_MESSAGE) from exc


def check_availability(db: Session, booking_date: date, booking_time: time) -> bool:
    # A slot with no row is treated as available.
    try:
        slot = db.query(Availability.is_booked).filter(
            Availability.available_date == booking_date,
            Availability.available_time == booking_time,
        ).first()
    except SQLAlchemyError as exc:
        logger.exception('Error checking availability for %s %s', booking_date, booking_time)
        raise PersistenceError(AVAILABILITY_FAILED_MESSAGE) from exc

    return not (slot is not None and slot.is_booked)
