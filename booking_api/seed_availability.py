"""Create unbooked availability slots.

Slots are never created through the HTTP API; run this against the configured
database instead.

Usage:
    python -m booking_api.seed_availability 2026-11-02 14 --open 09:00 --close 17:00 --step 30
"""
import argparse
import sys
from datetime import date, datetime, time, timedelta

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from booking_api.database import Base, SessionLocal, engine
from booking_api.models.availability import Availability

OPEN_TIME = time(9, 0)
CLOSE_TIME = time(17, 0)
SLOT_INCREMENT_MINUTES = 30


def generate_slots(
    start_date: date,
    days: int,
    open_time: time = OPEN_TIME,
    close_time: time = CLOSE_TIME,
    step_minutes: int = SLOT_INCREMENT_MINUTES,
    weekdays_only: bool = False,
) -> list[tuple[date, time]]:
    """Return every (date, time) start in ``[open_time, close_time)`` for ``days`` days."""
    if step_minutes <= 0:
        raise ValueError('step_minutes must be positive.')

    slots: list[tuple[date, time]] = []
    for offset in range(days):
        current_day = start_date + timedelta(days=offset)
        if weekdays_only and current_day.weekday() >= 5:
            continue

        current = datetime.combine(current_day, open_time)
        day_close = datetime.combine(current_day, close_time)
        while current < day_close:
            slots.append((current_day, current.time()))
            current += timedelta(minutes=step_minutes)

    return slots


def seed_slots(db: Session, slots: list[tuple[date, time]]) -> int:
    """Insert the slots that do not exist yet and return how many were added."""
    if not slots:
        return 0

    dates = sorted({slot_date for slot_date, _ in slots})
    existing = {
        (row.available_date, row.available_time)
        for row in db.query(Availability.available_date, Availability.available_time)
        .filter(Availability.available_date.in_(dates))
        .all()
    }

    created = 0
    for slot_date, slot_time in slots:
        if (slot_date, slot_time) in existing:
            continue
        db.add(Availability(available_date=slot_date, available_time=slot_time, is_booked=False))
        existing.add((slot_date, slot_time))
        created += 1

    db.commit()
    return created


def _parse_time(value: str) -> time:
    return time.fromisoformat(value)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument('start_date', type=date.fromisoformat)
    parser.add_argument('days', type=int)
    parser.add_argument('--open', dest='open_time', type=_parse_time, default=OPEN_TIME)
    parser.add_argument('--close', dest='close_time', type=_parse_time, default=CLOSE_TIME)
    parser.add_argument('--step', dest='step_minutes', type=int, default=SLOT_INCREMENT_MINUTES)
    parser.add_argument('--weekdays-only', action='store_true')
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    slots = generate_slots(
        args.start_date,
        args.days,
        open_time=args.open_time,
        close_time=args.close_time,
        step_minutes=args.step_minutes,
        weekdays_only=args.weekdays_only,
    )

    db = SessionLocal()
    try:
        Base.metadata.create_all(bind=engine, tables=[Availability.__table__])
        created = seed_slots(db, slots)
    except SQLAlchemyError as exc:
        db.rollback()
        print(f'Seeding failed: {exc}', file=sys.stderr)
        sys.exit(1)
    finally:
        db.close()

    print(f'Created {created} of {len(slots)} slots.')


if __name__ == '__main__':
    main()
