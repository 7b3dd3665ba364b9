from threading import Lock

from sqlalchemy import create_engine, inspect, text
from sqlalchemy.orm import declarative_base, sessionmaker

from booking_api.core import config


engine = create_engine(config.get_database_url(), echo=config.DB_ECHO, pool_pre_ping=True)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)

Base = declarative_base()

_schema_lock = Lock()
_booking_schema_checked = False


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def check_database_connection() -> None:
    with engine.connect() as connection:
        connection.execute(text('SELECT 1'))


def _index_names(inspector, table_name: str) -> set[str]:
    names = {index['name'] for index in inspector.get_indexes(table_name)}
    names.update(constraint['name'] for constraint in inspector.get_unique_constraints(table_name))
    return names


def ensure_booking_schema() -> None:
    """Bring tables created before the current models up to date.

    Older deployments created ``bookings`` and ``availability`` by hand, without
    the optional contact columns or the slot indexes.
    """
    global _booking_schema_checked

    if _booking_schema_checked:
        return

    with _schema_lock:
        if _booking_schema_checked:
            return

        inspector = inspect(engine)
        table_names = inspector.get_table_names()
        statements: list[str] = []

        if 'bookings' in table_names:
            existing_columns = {column['name'] for column in inspector.get_columns('bookings')}
            migration_steps = [
                ('phone', 'ALTER TABLE bookings ADD COLUMN phone VARCHAR(50)'),
                ('business_type', 'ALTER TABLE bookings ADD COLUMN business_type VARCHAR(255)'),
            ]
            statements.extend(
                statement for column_name, statement in migration_steps if column_name not in existing_columns
            )
            if 'idx_bookings_slot' not in _index_names(inspector, 'bookings'):
                statements.append('CREATE INDEX idx_bookings_slot ON bookings (booking_date, booking_time)')

        if 'availability' in table_names:
            if 'uq_availability_slot' not in _index_names(inspector, 'availability'):
                statements.append(
                    'CREATE UNIQUE INDEX uq_availability_slot ON availability (available_date, available_time)'
                )

        if statements:
            with engine.begin() as connection:
                for statement in statements:
                    connection.execute(text(statement))

        _booking_schema_checked = True
