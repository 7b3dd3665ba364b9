import logging

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from sqlalchemy.exc import SQLAlchemyError

from booking_api.core import config
from booking_api.core.exceptions import BookingError
from booking_api.database import check_database_connection, engine, ensure_booking_schema
from booking_api.models import availability, booking
from booking_api.routes import booking_routes

INVALID_REQUEST_MESSAGE = 'Invalid booking information.'

logging.basicConfig(level=config.LOG_LEVEL)

app = FastAPI(title='Booking API')

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=['*'],
    allow_headers=['*'],
)

logger = logging.getLogger(__name__)


@app.exception_handler(BookingError)
async def handle_booking_error(request: Request, exc: BookingError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={'error': exc.message})


@app.exception_handler(RequestValidationError)
async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info('Rejected malformed request to %s: %s', request.url.path, exc.errors())
    return JSONResponse(status_code=400, content={'error': INVALID_REQUEST_MESSAGE})


@app.on_event('startup')
def initialize_database() -> None:
    config.validate_runtime_config()
    try:
        check_database_connection()
        booking.Base.metadata.create_all(bind=engine)
        availability.Base.metadata.create_all(bind=engine)
        ensure_booking_schema()
    except SQLAlchemyError:
        logger.exception(
            'Database connection failed. Check DATABASE_URL or DB_HOST, DB_USER, DB_PASSWORD and DB_NAME.'
        )
        raise
    logger.info('Connected to the database successfully!')


@app.get('/', response_class=PlainTextResponse)
def root():
    return 'Booking API is running!'


app.include_router(booking_routes.router, prefix='/api')


if __name__ == '__main__':
    uvicorn.run('booking_api.main:app', host=config.HOST, port=config.PORT)
