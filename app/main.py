import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from app.config import Settings, get_settings
from app.db import Database
from app.routers import auth, bookings, payments, rooms, users
from app.utils.auth import TokenService
from app.utils.errors import validation_exception_handler
from app.utils.notifications import NotificationDispatcher, SmtpMailer
from app.utils.payments import PaymentGateway


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Set up the collection tables and check the connection; dispose the engine on shutdown."""
    database: Database = app.state.database
    database.init()
    database.ping()
    logger.info("Pinged the database; connection is ready")
    yield
    database.dispose()


def create_app(
    settings: Optional[Settings] = None,
    database: Optional[Database] = None,
    payment_gateway: Optional[PaymentGateway] = None,
    notifier: Optional[NotificationDispatcher] = None,
) -> FastAPI:
    settings = settings or get_settings()
    logging.basicConfig(level=settings.log_level.upper())

    app = FastAPI(
        lifespan=lifespan,
        title=settings.app_title,
        description="Backend for a short-term room rental marketplace.",
        version=settings.app_version,
    )
    app.state.settings = settings
    app.state.database = database or Database(settings.database_url)
    app.state.tokens = TokenService.from_settings(settings)
    app.state.payments = payment_gateway or PaymentGateway.from_settings(settings)
    app.state.notifier = notifier or NotificationDispatcher(SmtpMailer.from_settings(settings))

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    @app.get("/", response_class=PlainTextResponse, tags=["health"])
    def root():
        return "Room rental server is running.."

    app.include_router(auth.router)
    app.include_router(users.router)
    app.include_router(rooms.router)
    app.include_router(bookings.router)
    app.include_router(payments.router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=app.state.settings.port)
