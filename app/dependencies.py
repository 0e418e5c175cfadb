from fastapi import Depends, Request
from sqlalchemy.orm import Session

from app.db import Collection
from app.models.booking import Booking
from app.models.room import Room
from app.models.user import User
from app.utils.auth import TokenService
from app.utils.notifications import NotificationDispatcher
from app.utils.payments import PaymentGateway


def get_db(request: Request):
    """Provide a database session bound to the application's database."""
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()


def users_collection(db: Session = Depends(get_db)) -> Collection:
    return Collection(db, User)


def rooms_collection(db: Session = Depends(get_db)) -> Collection:
    return Collection(db, Room)


def bookings_collection(db: Session = Depends(get_db)) -> Collection:
    return Collection(db, Booking)


def get_tokens(request: Request) -> TokenService:
    return request.app.state.tokens


def get_payments(request: Request) -> PaymentGateway:
    return request.app.state.payments


def get_notifier(request: Request) -> NotificationDispatcher:
    return request.app.state.notifier
