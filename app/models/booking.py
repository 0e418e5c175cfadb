from sqlalchemy import Column, String
from app.db import Base, DocumentMixin


class Booking(DocumentMixin, Base):
    __tablename__ = "bookings"
    __lookups__ = {
        "guest.email": "guest_email",
        "host": "host",
        "transactionId": "transaction_id",
    }

    guest_email = Column(String, index=True, nullable=True)
    host = Column(String, index=True, nullable=True)
    transaction_id = Column(String, nullable=True)
