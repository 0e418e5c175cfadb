from sqlalchemy import Column, String
from app.db import Base, DocumentMixin


class Room(DocumentMixin, Base):
    __tablename__ = "rooms"
    __lookups__ = {"host.email": "host_email"}

    host_email = Column(String, index=True, nullable=True)
