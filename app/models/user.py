from sqlalchemy import Column, String
from app.db import Base, DocumentMixin


class User(DocumentMixin, Base):
    __tablename__ = "users"
    __lookups__ = {"email": "email"}

    email = Column(String, unique=True, index=True, nullable=False)
