import re
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from fastapi import HTTPException, status
from pydantic import EmailStr, TypeAdapter, ValidationError


DOCUMENT_ID_RE = re.compile(r"^[0-9a-f]{32}$")

# Same normalization stored documents get from `EmailStr` fields.
email_adapter = TypeAdapter(EmailStr)


def validate_document_id(value: str) -> str:
    if not DOCUMENT_ID_RE.match(value):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid document id: {value}",
        )
    return value


def normalize_email(value: Optional[str]) -> Optional[str]:
    """Return the stored form of ``value``, or None if it is not an email."""
    if not value:
        return None
    try:
        return email_adapter.validate_python(value)
    except ValidationError:
        return None


def validate_email_param(value: Optional[str], name: str = "email") -> str:
    if not value:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"{name} is required")
    email = normalize_email(value)
    if email is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Invalid {name}: {value}")
    return email


def validate_price(value: Optional[Any]) -> Decimal:
    """Parse a price of at least one cent, rejecting booleans and junk."""
    if value is None or isinstance(value, bool) or str(value).strip() == "":
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Price is required")
    try:
        price = Decimal(str(value).strip())
    except InvalidOperation:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Price must be numeric")
    if not price.is_finite() or price <= 0:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Price must be a positive number")
    if price * 100 < 1:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Price must be at least 0.01")
    return price
